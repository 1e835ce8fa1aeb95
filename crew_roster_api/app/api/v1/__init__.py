"""
Version 1 of the roster API.

The routes are served without a version prefix, matching the paths
used by the browser client (``/rowers``, ``/crews``).
"""
