"""
Top-level package for the Crew Roster API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
