"""
Endpoint subpackage for API v1.

Each module defines an ``APIRouter`` for one domain (rowers, crews,
test support).  They are aggregated in ``router.py``.
"""
