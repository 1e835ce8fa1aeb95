"""
Top-level router for version 1 of the API.

Aggregates the domain routers.  The test support router is not
included here; ``create_app`` adds it only in the test environment.
"""

from fastapi import APIRouter

from .endpoints import crews, rowers

router = APIRouter()

router.include_router(rowers.router, prefix="/rowers", tags=["rowers"])
router.include_router(crews.router, prefix="/crews", tags=["crews"])
