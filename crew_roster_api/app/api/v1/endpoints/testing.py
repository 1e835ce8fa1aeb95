"""
Test support endpoints.

Only mounted when ``ENVIRONMENT=test`` (see ``create_app``).
"""

from typing import Dict

from fastapi import APIRouter, Depends

from crew_roster_api.app.api.deps import get_roster_service
from crew_roster_api.app.services.roster_service import RosterService

router = APIRouter()


@router.post("/reset")
async def reset(service: RosterService = Depends(get_roster_service)) -> Dict[str, str]:
    """Restore the seeded rower and crew and restart id numbering at 2."""
    await service.reset_to_seed()
    return {"message": "Test data reset"}
