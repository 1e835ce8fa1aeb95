"""
Crew endpoints.

Membership changes are ``POST`` requests on the crew with a
``{"rowerId": <id>}`` body.  Adding is idempotent and requires the
rower to exist; removing only requires the crew to exist.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from crew_roster_api.app.api.deps import get_roster_service
from crew_roster_api.app.schemas.crew import Crew, CrewCreate, CrewSummary, MembershipChange
from crew_roster_api.app.services.roster_service import RosterService

router = APIRouter()


@router.get("", response_model=List[CrewSummary])
async def list_crews(service: RosterService = Depends(get_roster_service)) -> List[CrewSummary]:
    """Return every crew as ``{id, name}`` in creation order."""
    return await service.list_crews()


@router.get("/{crew_id}", response_model=Crew)
async def get_crew(crew_id: int, service: RosterService = Depends(get_roster_service)) -> Crew:
    return await service.get_crew(crew_id)


@router.post("", response_model=Crew, status_code=status.HTTP_201_CREATED)
async def create_crew(crew_in: CrewCreate, service: RosterService = Depends(get_roster_service)) -> Crew:
    return await service.create_crew(crew_in)


@router.post("/{crew_id}/addRower", response_model=Crew)
async def add_rower(
    crew_id: int,
    body: MembershipChange,
    service: RosterService = Depends(get_roster_service),
) -> Crew:
    """Assign a rower to the crew.  404 if either the crew or the rower is missing."""
    return await service.add_rower_to_crew(crew_id, body.rower_id)


@router.post("/{crew_id}/removeRower", response_model=Crew)
async def remove_rower(
    crew_id: int,
    body: MembershipChange,
    service: RosterService = Depends(get_roster_service),
) -> Crew:
    """Unassign a rower from the crew.  Unknown members are ignored."""
    return await service.remove_rower_from_crew(crew_id, body.rower_id)
