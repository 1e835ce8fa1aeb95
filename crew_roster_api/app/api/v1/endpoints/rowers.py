"""
Rower endpoints.

``POST /rowers`` accepts either a multipart/urlencoded form (the
browser client sends a form so it can attach a photo) or a JSON
object.  Both are parsed by ``RowerCreate`` inside the service, so a
form value of ``"180"`` and a JSON value of ``180`` are equivalent.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request, status
from starlette.datastructures import UploadFile

from crew_roster_api.app.api.deps import get_roster_service
from crew_roster_api.app.core.errors import InvalidInput
from crew_roster_api.app.schemas.rower import Rower, RowerSummary
from crew_roster_api.app.services.photo_store import PhotoUpload, photo_upload_or_none
from crew_roster_api.app.services.roster_service import RosterService

router = APIRouter()

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@router.get("", response_model=List[RowerSummary])
async def list_rowers(service: RosterService = Depends(get_roster_service)) -> List[RowerSummary]:
    """Return every rower as ``{id, name}`` in creation order."""
    return await service.list_rowers()


@router.get("/{rower_id}", response_model=Rower)
async def get_rower(rower_id: int, service: RosterService = Depends(get_roster_service)) -> Rower:
    """Return the full record of one rower, or 404."""
    return await service.get_rower(rower_id)


@router.post("", response_model=Rower, status_code=status.HTTP_201_CREATED)
async def create_rower(request: Request, service: RosterService = Depends(get_roster_service)) -> Rower:
    """Create a rower, optionally with a JPEG or PNG ``photo`` (form only)."""
    content_type = request.headers.get("content-type", "").lower()
    photo: Optional[PhotoUpload] = None
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        data: Dict[str, Any] = {
            key: value for key, value in form.items() if key != "photo" and not isinstance(value, UploadFile)
        }
        upload = form.get("photo")
        if isinstance(upload, UploadFile):
            # One byte past the limit is enough for the store to reject it
            limit = request.app.state.settings.max_photo_bytes
            photo = photo_upload_or_none(
                await upload.read(limit + 1),
                upload.content_type or "",
                upload.filename or "",
            )
    else:
        try:
            data = await request.json()
        except ValueError:
            raise InvalidInput("Request body must be a JSON object or form data")
        if not isinstance(data, dict):
            raise InvalidInput("Request body must be a JSON object or form data")
    return await service.create_rower(data, photo=photo)
