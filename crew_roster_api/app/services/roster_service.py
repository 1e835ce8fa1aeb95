"""
Service layer for rowers and crews.

``RosterService`` owns two in-memory collections (rowers and crews)
and the counters used to number them.  It is the only place where
records are created or memberships changed, and it enforces the rules
that keep the two collections consistent:

* ids are handed out from monotonically increasing counters and are
  never reused, even after a failed creation;
* a crew's ``rower_ids`` has no duplicates and keeps assignment order;
* adding a member requires the rower to exist, removing one does not.

A rower may sit in several crews at once.  Exclusive membership is a
concern of the client that drags rowers between crews, not of the
service.

Every operation validates its input before touching state and runs
its mutation under one lock, so callers never see a partially applied
change and concurrent creations never share an id.  Records handed
out are copies; changing them does not affect the stored data.
"""

from __future__ import annotations

import threading
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from crew_roster_api.app.core.errors import InvalidInput, NotFound, describe_validation_errors
from crew_roster_api.app.schemas.crew import Crew, CrewCreate, CrewSummary
from crew_roster_api.app.schemas.rower import Rower, RowerCreate, RowerSummary
from crew_roster_api.app.services.photo_store import PhotoStore, PhotoUpload

SEED_ROWER = Rower(
    id=1,
    name="John Doe",
    height=190,
    weight=85,
    two_k_time="6:30",
    is_ill=False,
    photo_url="",
)
SEED_CREW = Crew(id=1, name="Men's 8+", rower_ids=[1])

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse(model: Type[ModelT], data: Union[ModelT, Mapping[str, Any]]) -> ModelT:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise InvalidInput(describe_validation_errors(exc.errors())) from exc


class RosterService:
    """In-memory store of rowers and crews."""

    def __init__(self, photo_store: Optional[PhotoStore] = None) -> None:
        self._photo_store = photo_store
        self._lock = threading.RLock()
        self._rowers: dict[int, Rower] = {}
        self._crews: dict[int, Crew] = {}
        self._next_rower_id = 1
        self._next_crew_id = 1
        self._seed()

    # ------------------------------------------------------------------
    # Rowers
    # ------------------------------------------------------------------
    async def list_rowers(self) -> List[RowerSummary]:
        with self._lock:
            return [rower.summary() for rower in self._rowers.values()]

    async def get_rower(self, rower_id: int) -> Rower:
        with self._lock:
            return self._require_rower(rower_id).model_copy(deep=True)

    async def create_rower(
        self,
        data: Union[RowerCreate, Mapping[str, Any]],
        photo: Optional[PhotoUpload] = None,
    ) -> Rower:
        """Create a rower and return the stored record.

        ``data`` may be a ``RowerCreate`` or a plain mapping using either
        the wire names (``twoKTime``) or attribute names (``two_k_time``).
        The photo, if any, is stored only after the input has been
        validated and before an id is allocated, so a rejected photo
        leaves no trace in the roster.
        """
        rower_in = _parse(RowerCreate, data)

        photo_url = ""
        if photo is not None:
            if self._photo_store is None:
                raise InvalidInput("Photo uploads are not enabled")
            photo_url = await self._photo_store.save(photo)

        with self._lock:
            rower = Rower(
                id=self._next_rower_id,
                name=rower_in.name,
                height=rower_in.height,
                weight=rower_in.weight,
                two_k_time=rower_in.two_k_time,
                is_ill=rower_in.is_ill,
                photo_url=photo_url,
            )
            self._next_rower_id += 1
            self._rowers[rower.id] = rower
            return rower.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Crews
    # ------------------------------------------------------------------
    async def list_crews(self) -> List[CrewSummary]:
        with self._lock:
            return [crew.summary() for crew in self._crews.values()]

    async def get_crew(self, crew_id: int) -> Crew:
        with self._lock:
            return self._require_crew(crew_id).model_copy(deep=True)

    async def create_crew(self, data: Union[CrewCreate, Mapping[str, Any]]) -> Crew:
        crew_in = _parse(CrewCreate, data)
        with self._lock:
            crew = Crew(id=self._next_crew_id, name=crew_in.name, rower_ids=[])
            self._next_crew_id += 1
            self._crews[crew.id] = crew
            return crew.model_copy(deep=True)

    async def add_rower_to_crew(self, crew_id: int, rower_id: int) -> Crew:
        """Append ``rower_id`` to the crew unless it is already a member."""
        with self._lock:
            crew = self._require_crew(crew_id)
            self._require_rower(rower_id)
            if rower_id not in crew.rower_ids:
                crew.rower_ids.append(rower_id)
            return crew.model_copy(deep=True)

    async def remove_rower_from_crew(self, crew_id: int, rower_id: int) -> Crew:
        """Drop ``rower_id`` from the crew.

        Only the crew has to exist; removing an id that is not a member
        (or not a rower at all) leaves the crew unchanged.
        """
        with self._lock:
            crew = self._require_crew(crew_id)
            crew.rower_ids = [member for member in crew.rower_ids if member != rower_id]
            return crew.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Support
    # ------------------------------------------------------------------
    async def reset_to_seed(self) -> None:
        """Discard all data and restore the seeded rower and crew."""
        self._seed()

    def _seed(self) -> None:
        with self._lock:
            self._rowers = {SEED_ROWER.id: SEED_ROWER.model_copy(deep=True)}
            self._crews = {SEED_CREW.id: SEED_CREW.model_copy(deep=True)}
            self._next_rower_id = 2
            self._next_crew_id = 2

    def _require_rower(self, rower_id: int) -> Rower:
        rower = self._rowers.get(rower_id)
        if rower is None:
            raise NotFound("Rower not found")
        return rower

    def _require_crew(self, crew_id: int) -> Crew:
        crew = self._crews.get(crew_id)
        if crew is None:
            raise NotFound("Crew not found")
        return crew
