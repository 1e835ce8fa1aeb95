"""
Dependency injection for shared resources.

Each application instance owns exactly one ``RosterService`` (stored on
``app.state`` by ``create_app``).  Routes obtain it through
``get_roster_service`` so tests can swap it via
``app.dependency_overrides``.
"""
from __future__ import annotations

from fastapi import Request

from crew_roster_api.app.services.roster_service import RosterService


def get_roster_service(request: Request) -> RosterService:
    return request.app.state.roster_service
