"""
Pydantic schema definitions for API payloads.

Request schemas (``RowerCreate``, ``CrewCreate``, ``MembershipChange``)
double as the roster service's input parsing stage.  Response schemas
(``Rower``, ``Crew`` and their summaries) are also the records the
service stores.
"""

from .crew import Crew, CrewCreate, CrewSummary, MembershipChange
from .rower import Rower, RowerCreate, RowerSummary

__all__ = [
    "Crew",
    "CrewCreate",
    "CrewSummary",
    "MembershipChange",
    "Rower",
    "RowerCreate",
    "RowerSummary",
]
