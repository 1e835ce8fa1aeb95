"""
Pydantic schemas for crews and crew membership changes.
"""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from .common import clean_name, reject_bool


class CrewCreate(BaseModel):
    """Schema for creating a crew."""

    name: str = Field("", validate_default=True, examples=["Women's 4x"])

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        return clean_name(v)


class MembershipChange(BaseModel):
    """Body of the ``addRower`` and ``removeRower`` requests."""

    rower_id: int = Field(..., alias="rowerId")

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("rower_id", mode="before")
    @classmethod
    def validate_rower_id(cls, v: Any) -> Any:
        return reject_bool(v, "rowerId")


class CrewSummary(BaseModel):
    """Minimal crew representation used in listings."""

    id: int
    name: str


class Crew(BaseModel):
    """Full crew record.  ``rower_ids`` keeps assignment order."""

    id: int
    name: str
    rower_ids: List[int] = Field(default_factory=list, alias="rowerIds")

    model_config = {
        "populate_by_name": True,
    }

    def summary(self) -> CrewSummary:
        return CrewSummary(id=self.id, name=self.name)
