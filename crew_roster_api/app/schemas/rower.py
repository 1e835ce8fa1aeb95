"""
Pydantic schemas for rowers.

``RowerCreate`` is the parsing stage for new rowers.  It accepts typed
JSON values as well as the string encodings produced by HTML forms,
so ``"180"`` and ``180`` both become ``180`` and ``"true"`` becomes
``True``.  Malformed values, booleans given for numbers and
non-finite numbers are rejected instead of being silently converted.

Attributes are snake_case in Python and camelCase on the wire
(``twoKTime``, ``isIll``, ``photoUrl``).
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from .common import Number, clean_name, reject_bool


class RowerCreate(BaseModel):
    """Schema for creating a rower."""

    name: str = Field("", validate_default=True, examples=["Jane Smith"])
    height: Optional[Number] = Field(None, description="Height in centimetres")
    weight: Optional[Number] = Field(None, description="Weight in kilograms")
    two_k_time: str = Field("", alias="twoKTime", examples=["6:30"])
    is_ill: bool = Field(False, alias="isIll")

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        return clean_name(v)

    @field_validator("height", "weight", mode="before")
    @classmethod
    def blank_number_is_none(cls, v: Any, info: ValidationInfo) -> Any:
        # Empty form inputs arrive as "" rather than being omitted
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
        return reject_bool(v, info.field_name)

    @field_validator("height", "weight")
    @classmethod
    def finite_number(cls, v: Optional[Number], info: ValidationInfo) -> Optional[Number]:
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError(f"{info.field_name} must be a finite number")
        return v

    @field_validator("two_k_time", mode="before")
    @classmethod
    def none_time_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("is_ill", mode="before")
    @classmethod
    def parse_is_ill(cls, v: Any) -> Any:
        if v is None:
            return False
        if isinstance(v, str):
            v = v.strip().lower()
            if not v:
                return False
        return v


class RowerSummary(BaseModel):
    """Minimal rower representation used in listings."""

    id: int
    name: str


class Rower(BaseModel):
    """Full rower record."""

    id: int
    name: str
    height: Optional[Number] = None
    weight: Optional[Number] = None
    two_k_time: str = Field("", alias="twoKTime")
    is_ill: bool = Field(False, alias="isIll")
    photo_url: str = Field("", alias="photoUrl")

    model_config = {
        "populate_by_name": True,
    }

    def summary(self) -> RowerSummary:
        return RowerSummary(id=self.id, name=self.name)
