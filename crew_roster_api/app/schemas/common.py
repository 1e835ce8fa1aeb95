"""Validators shared by the rower and crew schemas."""

from typing import Any, Union

NAME_REQUIRED = "Name is required"

# ``int`` first so whole numbers keep their JSON form (``180``, not ``180.0``).
Number = Union[int, float]


def clean_name(value: Any) -> str:
    """Trim a display name and reject it when nothing is left."""
    if value is None:
        raise ValueError(NAME_REQUIRED)
    if not isinstance(value, str):
        raise ValueError("Name must be a string")
    value = value.strip()
    if not value:
        raise ValueError(NAME_REQUIRED)
    return value


def reject_bool(value: Any, field: str) -> Any:
    """Refuse ``True``/``False`` where a number is expected.

    ``bool`` is a subclass of ``int``, so lax parsing would otherwise
    accept it as ``1`` or ``0``.
    """
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number, not a boolean")
    return value
