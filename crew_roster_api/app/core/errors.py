"""
Domain errors raised by the roster service and its collaborators.

Every error carries a human readable ``message`` and a ``kind`` that
is echoed to API clients.  The HTTP layer maps ``InvalidInput`` to
400 and ``NotFound`` to 404; anything that is not a ``RosterError``
is treated as an internal fault.
"""


class RosterError(Exception):
    """Base class for expected, client-facing failures."""

    kind = "RosterError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(RosterError):
    """A required field is missing or blank, or a value is malformed."""

    kind = "InvalidInput"


class UnsupportedFormat(InvalidInput):
    """An uploaded photo is not one of the accepted image formats."""


class TooLarge(InvalidInput):
    """An uploaded photo exceeds the configured size limit."""


class NotFound(RosterError):
    """A referenced rower or crew does not exist."""

    kind = "NotFound"


def describe_validation_errors(errors) -> str:
    """Render pydantic error dictionaries as one readable message.

    Messages from our own validators (``ValueError`` raised inside a
    ``field_validator``) are used verbatim; other errors are prefixed
    with the offending field name.
    """
    parts = []
    for error in errors:
        if error.get("type") == "value_error":
            parts.append(str(error.get("msg", "")).removeprefix("Value error, "))
            continue
        loc = [str(item) for item in error.get("loc", ()) if item != "body"]
        field = ".".join(loc)
        parts.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return "; ".join(parts) or "Invalid input"
