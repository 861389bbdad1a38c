"""Query parameter parsing shared by the action routes."""

from votefeed.exceptions import InvalidParameterError, MissingParameterError


def require_param(name: str, value: str | None, hint: str = "") -> str:
    """Return value, raising MissingParameterError when it is absent or empty."""
    if value is None or value == "":
        raise MissingParameterError(name, hint)
    return value


def parse_proposal_id(name: str, value: str | None) -> int:
    """
    Parse a proposal id query parameter.

    Raises:
        MissingParameterError: If the parameter is absent or empty
        InvalidParameterError: If it is not a non-negative decimal integer
    """
    raw = require_param(name, value).strip()
    if not (raw.isascii() and raw.isdigit()):
        raise InvalidParameterError(
            f"The '{name}' query parameter must be a non-negative integer"
        )
    return int(raw)


def parse_bool(value: str) -> bool:
    """Only the literal "true" is true; any other value votes down."""
    return value == "true"
