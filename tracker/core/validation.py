"""Input Validation: pure helpers that turn raw request data into typed values.

Invariants:
    - parse_user_id accepts only ASCII base-10 integers (surrounding whitespace allowed)
    - summarize_validation_errors names every missing field exactly once, in order
    - A missing body (loc ("body",)) is reported as such, never as an empty field name
    - No IO, no framework imports beyond plain data
"""

from tracker.core.domain_types import UserId
from tracker.core.errors import ValidationError

# Locations Pydantic/FastAPI prefix onto field names
_LOCATION_PREFIXES = {"body", "path", "query", "header"}


def parse_user_id(raw: str | int | None) -> UserId:
    """Parse a userId path/body value or raise ValidationError."""
    if raw is None:
        raise ValidationError("userId is required", fields=["userId"])
    if isinstance(raw, bool):
        raise ValidationError("Invalid userId", fields=["userId"])
    if isinstance(raw, int):
        return UserId(raw)
    text = str(raw).strip()
    digits = text[1:] if text[:1] in "+-" else text
    # str.isdigit also accepts superscripts and other Unicode digits int() rejects
    if not (digits.isascii() and digits.isdigit()):
        raise ValidationError("Invalid userId", fields=["userId"])
    return UserId(int(text))


def field_name(loc: tuple | list) -> str:
    """Render an error location without its transport prefix: ('body', 'value') -> 'value'."""
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts)


def summarize_validation_errors(errors: list[dict]) -> tuple[str, list[str], list[dict]]:
    """Build (message, missing_fields, details) from Pydantic error dicts."""
    missing: list[str] = []
    body_missing = False
    details = []
    for e in errors:
        name = field_name(e.get("loc", ()))
        details.append({
            "field": name or "body",
            "message": e.get("msg", ""),
            "type": e.get("type", ""),
        })
        if e.get("type") != "missing":
            continue
        if not name:
            body_missing = True
        elif name not in missing:
            missing.append(name)
    if missing:
        message = f"Missing required fields: {', '.join(missing)}"
    elif body_missing:
        message = "Request body is required"
    else:
        message = "Invalid request data"
    return message, missing, details
