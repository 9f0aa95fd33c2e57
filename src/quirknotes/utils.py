from datetime import UTC, datetime
from uuid import UUID


def parse_uuid(value: str) -> UUID | None:
    """Parse a canonical hyphenated UUID string, returning None for any other shape.

    `UUID()` alone also accepts braces, a `urn:uuid:` prefix and bare hex digits.
    """
    try:
        parsed = UUID(value)
    except (ValueError, TypeError):
        return None
    if str(parsed) != value.lower():
        return None
    return parsed


def now() -> datetime:
    return datetime.now(UTC)
