from uuid import UUID

from quirknotes.errors import ValidationError
from quirknotes.utils import parse_uuid


def parse_note_id(raw_id: str) -> UUID:
    """Parse a note id from a request path, raising ValidationError if malformed."""
    note_id = parse_uuid(raw_id)
    if note_id is None:
        raise ValidationError("Invalid note ID.")
    return note_id


def validate_new_note(title: str | None, content: str | None) -> tuple[str, str]:
    """Both title and content must be non-empty for a new note."""
    if not title or not content:
        raise ValidationError("Title and content are both required.")
    return title, content


def validate_note_edit(title: str | None, content: str | None) -> None:
    """At least one of title or content must be non-empty.

    Empty strings count as "not supplied", so an edit cannot clear a field.
    """
    if not title and not content:
        raise ValidationError("Invalid body parameters.")
