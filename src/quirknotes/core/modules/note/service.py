from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from quirknotes.core.core import Service
from quirknotes.core.modules.note.models import Note, UpdateOutcome
from quirknotes.errors import NotFoundError

logger = structlog.get_logger(__name__)


def owner_filter(note_id: UUID, owner: str) -> dict[str, Any]:
    """Filter matching a note only when it belongs to `owner`."""
    return {"_id": note_id, "owner": owner}


class NoteService(Service):
    """Manages notes; every lookup and write is scoped to the owning user."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("notes")

    async def on_start(self) -> None:
        """Create index for per-owner listing."""
        await self._collection.create_index([("owner", 1)])

    async def create_note(self, title: str, content: str, owner: str) -> Note:
        """Insert a new note owned by `owner`."""
        note = Note(title=title, content=content, owner=owner)
        await self._collection.insert_one(note.to_mongo())
        logger.info("note_created", note_id=note.id, owner=owner)
        return note

    async def get_note(self, note_id: UUID, owner: str) -> Note:
        """Get note by ID if it belongs to `owner`."""
        doc = await self._collection.find_one(owner_filter(note_id, owner))
        if doc is None:
            raise NotFoundError("Unable to find note with given ID.")
        return Note.model_validate(doc)

    async def list_notes(self, owner: str) -> list[Note]:
        """Get all notes of `owner` in store order."""
        notes = await Note.list_cursor(self._collection.find({"owner": owner}))
        logger.debug("list_notes", owner=owner, returned=len(notes))
        return notes

    async def delete_note(self, note_id: UUID, owner: str) -> None:
        """Delete a note belonging to `owner`."""
        result = await self._collection.delete_one(owner_filter(note_id, owner))
        if result.deleted_count == 0:
            raise NotFoundError(f"Note with ID {note_id} belonging to the user not found")
        logger.info("note_deleted", note_id=note_id, owner=owner)

    async def update_note(self, note_id: UUID, owner: str, title: str | None, content: str | None) -> UpdateOutcome:
        """Partially update a note: only non-empty fields replace stored values.

        Concurrent edits of the same note are last-write-wins.
        """
        doc = await self._collection.find_one(owner_filter(note_id, owner))
        if doc is None:
            raise NotFoundError(f"Note with ID {note_id} belonging to the user not found")
        note = Note.model_validate(doc)
        update_doc = {
            "title": title or note.title,
            "content": content or note.content,
        }
        result = await self._collection.update_one(owner_filter(note_id, owner), {"$set": update_doc})
        if result.matched_count == 0:
            raise NotFoundError(f"Note with ID {note_id} belonging to the user not found")

        logger.info("note_updated", note_id=note_id, owner=owner, modified=result.modified_count)
        return UpdateOutcome(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )
