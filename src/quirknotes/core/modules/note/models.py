from pydantic import BaseModel, Field

from quirknotes.core.db import MongoModel


class Note(MongoModel):
    """Personal text note. Every query against notes is scoped by owner.

    Indexed on owner.
    """

    title: str
    content: str
    owner: str  # username of the author


class UpdateOutcome(BaseModel):
    """Result of an owner-scoped note update."""

    acknowledged: bool = Field(..., description="Whether the write was acknowledged by the database")
    matched_count: int = Field(..., description="Number of notes matched by the owner-scoped filter")
    modified_count: int = Field(..., description="Number of notes actually changed")
