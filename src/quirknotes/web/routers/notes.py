from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from quirknotes.core.modules.note.models import Note, UpdateOutcome
from quirknotes.web.deps import AppDep, AuthTokenDep
from quirknotes.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["notes"])


class CreateNoteRequest(BaseModel):
    """Request to create a new note."""

    title: str | None = Field(None, description="Note title (required, non-empty)")
    content: str | None = Field(None, description="Note body (required, non-empty)")

    model_config = {"json_schema_extra": {"examples": [{"title": "Groceries", "content": "Milk, eggs, bread"}]}}


class EditNoteRequest(BaseModel):
    """Request to update note fields (partial update)."""

    title: str | None = Field(None, description="New title; omitted or empty keeps the current one")
    content: str | None = Field(None, description="New content; omitted or empty keeps the current one")

    model_config = {"json_schema_extra": {"examples": [{"content": "Milk, eggs, bread, coffee"}]}}


class CreateNoteResponse(BaseModel):
    response: str
    inserted_id: UUID = Field(..., alias="insertedId", description="ID of the new note")

    model_config = {"populate_by_name": True}


class NoteResponse(BaseModel):
    response: Note


class NoteListResponse(BaseModel):
    response: list[Note]


class MessageResponse(BaseModel):
    response: str


class EditNoteResponse(BaseModel):
    response: str
    data: UpdateOutcome


@router.post(
    "/postNote",
    summary="Create note",
    description="Create a note owned by the authenticated user.",
    operation_id="postNote",
    responses={
        200: {"description": "Note created"},
        400: {"model": ErrorResponse, "description": "Title or content missing"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def post_note(request: CreateNoteRequest, app: AppDep, auth_token: AuthTokenDep) -> CreateNoteResponse:
    note_id = await app.create_note(auth_token, request.title, request.content)
    return CreateNoteResponse(response="Note added successfully.", inserted_id=note_id)


@router.get(
    "/getNote/{note_id}",
    summary="Get note",
    description="Get one note by ID. Notes of other users are reported as not found.",
    operation_id="getNote",
    responses={
        200: {"description": "Note details"},
        400: {"model": ErrorResponse, "description": "Invalid note ID"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def get_note(note_id: str, app: AppDep, auth_token: AuthTokenDep) -> NoteResponse:
    return NoteResponse(response=await app.get_note(auth_token, note_id))


@router.get(
    "/getAllNotes",
    summary="List notes",
    description="Get all notes of the authenticated user. No pagination.",
    operation_id="getAllNotes",
    responses={
        200: {"description": "List of notes, possibly empty"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_all_notes(app: AppDep, auth_token: AuthTokenDep) -> NoteListResponse:
    return NoteListResponse(response=await app.get_all_notes(auth_token))


@router.delete(
    "/deleteNote/{note_id}",
    summary="Delete note",
    description="Delete one of the authenticated user's notes.",
    operation_id="deleteNote",
    responses={
        200: {"description": "Note deleted"},
        400: {"model": ErrorResponse, "description": "Invalid note ID"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def delete_note(note_id: str, app: AppDep, auth_token: AuthTokenDep) -> MessageResponse:
    deleted_id = await app.delete_note(auth_token, note_id)
    return MessageResponse(response=f"Document with ID {deleted_id} properly deleted.")


@router.patch(
    "/editNote/{note_id}",
    summary="Edit note",
    description=(
        "Partially update a note. Only non-empty fields are applied; the other field keeps its stored value. "
        "At least one of title or content must be provided."
    ),
    operation_id="editNote",
    responses={
        200: {"description": "Note updated"},
        400: {"model": ErrorResponse, "description": "Invalid note ID or empty body"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def edit_note(note_id: str, request: EditNoteRequest, app: AppDep, auth_token: AuthTokenDep) -> EditNoteResponse:
    updated_id, outcome = await app.edit_note(auth_token, note_id, request.title, request.content)
    return EditNoteResponse(response=f"Document with ID {updated_id} properly updated", data=outcome)
