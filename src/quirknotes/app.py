from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

import structlog
from pymongo import AsyncMongoClient

from quirknotes.config import Config
from quirknotes.core.core import Core
from quirknotes.core.modules.note.models import Note, UpdateOutcome
from quirknotes.core.modules.note.validators import parse_note_id, validate_new_note, validate_note_edit
from quirknotes.core.modules.token.models import AuthToken
from quirknotes.core.modules.user.validators import validate_credentials
from quirknotes.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations.

    Note operations validate their input, then authenticate the token, and only
    then touch the store with a filter scoped to the authenticated user.
    """

    def __init__(self, config: Config, mongo_client: AsyncMongoClient[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, mongo_client)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def authenticate(self, auth_token: AuthToken) -> str:
        """Verify token and return the username it was issued for."""
        return self._core.services.access.ensure_authenticated(auth_token)

    async def register(self, username: str | None, password: str | None) -> AuthToken:
        """Create a user account and issue a token for it."""
        username, password = validate_credentials(username, password, "register")
        user = await self._core.services.user.create_user(username, password)
        return self._core.services.token.issue(user.username)

    async def login(self, username: str | None, password: str | None) -> AuthToken:
        """Check credentials and issue a token."""
        username, password = validate_credentials(username, password, "login")
        if not await self._core.services.user.verify_password(username, password):
            logger.info("login_failed", username=username)
            raise AuthenticationError
        return self._core.services.token.issue(username)

    async def create_note(self, auth_token: AuthToken, title: str | None, content: str | None) -> UUID:
        """Create a note owned by the authenticated user and return its id."""
        title, content = validate_new_note(title, content)
        owner = self.authenticate(auth_token)
        note = await self._core.services.note.create_note(title, content, owner)
        return note.id

    async def get_note(self, auth_token: AuthToken, raw_note_id: str) -> Note:
        """Get one of the authenticated user's notes."""
        note_id = parse_note_id(raw_note_id)
        owner = self.authenticate(auth_token)
        return await self._core.services.note.get_note(note_id, owner)

    async def get_all_notes(self, auth_token: AuthToken) -> list[Note]:
        """Get every note of the authenticated user."""
        owner = self.authenticate(auth_token)
        return await self._core.services.note.list_notes(owner)

    async def delete_note(self, auth_token: AuthToken, raw_note_id: str) -> UUID:
        """Delete one of the authenticated user's notes and return its id."""
        note_id = parse_note_id(raw_note_id)
        owner = self.authenticate(auth_token)
        await self._core.services.note.delete_note(note_id, owner)
        return note_id

    async def edit_note(
        self, auth_token: AuthToken, raw_note_id: str, title: str | None = None, content: str | None = None
    ) -> tuple[UUID, UpdateOutcome]:
        """Partially update one of the authenticated user's notes.

        Empty or missing title/content leave the stored value unchanged."""
        validate_note_edit(title, content)
        note_id = parse_note_id(raw_note_id)
        owner = self.authenticate(auth_token)
        outcome = await self._core.services.note.update_note(note_id, owner, title, content)
        return note_id, outcome
