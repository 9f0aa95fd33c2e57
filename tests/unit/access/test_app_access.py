"""Tests for token-gated note operations on the App facade."""

from datetime import timedelta
from uuid import uuid4

import pytest

from quirknotes.errors import AuthenticationError, ConflictError, NotFoundError, TokenExpiredError, ValidationError
from quirknotes.utils import now


class TestRegisterAndLogin:
    async def test_register_returns_usable_token(self, app):
        token = await app.register("alice", "pw1")
        assert app.authenticate(token) == "alice"

    async def test_register_twice_conflicts(self, app):
        await app.register("alice", "pw1")
        with pytest.raises(ConflictError):
            await app.register("alice", "pw2")

    async def test_login_with_correct_password(self, app):
        await app.register("alice", "pw1")
        token = await app.login("alice", "pw1")
        assert app.authenticate(token) == "alice"

    async def test_login_with_wrong_password(self, app):
        await app.register("alice", "pw1")
        with pytest.raises(AuthenticationError, match="Authentication failed"):
            await app.login("alice", "pw2")

    async def test_missing_credentials(self, app):
        with pytest.raises(ValidationError, match="needed to register"):
            await app.register("alice", "")


class TestGate:
    """Note operations must reject bad tokens before reaching the store."""

    async def test_invalid_token_rejected(self, app):
        with pytest.raises(AuthenticationError):
            await app.get_all_notes("garbage")

    async def test_expired_token_rejected(self, app):
        token = app._core.services.token.issue("alice", issued_at=now() - timedelta(hours=2))
        with pytest.raises(TokenExpiredError):
            await app.create_note(token, "t", "c")

    async def test_rejected_token_writes_nothing(self, app, mongo_client):
        with pytest.raises(AuthenticationError):
            await app.create_note("garbage", "t", "c")
        assert mongo_client.get_database("quirknotes_test").get_collection("notes").docs == []

    async def test_input_checked_before_token(self, app):
        """Test that a malformed id is reported even when the token is bad."""
        with pytest.raises(ValidationError, match="Invalid note ID"):
            await app.get_note("garbage", "not-an-id")


class TestOwnership:
    """A note created by one user is invisible to every other user."""

    async def test_cross_user_access_is_not_found(self, app):
        alice = await app.register("alice", "pw1")
        bob = await app.register("bob", "pw2")
        note_id = await app.create_note(alice, "a", "b")

        with pytest.raises(NotFoundError):
            await app.get_note(bob, str(note_id))
        with pytest.raises(NotFoundError):
            await app.delete_note(bob, str(note_id))
        with pytest.raises(NotFoundError):
            await app.edit_note(bob, str(note_id), title="x")
        assert await app.get_all_notes(bob) == []

        note = await app.get_note(alice, str(note_id))
        assert (note.title, note.content, note.owner) == ("a", "b", "alice")

    async def test_edit_requires_some_field(self, app):
        alice = await app.register("alice", "pw1")
        note_id = await app.create_note(alice, "a", "b")
        with pytest.raises(ValidationError, match="Invalid body parameters"):
            await app.edit_note(alice, str(note_id), None, None)

    async def test_edit_partial_merge(self, app):
        alice = await app.register("alice", "pw1")
        note_id = await app.create_note(alice, "a", "b")

        edited_id, outcome = await app.edit_note(alice, str(note_id), content="x")

        assert edited_id == note_id
        assert outcome.matched_count == 1
        note = await app.get_note(alice, str(note_id))
        assert (note.title, note.content) == ("a", "x")

    async def test_delete_returns_id(self, app):
        alice = await app.register("alice", "pw1")
        note_id = await app.create_note(alice, "a", "b")
        assert await app.delete_note(alice, str(note_id)) == note_id
        with pytest.raises(NotFoundError):
            await app.delete_note(alice, str(uuid4()))
