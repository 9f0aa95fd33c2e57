import asyncio
from typing import Any

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from quirknotes.core.core import Service
from quirknotes.core.modules.user.models import User
from quirknotes.errors import ConflictError, NotFoundError

logger = structlog.get_logger(__name__)

BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72  # bcrypt only uses the first 72 bytes of the password

# Compared against when the username is unknown so lookups cost the same either way
_DUMMY_HASH = bcrypt.hashpw(b"quirknotes", bcrypt.gensalt(BCRYPT_ROUNDS))


def password_bytes(password: str) -> bytes:
    """Encode a password as bcrypt input, truncated to the bytes bcrypt reads."""
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password_bytes(password), bcrypt.gensalt(BCRYPT_ROUNDS)).decode("utf-8")


def check_password(password: str, password_hash: bytes) -> bool:
    return bcrypt.checkpw(password_bytes(password), password_hash)


class UserService(Service):
    """Stores user credentials; usernames are unique.

    bcrypt work runs in a worker thread so it does not stall the event loop.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def get_user_by_username(self, username: str) -> User:
        """Get user by username."""
        doc = await self._collection.find_one({"username": username})
        if doc is None:
            raise NotFoundError(f"User '{username}' not found")
        return User.model_validate(doc)

    async def has_username(self, username: str) -> bool:
        """Check if username exists."""
        return await self._collection.find_one({"username": username}) is not None

    async def create_user(self, username: str, password: str) -> User:
        """Create user with hashed password.

        The existence check gives a fast answer for the common case; the unique
        index on `username` is what actually guarantees uniqueness under
        concurrent registrations.
        """
        if await self.has_username(username):
            raise ConflictError("Username already exists.")

        password_hash = await asyncio.to_thread(hash_password, password)
        user = User(username=username, password_hash=password_hash)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError("Username already exists.") from e

        logger.info("user_registered", username=username)
        return user

    async def verify_password(self, username: str, password: str) -> bool:
        """Verify password against stored hash."""
        try:
            user = await self.get_user_by_username(username)
        except NotFoundError:
            await asyncio.to_thread(check_password, password, _DUMMY_HASH)
            return False
        return await asyncio.to_thread(check_password, password, user.password_hash.encode("utf-8"))

    async def on_start(self) -> None:
        """Create the unique username index."""
        await self._collection.create_index([("username", 1)], unique=True)
        logger.debug("user_service_started")
