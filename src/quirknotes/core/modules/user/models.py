from quirknotes.core.db import MongoModel


class User(MongoModel):
    """User domain model with credentials.

    Indexed on username - unique.
    """

    username: str
    password_hash: str  # bcrypt hash
