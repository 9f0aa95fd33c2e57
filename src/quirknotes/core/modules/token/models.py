"""Access token models."""

from datetime import datetime, timedelta
from typing import NewType

from pydantic import BaseModel

AuthToken = NewType("AuthToken", str)

TOKEN_TTL = timedelta(hours=1)


class TokenClaims(BaseModel):
    """Claims carried inside a signed access token."""

    username: str
    iat: datetime
    exp: datetime
