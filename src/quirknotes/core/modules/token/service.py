from datetime import datetime

import structlog
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from quirknotes.core.core import Service
from quirknotes.core.modules.token.models import TOKEN_TTL, AuthToken, TokenClaims
from quirknotes.errors import InvalidTokenError, TokenExpiredError
from quirknotes.utils import now

logger = structlog.get_logger(__name__)


class TokenService(Service):
    """Issues and verifies signed, self-contained access tokens.

    Tokens are never stored, so expiry is the only way one stops working.
    """

    @property
    def _secret(self) -> str:
        return self.core.config.jwt_secret_key

    @property
    def _algorithm(self) -> str:
        return self.core.config.jwt_algorithm

    def issue(self, username: str, issued_at: datetime | None = None) -> AuthToken:
        """Sign a token for `username` that expires one hour after `issued_at`."""
        iat = issued_at or now()
        claims = TokenClaims(username=username, iat=iat, exp=iat + TOKEN_TTL)
        return AuthToken(jwt.encode(claims.model_dump(), self._secret, algorithm=self._algorithm))

    def verify(self, token: str | None) -> str:
        """Return the username embedded in a valid token.

        Raises:
            TokenExpiredError: If the expiry instant has passed
            InvalidTokenError: If the token is absent, malformed or wrongly signed
        """
        if not token:
            raise InvalidTokenError("Missing token")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except JWTError as e:
            logger.debug("token_rejected", reason=str(e))
            raise InvalidTokenError from e

        try:
            claims = TokenClaims.model_validate(payload)
        except PydanticValidationError as e:
            raise InvalidTokenError("Malformed token claims") from e
        return claims.username
