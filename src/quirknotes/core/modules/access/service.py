import structlog

from quirknotes.core.core import Service
from quirknotes.core.modules.token.models import AuthToken
from quirknotes.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class AccessService(Service):
    def ensure_authenticated(self, auth_token: AuthToken | None) -> str:
        """Ensure the token is valid and return the authenticated username."""
        try:
            return self.core.services.token.verify(auth_token)
        except AuthenticationError as e:
            logger.debug("access_denied", reason=str(e))
            raise
