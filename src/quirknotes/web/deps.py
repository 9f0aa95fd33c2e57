from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from quirknotes.app import App
from quirknotes.core.modules.token.models import AuthToken
from quirknotes.errors import AuthenticationError

# Security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> AuthToken:
    """Extract the bearer token from the Authorization header.

    Requests without a well-formed `Authorization: Bearer <token>` header are
    rejected here, before any handler or database call runs.
    """
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError("Unauthorized.")
    return AuthToken(credentials.credentials)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]
