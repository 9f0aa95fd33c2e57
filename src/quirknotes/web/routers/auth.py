from fastapi import APIRouter
from pydantic import BaseModel, Field

from quirknotes.web.deps import AppDep
from quirknotes.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class CredentialsRequest(BaseModel):
    """Username and password, used both to register and to log in."""

    username: str | None = Field(None, description="Username")
    password: str | None = Field(None, description="Password")


class TokenResponse(BaseModel):
    """Authentication response."""

    response: str = Field(..., description="Human-readable result")
    token: str = Field(..., description="Bearer token for subsequent requests, valid for one hour")


@router.post(
    "/registerUser",
    summary="Register user",
    description="Create a new account and receive an authentication token.",
    operation_id="registerUser",
    status_code=201,
    responses={
        201: {"description": "User registered"},
        400: {"model": ErrorResponse, "description": "Missing fields or username already taken"},
    },
)
async def register_user(credentials: CredentialsRequest, app: AppDep) -> TokenResponse:
    token = await app.register(credentials.username, credentials.password)
    return TokenResponse(response="User registered successfully.", token=token)


@router.post(
    "/loginUser",
    summary="Authenticate user",
    description="Authenticate with username and password to receive an authentication token.",
    operation_id="loginUser",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Missing fields"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login_user(credentials: CredentialsRequest, app: AppDep) -> TokenResponse:
    token = await app.login(credentials.username, credentials.password)
    return TokenResponse(response="User logged in successfully.", token=token)
