"""Authentication API routes.

Provides endpoints for:
- User registration
- Login
- The login-or-register token endpoint
- The current identity
"""

from fastapi import APIRouter, status

from app.core.auth.dependencies import CurrentIdentity
from app.core.auth.schemas import AuthenticatedIdentity, TokenResponse
from app.core.auth.service import AuthSvc
from app.modules.users.schemas import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenRequest,
    UserResponse,
)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    description="Creates a user. Without a role the user becomes a VISITOR.",
)
async def register(data: RegisterRequest, service: AuthSvc) -> RegisterResponse:
    """Register a new user."""
    user = await service.register(data)
    return RegisterResponse(user=UserResponse.model_validate(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with username and password",
)
async def login(data: LoginRequest, service: AuthSvc) -> TokenResponse:
    """Login with username and password."""
    return await service.login(data)


@router.post(
    "/token",
    response_model=TokenResponse,
    summary="Get a short-lived token",
    description=(
        "Authenticates an existing user, or registers an unknown one, and "
        "returns a token with the token endpoint's lifetime."
    ),
)
async def get_token(data: TokenRequest, service: AuthSvc) -> TokenResponse:
    """Issue a token, registering the user on first use."""
    return await service.issue_token(data)


@router.get(
    "/me",
    response_model=AuthenticatedIdentity,
    summary="Get current identity",
    description="Returns the identity carried by the caller's token.",
)
async def get_me(identity: CurrentIdentity) -> AuthenticatedIdentity:
    """Get the caller's identity."""
    return identity
