"""Auth routes and the guard dependencies (get_current_user, require_roles, require_admin)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.deps import get_auth_service
from app.core.config import Settings, get_settings
from app.core.guards import authenticate, authorize_roles
from app.models.user import Role
from app.schemas.auth import (
    AdminProbeResponse,
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
    UserView,
)
from app.services.auth import AuthService

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser:
    """Dependency: require a valid Bearer access token. Raises 401 if missing or invalid."""
    token = credentials.credentials if credentials is not None else None
    return authenticate(token, settings).unwrap()


def require_roles(*roles: Role) -> Callable[..., CurrentUser]:
    """Dependency factory: authenticated caller whose role is one of roles, else 403."""
    allowed = frozenset(roles)

    def dependency(
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
        settings: Annotated[Settings, Depends(get_settings)],
    ) -> CurrentUser:
        token = credentials.credentials if credentials is not None else None
        return authorize_roles(authenticate(token, settings), allowed).unwrap()

    return dependency


require_admin = require_roles(Role.ADMIN)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Create an account and start its session; returns the account and both tokens."""
    return service.register(body)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns access + refresh tokens.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    return service.login(body)


@router.post("/refresh", response_model=TokenPair)
def refresh(
    body: RefreshRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenPair:
    """Exchange a refresh token for a new access + refresh pair."""
    return service.refresh(body.refresh_token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Clear the caller's stored refresh-token fingerprint."""
    return service.logout(current_user.id)


@router.get("/profile", response_model=UserView)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserView:
    """Return the authenticated account (no password or session hash)."""
    return service.get_profile(current_user.id)


@router.get("/admin-only", response_model=AdminProbeResponse)
def admin_only(
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> AdminProbeResponse:
    """Probe route for administrators. Demonstrates the role guard."""
    return AdminProbeResponse(message="Admin access granted", user=admin)
