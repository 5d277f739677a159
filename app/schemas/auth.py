"""Request/response schemas for auth endpoints and token claims."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.user import Role


class RegisterRequest(BaseModel):
    """New account. role defaults to CLIENT."""

    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=6, max_length=128, description="Password (min 6 chars)")
    name: str | None = Field(default=None, max_length=255, description="Display name")
    role: Role = Field(default=Role.CLIENT, description="CLIENT or ADMIN")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RefreshRequest(BaseModel):
    """Refresh token presented in the body of /auth/refresh."""

    refresh_token: str = Field(..., min_length=1, description="JWT refresh token")


class TokenPair(BaseModel):
    """Access + refresh tokens issued together."""

    access_token: str = Field(..., description="JWT access token (15 minutes)")
    refresh_token: str = Field(..., description="JWT refresh token (7 days)")
    token_type: str = Field(default="bearer", description="Token type")


class TokenClaims(BaseModel):
    """Verified JWT payload. sub travels as a string and is parsed back to the account id."""

    sub: int
    role: Role
    exp: int
    iat: int | None = None
    jti: str | None = None


class CurrentUser(BaseModel):
    """Identity attached to a request by the session guard (from token claims only)."""

    id: int
    role: Role


class UserView(BaseModel):
    """Sanitized account: password hash and session-token hash never leave the service."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None = None
    avatar: str | None = None
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthResponse(BaseModel):
    """Returned by register and login."""

    user: UserView
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    """Plain confirmation payload."""

    message: str


class AdminProbeResponse(BaseModel):
    """Response for the admin-only probe route."""

    message: str
    user: CurrentUser
