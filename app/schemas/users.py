"""Response schemas for account image endpoints."""

from pydantic import BaseModel


class AvatarResponse(BaseModel):
    """Returned after replacing the caller's avatar."""

    message: str
    avatar: str | None = None
