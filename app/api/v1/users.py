"""Avatar routes for the authenticated account, plus owner-or-admin avatar removal."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from app.api.v1.auth import get_current_user
from app.api.v1.deps import get_user_service
from app.schemas.auth import CurrentUser, MessageResponse
from app.schemas.users import AvatarResponse
from app.services.users import UserService

router = APIRouter()

Service = Annotated[UserService, Depends(get_user_service)]
Caller = Annotated[CurrentUser, Depends(get_current_user)]


@router.post("/me/avatar", response_model=AvatarResponse)
def upload_avatar(
    file: Annotated[UploadFile, File(description="JPEG, PNG or WebP, max 5 MB")],
    service: Service,
    caller: Caller,
) -> AvatarResponse:
    """Replace the caller's avatar."""
    return service.set_avatar(caller.id, file.file.read(), file.content_type, caller)


@router.delete("/me/avatar", response_model=MessageResponse)
def delete_own_avatar(service: Service, caller: Caller) -> MessageResponse:
    return service.delete_avatar(caller.id, caller)


@router.delete("/{user_id}/avatar", response_model=MessageResponse)
def delete_avatar(user_id: int, service: Service, caller: Caller) -> MessageResponse:
    """Remove an account's avatar (the account itself or an ADMIN)."""
    return service.delete_avatar(user_id, caller)
