"""Account avatars: replace for the caller, delete by owner or admin."""

import logging

from app.core.errors import ServiceError
from app.repositories.users import UserGateway
from app.schemas.auth import CurrentUser, MessageResponse
from app.schemas.users import AvatarResponse
from app.services.mutation import load_for_mutation, owned_by_self
from app.services.uploads import LocalImageStore

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


class UserService:
    def __init__(self, users: UserGateway, images: LocalImageStore) -> None:
        self.users = users
        self.images = images

    def set_avatar(
        self,
        user_id: int,
        data: bytes,
        content_type: str | None,
        caller: CurrentUser,
    ) -> AvatarResponse:
        user = load_for_mutation(
            self.users,
            user_id,
            caller,
            owned_by_self,
            USER_NOT_FOUND,
            "You do not have permission to change this user's avatar",
        )
        previous = user.avatar
        path = self.images.save("avatars", data, content_type)
        try:
            updated = self.users.set_avatar(user_id, path)
        except ServiceError:
            self.images.delete(path)
            raise
        self.images.delete(previous)
        return AvatarResponse(message="Avatar updated.", avatar=updated.avatar)

    def delete_avatar(self, user_id: int, caller: CurrentUser) -> MessageResponse:
        user = load_for_mutation(
            self.users,
            user_id,
            caller,
            owned_by_self,
            USER_NOT_FOUND,
            "You do not have permission to delete this user's avatar",
        )
        previous = user.avatar
        self.users.set_avatar(user_id, None)
        self.images.delete(previous)
        logger.info("Avatar cleared for id=%s by caller_id=%s", user_id, caller.id)
        return MessageResponse(message="Avatar deleted.")
