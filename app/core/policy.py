"""Owner-or-admin authorization policy applied to every mutation."""

import logging

from app.core.errors import forbidden
from app.models.user import Role
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)


def is_allowed(owner_id: int, caller_id: int, caller_role: Role | str) -> bool:
    """The owner may mutate; so may any ADMIN. Nobody else."""
    return owner_id == caller_id or caller_role == Role.ADMIN


def ensure_allowed(owner_id: int, caller: CurrentUser, message: str) -> None:
    """Raise Forbidden with message unless caller passes is_allowed."""
    if not is_allowed(owner_id, caller.id, caller.role):
        logger.info(
            "Mutation denied: caller_id=%s role=%s owner_id=%s",
            caller.id,
            caller.role.value,
            owner_id,
        )
        raise forbidden(message)
