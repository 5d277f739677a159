"""Load-authorize-mutate sequence shared by every owned resource."""

from collections.abc import Callable
from typing import TypeVar

from app.core.errors import not_found
from app.core.policy import ensure_allowed
from app.repositories.base import StorageGateway
from app.schemas.auth import CurrentUser

T = TypeVar("T")


def load_for_mutation(
    gateway: StorageGateway[T],
    entity_id: int,
    caller: CurrentUser,
    owner_of: Callable[[T], int],
    not_found_message: str,
    forbidden_message: str,
    scope: Callable[[T], bool] | None = None,
) -> T:
    """
    Load the row, then authorize the caller against its owner.

    Existence is checked before ownership: a missing row is NotFound even for a
    caller who would be denied. The caller applies the mutation afterwards via
    the gateway, which raises NotFound if the row vanished in between.
    scope narrows what counts as existing (a comment under a given post).
    """
    row = gateway.get(entity_id)
    if row is None or (scope is not None and not scope(row)):
        raise not_found(not_found_message)
    ensure_allowed(owner_of(row), caller, forbidden_message)
    return row


def owned_by_author(row) -> int:
    return row.author_id


def owned_by_self(row) -> int:
    return row.id
