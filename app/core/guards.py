"""
Request interceptors for bearer tokens and role checks.

Each guard returns a GuardOutcome: either continue with the resolved identity
or reject with an ErrorKind and message. The FastAPI dependencies in
app.api.v1.auth chain them and raise ServiceError on rejection.
"""

from collections.abc import Collection
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.core.errors import ErrorKind, ServiceError
from app.core.security import InvalidTokenError, decode_access_token
from app.models.user import Role
from app.schemas.auth import CurrentUser

if TYPE_CHECKING:
    from app.core.config import Settings


@dataclass(frozen=True)
class GuardOutcome:
    identity: CurrentUser | None = None
    rejection: ErrorKind | None = None
    message: str = ""

    @property
    def allowed(self) -> bool:
        return self.rejection is None

    def unwrap(self) -> CurrentUser:
        """Return the identity or raise the rejection as ServiceError."""
        if self.rejection is not None or self.identity is None:
            raise ServiceError(self.rejection or ErrorKind.UNAUTHORIZED, self.message)
        return self.identity


def proceed(identity: CurrentUser) -> GuardOutcome:
    return GuardOutcome(identity=identity)


def reject(kind: ErrorKind, message: str) -> GuardOutcome:
    return GuardOutcome(rejection=kind, message=message)


def authenticate(token: str | None, settings: "Settings") -> GuardOutcome:
    """Verify a bearer access token and resolve {id, role} from its claims."""
    if not token:
        return reject(ErrorKind.UNAUTHORIZED, "Not authenticated")
    try:
        claims = decode_access_token(token, settings)
    except InvalidTokenError as e:
        return reject(ErrorKind.UNAUTHORIZED, e.message)
    return proceed(CurrentUser(id=claims.sub, role=claims.role))


def authorize_roles(outcome: GuardOutcome, allowed_roles: Collection[Role]) -> GuardOutcome:
    """Pass through a rejection; otherwise require the identity's role to be allowed."""
    if not outcome.allowed or outcome.identity is None:
        return outcome
    if outcome.identity.role not in allowed_roles:
        return reject(ErrorKind.FORBIDDEN, "Insufficient role for this resource")
    return outcome
