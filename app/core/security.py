"""Password hashing, session-token fingerprints and JWT issue/verification."""

import hashlib
import uuid
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import ValidationError

from app.schemas.auth import TokenClaims, TokenPair

if TYPE_CHECKING:
    from app.core.config import Settings

# Bcrypt cost (rounds). Deliberately slow; callers run on the sync route threadpool.
BCRYPT_ROUNDS = 10

# Fixed token lifetimes; not runtime-configurable.
ACCESS_TOKEN_TTL = timedelta(minutes=15)
REFRESH_TOKEN_TTL = timedelta(days=7)

PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


class InvalidTokenError(Exception):
    """Raised for any token that fails verification. Expired and malformed are not distinguished."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        self.message = message
        super().__init__(message)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _token_digest(token: str) -> bytes:
    # JWTs are longer than 72 bytes and share long prefixes; bcrypt would only see the header.
    return hashlib.sha256(token.encode("utf-8")).hexdigest().encode("ascii")


def hash_token(token: str) -> str:
    """Fingerprint a refresh token for storage as the account's session-token hash."""
    return bcrypt.hashpw(_token_digest(token), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_token_hash(token: str, hashed: str | None) -> bool:
    """True if hashed is the stored fingerprint of token."""
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_token_digest(token), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _encode(sub: int, role: str, secret: str, algorithm: str, now: datetime, ttl: timedelta) -> str:
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "exp": now + ttl,
        "iat": now,
        # Unique per token so a rotated refresh token never equals its predecessor.
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def create_token_pair(
    sub: int,
    role: str,
    settings: "Settings",
    now: datetime | None = None,
) -> TokenPair:
    """
    Issue an access token (secret A, 15 min) and a refresh token (secret B, 7 days).

    Both carry the same sub and role. Nothing is recorded server-side.
    """
    issued_at = now or datetime.now(UTC)
    access = _encode(
        sub,
        role,
        settings.JWT_SECRET.get_secret_value(),
        settings.JWT_ALGORITHM,
        issued_at,
        ACCESS_TOKEN_TTL,
    )
    refresh = _encode(
        sub,
        role,
        settings.JWT_REFRESH_SECRET.get_secret_value(),
        settings.JWT_ALGORITHM,
        issued_at,
        REFRESH_TOKEN_TTL,
    )
    return TokenPair(access_token=access, refresh_token=refresh)


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> TokenClaims:
    """
    Verify signature and expiry and return the typed claims.
    Raises InvalidTokenError on any failure.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
        return TokenClaims.model_validate(payload)
    except (jwt.PyJWTError, ValidationError) as e:
        raise InvalidTokenError() from e


def decode_access_token(token: str, settings: "Settings") -> TokenClaims:
    return decode_token(token, settings.JWT_SECRET.get_secret_value(), settings.JWT_ALGORITHM)


def decode_refresh_token(token: str, settings: "Settings") -> TokenClaims:
    return decode_token(
        token, settings.JWT_REFRESH_SECRET.get_secret_value(), settings.JWT_ALGORITHM
    )
