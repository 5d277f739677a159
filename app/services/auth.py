"""Registration, login, refresh rotation, logout and profile lookup."""

import logging
from typing import TYPE_CHECKING

from app.core.errors import conflict, forbidden, unauthorized
from app.core.security import (
    InvalidTokenError,
    create_token_pair,
    decode_refresh_token,
    hash_password,
    hash_token,
    verify_password,
    verify_token_hash,
)
from app.models.user import User
from app.repositories.users import UserGateway
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenPair,
    UserView,
)

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."
INVALID_REFRESH_TOKEN = "Invalid refresh token"


class AuthService:
    """Session lifecycle for accounts. Only refresh_token_hash is written outside registration."""

    def __init__(self, users: UserGateway, settings: "Settings") -> None:
        self.users = users
        self.settings = settings

    def register(self, body: RegisterRequest) -> AuthResponse:
        email = body.email.lower()
        if self.users.find_by_email(email) is not None:
            raise conflict("Email already registered.")
        user = self.users.create(
            email=email,
            password_hash=hash_password(body.password),
            name=body.name,
            role=body.role.value,
        )
        logger.info("Registered account id=%s role=%s", user.id, user.role)
        return self._start_session(user)

    def login(self, body: LoginRequest) -> AuthResponse:
        user = self.users.find_by_email(body.email.strip().lower())
        # Same message for unknown email and wrong password.
        if user is None or not verify_password(body.password, user.password_hash):
            logger.info("Login failed for email=%s", body.email)
            raise unauthorized(INVALID_CREDENTIALS)
        logger.info("Login succeeded id=%s", user.id)
        return self._start_session(user)

    def refresh(self, refresh_token: str) -> TokenPair:
        """
        Mint a new pair from a refresh token verified against the refresh secret.

        With REFRESH_TOKEN_HASH_CHECK the token must also match the account's
        stored fingerprint, which is then rotated to the new refresh token, so
        logout and reuse of a superseded token are rejected. Without it only
        signature and expiry are checked and nothing is stored.
        """
        try:
            claims = decode_refresh_token(refresh_token, self.settings)
        except InvalidTokenError:
            logger.info("Refresh rejected: token failed verification")
            raise unauthorized(INVALID_REFRESH_TOKEN) from None

        if not self.settings.REFRESH_TOKEN_HASH_CHECK:
            return create_token_pair(claims.sub, claims.role.value, self.settings)

        user = self.users.get(claims.sub)
        if user is None or not verify_token_hash(refresh_token, user.refresh_token_hash):
            logger.info("Refresh rejected: token not current for id=%s", claims.sub)
            raise unauthorized(INVALID_REFRESH_TOKEN)
        pair = create_token_pair(claims.sub, claims.role.value, self.settings)
        self.users.set_refresh_token_hash(user.id, hash_token(pair.refresh_token))
        return pair

    def logout(self, user_id: int) -> MessageResponse:
        self.users.set_refresh_token_hash(user_id, None)
        logger.info("Logout id=%s", user_id)
        return MessageResponse(message="Logged out.")

    def get_profile(self, user_id: int) -> UserView:
        user = self.users.get(user_id)
        if user is None:
            # Token is valid but the account is gone.
            raise forbidden("User not found")
        return UserView.model_validate(user)

    def _start_session(self, user: User) -> AuthResponse:
        pair = create_token_pair(user.id, user.role, self.settings)
        user = self.users.set_refresh_token_hash(user.id, hash_token(pair.refresh_token))
        return AuthResponse(
            user=UserView.model_validate(user),
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )
