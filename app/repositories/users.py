"""Credential store: account rows and their session-token fingerprint."""

from app.models.user import User
from app.repositories.base import SqlAlchemyGateway


class UserGateway(SqlAlchemyGateway[User]):
    model = User
    label = "User"

    def find_by_email(self, email: str) -> User | None:
        return self.find_by(email=email)

    def set_refresh_token_hash(self, user_id: int, token_hash: str | None) -> User:
        return self.update(user_id, refresh_token_hash=token_hash)

    def set_avatar(self, user_id: int, avatar: str | None) -> User:
        return self.update(user_id, avatar=avatar)
