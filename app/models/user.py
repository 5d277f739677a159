"""ORM model for accounts (auth, session fingerprint and RBAC)."""

from enum import Enum

from sqlalchemy import Column, Integer, String

from app.models.base import Base, TimestampMixin


class Role(str, Enum):
    """Closed set of account roles. No other role or capability is recognized."""

    ADMIN = "ADMIN"
    CLIENT = "CLIENT"


class User(TimestampMixin, Base):
    """
    Account for JWT authentication and owner-or-admin authorization.

    refresh_token_hash holds the bcrypt fingerprint of the single currently
    issued refresh token; login/register overwrite it and logout clears it.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    refresh_token_hash = Column(String(255), nullable=True)
    name = Column(String(255), nullable=True)
    avatar = Column(String(1024), nullable=True)
    role = Column(String(32), nullable=False, default=Role.CLIENT.value)
