"""User and identity models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Role(str, Enum):
    """User roles for access control."""

    USER = "USER"
    ADMIN = "ADMIN"


class AuthenticatedUser(BaseModel):
    """Identity attached to a request once its bearer token is accepted."""

    id: int
    first_name: str
    last_name: str
    email: str
    role: Role = Role.USER


class User(AuthenticatedUser):
    """A stored user record, including credential material.

    Attributes:
        password_hash: bcrypt hash of the user's password
        refresh_token: The single refresh token currently honoured for this
            user, or None if the user has never logged in
    """

    password_hash: str
    refresh_token: Optional[str] = None

    def public(self) -> AuthenticatedUser:
        """Project the record down to the fields safe to expose."""
        return AuthenticatedUser(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            role=self.role,
        )
