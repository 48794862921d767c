"""Registration, login and refresh flows.

Combines password hashing, token issuance and the refresh-token session
store. Credential mismatches collapse into one message so that callers
cannot tell an unknown email from a wrong password. Refresh failures collapse
into two messages for the same reason.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

import structlog

from roomdesk.config import Settings, get_settings
from roomdesk.models.user import Role, User
from roomdesk.services.errors import (
    AuthenticationFault,
    CredentialsFault,
    InvalidTokenError,
    ValidationFault,
)
from roomdesk.services.password_service import hash_password, verify_password
from roomdesk.services.session_store import SessionStore
from roomdesk.services.token_service import TokenKind, TokenService
from roomdesk.services.user_service import EMAIL_TAKEN_MESSAGE, UserService

logger = structlog.get_logger(__name__)

INVALID_REFRESH_MESSAGE = "Invalid or expired refresh token"
REVOKED_REFRESH_MESSAGE = "Refresh token revoked"


@dataclass
class TokenPair:
    """Access and refresh tokens issued at login."""

    access_token: str
    refresh_token: str


class AuthService:
    """Orchestrates credential checks, token issuance and session recording."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        user_service: Optional[UserService] = None,
    ):
        self.settings = settings or get_settings()
        self.user_service = user_service or UserService()
        self.tokens = TokenService(self.settings)
        self.sessions = SessionStore(self.user_service)

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: Role = Role.USER,
    ) -> User:
        """Create a user with a hashed password.

        Raises:
            ValidationFault: If the email is already registered
            HashingError: If hashing fails
            StoreError: If the database fails
        """
        if await self.user_service.email_exists(email):
            raise ValidationFault.for_field("email", EMAIL_TAKEN_MESSAGE)

        password_hash = await asyncio.to_thread(
            hash_password, password, self.settings.bcrypt_rounds
        )
        user = await self.user_service.create_user(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            role=role,
        )
        logger.info("user_registered", user_id=user.id, role=user.role.value)
        return user

    async def login(self, email: str, password: str) -> TokenPair:
        """Check credentials, issue a token pair and record the refresh token.

        Recording the new refresh token revokes any token from an earlier
        login.

        Raises:
            CredentialsFault: If the email is unknown or the password is wrong
            HashingError: If password verification fails
            StoreError: If the database fails
        """
        user = await self.user_service.find_by_email(email)
        if user is None:
            logger.warning("login_failed", reason="unknown_email")
            raise CredentialsFault()

        matches = await asyncio.to_thread(verify_password, password, user.password_hash)
        if not matches:
            logger.warning("login_failed", reason="wrong_password", user_id=user.id)
            raise CredentialsFault()

        access_token = self.tokens.issue_access_token(user)
        refresh_token = self.tokens.issue_refresh_token(user.id)
        await self.sessions.record_refresh_token(user.id, refresh_token)

        logger.info("user_logged_in", user_id=user.id)
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def refresh(self, refresh_token: str) -> str:
        """Exchange a live refresh token for a new access token.

        The refresh token itself is not rotated; it stays valid until it
        expires or a later login replaces it.

        Returns:
            A new access token

        Raises:
            AuthenticationFault: If the token is invalid, expired or no longer
                the one stored for its user
            StoreError: If the database fails
        """
        try:
            claims = self.tokens.verify(refresh_token, TokenKind.REFRESH)
        except InvalidTokenError as e:
            logger.warning("refresh_token_invalid", reason=str(e))
            raise AuthenticationFault(INVALID_REFRESH_MESSAGE) from e

        user = await self.sessions.resolve_session(claims.id, refresh_token)
        if user is None:
            logger.warning("refresh_token_revoked", user_id=claims.id)
            raise AuthenticationFault(REVOKED_REFRESH_MESSAGE)

        logger.info("access_token_refreshed", user_id=user.id)
        return self.tokens.issue_access_token(user)
