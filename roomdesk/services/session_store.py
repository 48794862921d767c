"""Refresh-token session store.

Each user has a single refresh-token slot on their user record. Recording a
new token overwrites the slot, which revokes whatever token was there before,
even if that token is still cryptographically valid. One live session per
user is the intended model.
"""

from typing import Optional

import structlog

from roomdesk.models.user import User
from roomdesk.services.user_service import UserService

logger = structlog.get_logger(__name__)


class SessionStore:
    """Records and checks the currently-honoured refresh token per user."""

    def __init__(self, user_service: Optional[UserService] = None):
        self.user_service = user_service or UserService()

    async def record_refresh_token(self, user_id: int, token: str) -> None:
        """Store ``token`` as the only valid refresh token for ``user_id``."""
        await self.user_service.update_refresh_token(user_id, token)
        logger.info("refresh_token_recorded", user_id=user_id)

    async def get_refresh_token(self, user_id: int) -> Optional[str]:
        """Return the stored refresh token, or None if absent or no such user."""
        user = await self.user_service.find_by_id(user_id)
        if user is None:
            return None
        return user.refresh_token

    async def resolve_session(self, user_id: int, token: str) -> Optional[User]:
        """Return the user whose stored refresh token is exactly ``token``.

        Returns None when the user does not exist, has no stored token, or
        holds a different (newer) token.
        """
        user = await self.user_service.find_by_id(user_id)
        if user is None or user.refresh_token is None:
            return None
        if user.refresh_token != token:
            return None
        return user

    async def is_current(self, user_id: int, token: str) -> bool:
        """Check that ``token`` is exactly the stored refresh token."""
        return await self.resolve_session(user_id, token) is not None
