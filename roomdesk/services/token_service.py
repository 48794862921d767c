"""JWT issuance and verification for access and refresh tokens.

Access and refresh tokens are signed with two independent secrets so that a
leaked secret for one token class cannot be used to forge the other.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Union
from uuid import uuid4

import jwt
import structlog
from pydantic import ValidationError

from roomdesk.config import Settings
from roomdesk.models.auth import AccessClaims, RefreshClaims
from roomdesk.models.user import AuthenticatedUser
from roomdesk.services.errors import InvalidTokenError

logger = structlog.get_logger(__name__)

JWT_ALGORITHM = "HS256"


class TokenKind(str, Enum):
    """Token classes, each with its own secret and claim set."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenService:
    """Issues and verifies signed access and refresh tokens."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def access_ttl(self) -> timedelta:
        return timedelta(minutes=self.settings.access_token_expire_minutes)

    @property
    def refresh_ttl(self) -> timedelta:
        return timedelta(days=self.settings.refresh_token_expire_days)

    def _secret_for(self, kind: TokenKind) -> str:
        if kind is TokenKind.ACCESS:
            return self.settings.jwt_secret
        return self.settings.jwt_refresh_secret

    def issue_access_token(
        self, user: AuthenticatedUser, now: Optional[datetime] = None
    ) -> str:
        """Create a signed access token carrying the user's identity claims.

        Args:
            user: Identity to embed (id, names, email)
            now: Issue time, defaults to the current UTC time

        Returns:
            Encoded JWT string
        """
        now = now or datetime.now(timezone.utc)
        payload = {
            "userId": user.id,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "email": user.email,
            "iat": now,
            "exp": now + self.access_ttl,
        }
        token = jwt.encode(payload, self._secret_for(TokenKind.ACCESS), algorithm=JWT_ALGORITHM)
        logger.debug(
            "access_token_created",
            user_id=user.id,
            expires_minutes=self.settings.access_token_expire_minutes,
        )
        return token

    def issue_refresh_token(self, user_id: int, now: Optional[datetime] = None) -> str:
        """Create a signed refresh token that carries only the user id.

        A random ``jti`` makes every issued token distinct, so two logins in
        the same second still produce different stored values.

        Args:
            user_id: Id of the user the token belongs to
            now: Issue time, defaults to the current UTC time

        Returns:
            Encoded JWT string
        """
        now = now or datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "jti": uuid4().hex,
            "iat": now,
            "exp": now + self.refresh_ttl,
        }
        token = jwt.encode(payload, self._secret_for(TokenKind.REFRESH), algorithm=JWT_ALGORITHM)
        logger.debug(
            "refresh_token_created",
            user_id=user_id,
            expires_days=self.settings.refresh_token_expire_days,
        )
        return token

    def verify(self, token: str, kind: TokenKind) -> Union[AccessClaims, RefreshClaims]:
        """Decode and validate a token of the given kind.

        The token is accepted until its ``exp`` instant and rejected after.

        Args:
            token: Encoded JWT string
            kind: Which secret and claim set to verify against

        Returns:
            AccessClaims or RefreshClaims

        Raises:
            InvalidTokenError: On bad signature, malformed token, missing
                claims or expiry
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_for(kind),
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError(f"{kind.value} token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid {kind.value} token: {e}") from e

        try:
            if kind is TokenKind.ACCESS:
                return AccessClaims.model_validate(payload)
            return RefreshClaims.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError(f"Invalid {kind.value} token payload") from e
