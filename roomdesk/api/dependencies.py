"""FastAPI dependencies for authentication and authorization."""

from typing import Optional

import structlog
from fastapi import Depends, Header, Request

from roomdesk.config import get_settings
from roomdesk.models.user import AuthenticatedUser, Role
from roomdesk.services.errors import (
    AuthenticationFault,
    AuthorizationFault,
    InvalidTokenError,
)
from roomdesk.services.token_service import TokenKind, TokenService
from roomdesk.services.user_service import UserService

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "Bearer "
MALFORMED_HEADER_MESSAGE = "Authorization header must be in format: Bearer <token>"
MISSING_TOKEN_MESSAGE = "Token is missing"
INVALID_TOKEN_MESSAGE = "Invalid token"
UNKNOWN_USER_MESSAGE = "user not found"


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header.

    Raises:
        AuthenticationFault: If the header is absent, not a Bearer header,
            or carries no token
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationFault(MALFORMED_HEADER_MESSAGE)

    parts = authorization.split(" ")
    token = parts[1] if len(parts) > 1 else ""
    if not token.strip():
        raise AuthenticationFault(MISSING_TOKEN_MESSAGE)
    return token


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> AuthenticatedUser:
    """Resolve the bearer access token to a live user.

    Checks run in order and the first failure wins: header format, empty
    token, signature/expiry, user lookup. The resolved identity is also
    stored on ``request.state.user``.

    Raises:
        AuthenticationFault: 401 with the message of the failed check
        StoreError: If the user lookup itself fails
    """
    token = extract_bearer_token(authorization)

    tokens = TokenService(get_settings())
    try:
        claims = tokens.verify(token, TokenKind.ACCESS)
    except InvalidTokenError as e:
        logger.warning("access_token_rejected", reason=str(e))
        raise AuthenticationFault(INVALID_TOKEN_MESSAGE) from e

    user_service = UserService()
    user = await user_service.find_by_id(claims.user_id)
    if user is None:
        logger.warning("access_token_user_missing", user_id=claims.user_id)
        raise AuthenticationFault(UNKNOWN_USER_MESSAGE)

    identity = user.public()
    request.state.user = identity
    structlog.contextvars.bind_contextvars(user_id=identity.id)
    return identity


async def require_admin(
    current_user: Optional[AuthenticatedUser] = Depends(get_current_user),
) -> AuthenticatedUser:
    """Require the current user to have the ADMIN role.

    Raises:
        AuthenticationFault: 401 if no identity was resolved
        AuthorizationFault: 403 if the user is not an admin
    """
    if current_user is None:
        raise AuthenticationFault("Unauthorized")
    if current_user.role is not Role.ADMIN:
        raise AuthorizationFault("Admin access required")
    return current_user
