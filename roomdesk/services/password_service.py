"""Password hashing and verification with bcrypt."""

from typing import Optional

import bcrypt
import structlog

from roomdesk.config import get_settings
from roomdesk.services.errors import HashingError

logger = structlog.get_logger(__name__)

# bcrypt only reads this many bytes of input; longer passwords are truncated
BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain-text password to hash
        rounds: bcrypt cost factor (defaults to settings.bcrypt_rounds)

    Returns:
        Bcrypt hash string

    Raises:
        HashingError: If bcrypt fails
    """
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(_password_bytes(password), salt)
    except (ValueError, TypeError) as e:
        logger.error("password_hash_failed", error_type=type(e).__name__)
        raise HashingError("Failed to hash password.") from e
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against a bcrypt hash.

    Args:
        password: Plain-text password to check
        password_hash: Bcrypt hash to verify against

    Returns:
        True if the password matches, False otherwise

    Raises:
        HashingError: If the stored hash is unusable or bcrypt fails
    """
    try:
        return bcrypt.checkpw(
            _password_bytes(password),
            password_hash.encode("utf-8"),
        )
    except (ValueError, TypeError) as e:
        logger.error("password_verify_failed", error_type=type(e).__name__)
        raise HashingError("Failed to validate password") from e
