"""Service-layer faults mapped to HTTP error envelopes.

Every fault carries an HTTP ``status_code`` and a caller-safe ``message``.
Collaborator failures (asyncpg, bcrypt, PyJWT) are never surfaced verbatim:
components translate them into one of the classes below before raising.
"""

from typing import Optional

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ServiceError(Exception):
    """Base class for faults that map to an error response."""

    status_code: int = 400

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationFault(ServiceError):
    """Field-scoped, user-correctable input problem (422).

    Attributes:
        errors: Mapping of field name to the list of messages for that field
    """

    status_code = 422

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__("Validation failed")
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFault":
        return cls({field: [message]})


class CredentialsFault(ServiceError):
    """Wrong email or password at login (400)."""

    status_code = 400

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class AuthenticationFault(ServiceError):
    """Missing, malformed, invalid or revoked credential (401)."""

    status_code = 401


class AuthorizationFault(ServiceError):
    """Valid identity with an insufficient role (403)."""

    status_code = 403


class NotFoundFault(ServiceError):
    """Referenced room or booking does not exist (404)."""

    status_code = 404


class InternalFault(ServiceError):
    """Store or primitive failure (500). The message is generic on purpose."""

    status_code = 500

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(message)


class HashingError(InternalFault):
    """The password hashing primitive failed."""


class StoreError(InternalFault):
    """The persistence store failed (connection, query or pool)."""


class InvalidTokenError(Exception):
    """A JWT failed signature, structure, claim or expiry checks.

    Not a ServiceError: callers decide which 401 message it becomes.
    """


__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "ServiceError",
    "ValidationFault",
    "CredentialsFault",
    "AuthenticationFault",
    "AuthorizationFault",
    "NotFoundFault",
    "InternalFault",
    "HashingError",
    "StoreError",
    "InvalidTokenError",
]
