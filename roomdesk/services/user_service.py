"""User record access backed by PostgreSQL."""

from typing import Optional

import asyncpg
import structlog

from roomdesk.database import connection
from roomdesk.models.user import Role, User
from roomdesk.services.errors import ValidationFault

logger = structlog.get_logger(__name__)

EMAIL_TAKEN_MESSAGE = "Email is already registered"

_USER_COLUMNS = "id, first_name, last_name, email, password_hash, role, refresh_token"


def _row_to_user(row) -> User:
    return User(
        id=row["id"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        refresh_token=row["refresh_token"],
    )


class UserService:
    """Service for user record operations.

    All methods raise StoreError when the database is unreachable or a
    query fails; absence is reported as None, never as an error.
    """

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
    ) -> User:
        """Insert a new user.

        Args:
            first_name: Given name
            last_name: Family name
            email: Unique login email
            password_hash: Already-hashed password
            role: Access role

        Returns:
            Created User model

        Raises:
            ValidationFault: If the email is already registered
            StoreError: If the database fails
        """
        async with connection() as conn:
            try:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO users (first_name, last_name, email, password_hash, role)
                    VALUES ($1, $2, $3, $4, $5)
                    RETURNING {_USER_COLUMNS}
                    """,
                    first_name,
                    last_name,
                    email,
                    password_hash,
                    role.value,
                )
            except asyncpg.UniqueViolationError:
                logger.warning("user_create_conflict", field="email")
                raise ValidationFault.for_field("email", EMAIL_TAKEN_MESSAGE)

        logger.info("user_created", user_id=row["id"], role=role.value)
        return _row_to_user(row)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, or None if not found."""
        async with connection() as conn:
            row = await conn.fetchrow(
                f"SELECT {_USER_COLUMNS} FROM users WHERE email = $1",
                email,
            )
        return _row_to_user(row) if row is not None else None

    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by id, or None if not found."""
        async with connection() as conn:
            row = await conn.fetchrow(
                f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1",
                user_id,
            )
        return _row_to_user(row) if row is not None else None

    async def email_exists(self, email: str) -> bool:
        """Check whether an email is already registered."""
        async with connection() as conn:
            found = await conn.fetchval(
                "SELECT EXISTS(SELECT 1 FROM users WHERE email = $1)",
                email,
            )
        return bool(found)

    async def update_refresh_token(self, user_id: int, token: Optional[str]) -> None:
        """Overwrite the stored refresh token for a user.

        Args:
            user_id: Id of the user
            token: New refresh token, or None to clear the slot
        """
        async with connection() as conn:
            await conn.execute(
                """
                UPDATE users
                SET refresh_token = $1, updated_at = NOW()
                WHERE id = $2
                """,
                token,
                user_id,
            )

    async def update_role(self, user_id: int, role: Role) -> None:
        """Change a user's role."""
        async with connection() as conn:
            await conn.execute(
                "UPDATE users SET role = $1, updated_at = NOW() WHERE id = $2",
                role.value,
                user_id,
            )
        logger.info("user_role_updated", user_id=user_id, role=role.value)
