"""Unit tests for UserService.

Tests user record operations with a mocked asyncpg pool.
"""

import asyncpg
import pytest

from roomdesk.models.user import Role, User
from roomdesk.services.errors import ValidationFault
from roomdesk.services.user_service import EMAIL_TAKEN_MESSAGE, UserService


def _user_row(user_id=1, email="ada@example.com", role="USER", refresh_token=None):
    return {
        "id": user_id,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": email,
        "password_hash": "$2b$04$hash",
        "role": role,
        "refresh_token": refresh_token,
    }


@pytest.fixture
def service():
    return UserService()


class TestCreateUser:

    async def test_inserts_and_returns_user(self, service, mock_pool):
        _, conn = mock_pool
        conn.fetchrow.return_value = _user_row(user_id=3, role="ADMIN")

        user = await service.create_user(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            password_hash="$2b$04$hash",
            role=Role.ADMIN,
        )

        assert isinstance(user, User)
        assert user.id == 3
        assert user.role is Role.ADMIN
        sql, *params = conn.fetchrow.call_args.args
        assert "INSERT INTO users" in sql
        assert params == ["Ada", "Lovelace", "ada@example.com", "$2b$04$hash", "ADMIN"]


class TestLookups:

    async def test_find_by_email(self, service, mock_pool):
        _, conn = mock_pool
        conn.fetchrow.return_value = _user_row(refresh_token="rt")

        user = await service.find_by_email("ada@example.com")

        assert user.email == "ada@example.com"
        assert user.refresh_token == "rt"
        assert conn.fetchrow.call_args.args[1] == "ada@example.com"

    async def test_find_by_email_missing(self, service, mock_pool):
        _, conn = mock_pool
        conn.fetchrow.return_value = None

        assert await service.find_by_email("nobody@example.com") is None

    async def test_find_by_id(self, service, mock_pool):
        _, conn = mock_pool
        conn.fetchrow.return_value = _user_row(user_id=8)

        user = await service.find_by_id(8)

        assert user.id == 8
        assert user.role is Role.USER

    async def test_find_by_id_missing(self, service, mock_pool):
        _, conn = mock_pool
        conn.fetchrow.return_value = None

        assert await service.find_by_id(8) is None

    @pytest.mark.parametrize("found", [True, False])
    async def test_email_exists(self, service, mock_pool, found):
        _, conn = mock_pool
        conn.fetchval.return_value = found

        assert await service.email_exists("ada@example.com") is found


class TestUpdates:

    async def test_update_refresh_token(self, service, mock_pool):
        _, conn = mock_pool

        await service.update_refresh_token(4, "new-token")

        sql, token, user_id = conn.execute.call_args.args
        assert "SET refresh_token = $1" in sql
        assert (token, user_id) == ("new-token", 4)

    async def test_clear_refresh_token(self, service, mock_pool):
        _, conn = mock_pool

        await service.update_refresh_token(4, None)

        assert conn.execute.call_args.args[1] is None

    async def test_update_role(self, service, mock_pool):
        _, conn = mock_pool

        await service.update_role(4, Role.ADMIN)

        assert conn.execute.call_args.args[1:] == ("ADMIN", 4)


class TestCreateUserConflict:

    async def test_concurrent_duplicate_email_is_field_error(self, service, mock_pool):
        _, conn = mock_pool
        conn.fetchrow.side_effect = asyncpg.UniqueViolationError(
            'duplicate key value violates unique constraint "users_email_key"'
        )

        with pytest.raises(ValidationFault) as exc_info:
            await service.create_user(
                first_name="Ada",
                last_name="Lovelace",
                email="ada@example.com",
                password_hash="$2b$04$hash",
            )

        assert exc_info.value.errors == {"email": [EMAIL_TAKEN_MESSAGE]}
        assert exc_info.value.status_code == 422
