"""Auth request, response and token-claim models with validation."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from roomdesk.models.user import Role


def _require_min_length(value: str, minimum: int, label: str) -> str:
    if len(value.strip()) < minimum:
        raise ValueError(f"{label} must be at least {minimum} characters long")
    return value.strip()


class RegisterRequest(BaseModel):
    """Self-service registration payload.

    Attributes:
        first_name: Given name (min 2 chars)
        last_name: Family name (min 2 chars)
        email: Login email, must not already be registered
        password: Plain-text password (min 6 chars)
    """

    first_name: str
    last_name: str
    email: EmailStr
    password: str

    @field_validator("first_name")
    @classmethod
    def first_name_length(cls, v: str) -> str:
        return _require_min_length(v, 2, "First name")

    @field_validator("last_name")
    @classmethod
    def last_name_length(cls, v: str) -> str:
        return _require_min_length(v, 2, "Last name")

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return v


class CreateUserRequest(RegisterRequest):
    """Admin request to create a user with an explicit role."""

    role: Role = Role.USER


class LoginRequest(BaseModel):
    """Login credentials."""

    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < 4:
            raise ValueError("Password must be at least 4 characters long")
        return v


class RefreshRequest(BaseModel):
    """Request to exchange a refresh token for a new access token."""

    refresh_token: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Successful login envelope with the issued token pair."""

    status: str = "success"
    message: str = "Login successful"
    access_token: str
    refresh_token: str


class RefreshResponse(BaseModel):
    """Successful refresh envelope. Only a new access token is issued."""

    status: str = "success"
    access_token: str


class AccessClaims(BaseModel):
    """Decoded access token payload.

    Claim names match the wire format (camelCase).
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    iat: int
    exp: int


class RefreshClaims(BaseModel):
    """Decoded refresh token payload."""

    id: int
    jti: Optional[str] = None
    iat: int
    exp: int


class MessageResponse(BaseModel):
    """Generic success envelope."""

    status: str = "success"
    message: Optional[str] = None
