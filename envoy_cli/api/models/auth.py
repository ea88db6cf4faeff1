"""Authentication-related Pydantic models."""

from pydantic import BaseModel, Field, field_validator

from ...validation import validate_email, validate_password
from .common import OpaqueID, Timestamp


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    name: str = Field(..., min_length=1)
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password(value)


class LoginRequest(BaseModel):
    """Request model for login."""

    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)


class User(BaseModel):
    """User data returned by register and login."""

    id: OpaqueID
    name: str
    email: str
    created_at: Timestamp = None


class AuthResponse(BaseModel):
    """Response model for authentication endpoints."""

    token: str
    user: User


class ProfileResponse(BaseModel):
    """Claims of the token currently in use."""

    user_id: OpaqueID
    email: str
    issued_at: int | None = None
    expires_at: int | None = None
