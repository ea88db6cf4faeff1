"""Environment variable Pydantic models."""

from pydantic import BaseModel, Field, field_validator

from .common import OpaqueID, Timestamp


class VariableRequest(BaseModel):
    """Request model for creating or updating an environment variable."""

    key: str = Field(..., min_length=1)
    value: str
    description: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Variable(BaseModel):
    """Response model for environment variable data."""

    id: OpaqueID
    environment_id: OpaqueID
    key: str
    value: str
    description: str | None = None
    created_at: Timestamp = None
    updated_at: Timestamp = None
