"""Environment-related Pydantic models."""

from pydantic import BaseModel, Field, field_validator

from .common import OpaqueID, Timestamp


class EnvironmentRequest(BaseModel):
    """Request model for creating or updating an environment."""

    name: str = Field(..., min_length=1)
    description: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Environment(BaseModel):
    """Response model for environment data."""

    id: OpaqueID
    project_id: OpaqueID
    name: str
    description: str | None = None
    created_at: Timestamp = None
    updated_at: Timestamp = None
