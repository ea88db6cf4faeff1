"""Project-related Pydantic models."""

from pydantic import BaseModel, Field, field_validator

from .common import OpaqueID, Timestamp


class ProjectRequest(BaseModel):
    """Request model for creating or updating a project.

    Blank optional fields are sent as null; update always resends every field.
    """

    name: str = Field(..., min_length=1)
    description: str | None = None
    git_repo: str | None = None

    @field_validator("description", "git_repo", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Project(BaseModel):
    """Response model for project data."""

    id: OpaqueID
    name: str
    description: str | None = None
    git_repo: str | None = None
    owner_id: OpaqueID | None = None
    created_at: Timestamp = None
    updated_at: Timestamp = None
