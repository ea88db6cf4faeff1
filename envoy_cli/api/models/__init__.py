"""Pydantic models for API requests and responses."""

from .auth import AuthResponse, LoginRequest, ProfileResponse, RegisterRequest, User
from .common import OpaqueID, Timestamp
from .environments import Environment, EnvironmentRequest
from .projects import Project, ProjectRequest
from .variables import Variable, VariableRequest

__all__ = [
    # Auth models
    "AuthResponse",
    # Environment models
    "Environment",
    "EnvironmentRequest",
    "LoginRequest",
    # Field types
    "OpaqueID",
    "ProfileResponse",
    # Project models
    "Project",
    "ProjectRequest",
    "RegisterRequest",
    "Timestamp",
    "User",
    # Variable models
    "Variable",
    "VariableRequest",
]
