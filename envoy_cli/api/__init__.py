"""Client for the Envoy REST API."""

from .base import DEFAULT_TIMEOUT, EXPIRED_TOKEN_MESSAGE, BaseClient
from .client import EnvoyClient

__all__ = [
    "BaseClient",
    "DEFAULT_TIMEOUT",
    "EXPIRED_TOKEN_MESSAGE",
    "EnvoyClient",
]
