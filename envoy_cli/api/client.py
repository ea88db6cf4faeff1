"""Composite client exposing every Envoy resource over one connection."""

import httpx

from ..errors import NoTokenError
from ..session import Session
from .auth import AuthController
from .base import DEFAULT_TIMEOUT, BaseClient
from .environments import EnvironmentsController
from .projects import ProjectsController
from .variables import VariablesController


class EnvoyClient:
    """Envoy API client.

    The auth, projects, environments and variables controllers share a single
    ``BaseClient``, so a token adopted by ``auth.login`` is used by every later
    call in the same process.

    Example:
        >>> with EnvoyClient(Session.load()) as client:
        ...     client.require_token()
        ...     for project in client.projects.list():
        ...         print(project.name)
    """

    def __init__(
        self,
        session: Session,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base = BaseClient(session, timeout=timeout, transport=transport)
        self.auth = AuthController(self.base)
        self.projects = ProjectsController(self.base)
        self.environments = EnvironmentsController(self.base)
        self.variables = VariablesController(self.base)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.base.close()

    @property
    def session(self) -> Session:
        return self.base.session

    def require_token(self):
        """Fail before any request is made when nobody is logged in."""
        if not self.session.logged_in:
            raise NoTokenError()
