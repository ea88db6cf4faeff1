"""Session state shared by the API client and the command handlers."""

from pathlib import Path

import structlog

from .config import load_config, resolve_server_url, update_config

logger = structlog.get_logger(__name__)


class Session:
    """Server URL, bearer token and current selections for one invocation.

    The session is loaded from the config file when a command starts. Every
    mutation is written straight back to the config file so that later
    invocations see it.
    """

    def __init__(
        self,
        server_url: str,
        token: str | None = None,
        project_id: str | None = None,
        environment_id: str | None = None,
        config_file: Path | None = None,
    ):
        self.server_url = server_url
        self.token = token or None
        self.project_id = project_id
        self.environment_id = environment_id
        self.config_file = config_file

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Session":
        config = load_config(config_file)
        return cls(
            server_url=resolve_server_url(config),
            token=config.token,
            project_id=config.project_id,
            environment_id=config.environment_id,
            config_file=config_file,
        )

    @property
    def logged_in(self) -> bool:
        return self.token is not None

    def adopt_token(self, token: str):
        """Persist a freshly issued token and use it for the rest of the process."""
        update_config(self.config_file, token=token)
        self.token = token
        logger.info("token_saved")

    def clear_token(self):
        update_config(self.config_file, token=None)
        self.token = None
        logger.info("token_cleared")

    def select_project(self, project_id: str):
        # A selected environment belongs to the previous project.
        update_config(self.config_file, project_id=project_id, environment_id=None)
        self.project_id = project_id
        self.environment_id = None

    def clear_project(self):
        update_config(self.config_file, project_id=None, environment_id=None)
        self.project_id = None
        self.environment_id = None

    def select_environment(self, environment_id: str):
        update_config(self.config_file, environment_id=environment_id)
        self.environment_id = environment_id

    def clear_environment(self):
        update_config(self.config_file, environment_id=None)
        self.environment_id = None
