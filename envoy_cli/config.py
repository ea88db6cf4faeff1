"""Configuration and storage utilities for the CLI client."""

import json
import os
from pathlib import Path

import structlog
from pydantic import BaseModel, ValidationError

from .errors import ConfigError

logger = structlog.get_logger(__name__)

# Configuration
CONFIG_DIR = Path.home() / ".envoy"
CONFIG_FILE = CONFIG_DIR / "config.json"
DEFAULT_SERVER_URL = "https://envoy.webiliti.com"
SERVER_URL_ENV = "ENVOY_SERVER_URL"


class Config(BaseModel):
    """Contents of the config file."""

    server_url: str | None = None
    token: str | None = None
    project_id: str | None = None
    environment_id: str | None = None


def load_config(path: Path | None = None) -> Config:
    """Load the config file, returning an empty config when it does not exist."""
    path = path or CONFIG_FILE
    if not path.exists():
        return Config()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"failed to read config file: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"failed to parse config file {path}: {e}") from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"failed to parse config file {path}: {e}") from e


def save_config(config: Config, path: Path | None = None):
    """Write the config file, readable by the owning user only."""
    path = path or CONFIG_FILE
    try:
        path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        # 0600 from creation; fchmod also tightens a file that already existed.
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            os.fchmod(f.fileno(), 0o600)
            f.write(json.dumps(config.model_dump(exclude_none=True), indent=2))
    except OSError as e:
        raise ConfigError(f"failed to write config file: {e}") from e

    logger.debug("config_saved", path=str(path))


def update_config(path: Path | None = None, **changes) -> Config:
    """Read the config file, apply changes and write it back."""
    config = load_config(path).model_copy(update=changes)
    save_config(config, path)
    return config


def resolve_server_url(config: Config) -> str:
    """Server URL priority: config file > ENVOY_SERVER_URL > production default."""
    if config.server_url:
        return config.server_url

    env_url = os.environ.get(SERVER_URL_ENV)
    if env_url:
        return env_url

    return DEFAULT_SERVER_URL
