"""Helpers shared by the command handlers: consoles, error reporting and selection."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import NoReturn

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from ..api import EnvoyClient
from ..api.models import Environment, Project, Variable
from ..errors import (
    EnvoyError,
    ExpiredTokenError,
    NoTokenError,
    OperationCancelled,
    TransportError,
)
from ..prompts import SelectOption, prompt_select
from ..session import Session

logger = structlog.get_logger(__name__)

# Regular output goes to stdout, errors and guidance to stderr
console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

LOGIN_HINT = "Please login first using 'envoy login'"
EXPIRED_HINT = "Your session has expired. Please login again using 'envoy login'"


def fail(message: str, hint: str | None = None) -> NoReturn:
    """Print an error (and optional guidance) to stderr and exit with status 1."""
    err_console.print(escape(message))
    if hint:
        err_console.print(escape(hint))
    raise typer.Exit(1)


@contextmanager
def handle_errors(action: str) -> Iterator[None]:
    """Translate Envoy errors raised inside the block into a message and an exit code.

    Args:
        action: What the command was doing, e.g. "list projects"
    """
    try:
        yield
    except OperationCancelled:
        console.print("Operation cancelled")
        raise typer.Exit()
    except NoTokenError as e:
        fail(f"Error: {e}", LOGIN_HINT)
    except ExpiredTokenError as e:
        fail(f"Failed to {action}: {e}", EXPIRED_HINT)
    except TransportError as e:
        logger.debug("transport_failed", action=action, error=str(e))
        fail(f"Failed to {action}: {e}", f"Could not connect to the Envoy server at {e.url}")
    except EnvoyError as e:
        fail(f"Failed to {action}: {e}")


def open_client() -> EnvoyClient:
    return EnvoyClient(Session.load())


@contextmanager
def authenticated_client() -> Iterator[EnvoyClient]:
    """Open a client, failing before any request when nobody is logged in."""
    client = open_client()
    try:
        client.require_token()
        yield client
    finally:
        client.close()


@contextmanager
def anonymous_client() -> Iterator[EnvoyClient]:
    client = open_client()
    try:
        yield client
    finally:
        client.close()


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%S")


def format_unix_time(value: int | None) -> str:
    if value is None:
        return "-"
    moment = datetime.fromtimestamp(value, tz=timezone.utc)
    return f"{value} ({moment.strftime('%Y-%m-%d %H:%M:%S')} UTC)"


def print_field(label: str, value: object | None, indent: str = "  "):
    """Print ``label: value``; empty values are skipped."""
    if value is None or value == "":
        return
    console.print(f"{indent}{label}: {escape(str(value))}")


def _label(name: str, description: str | None) -> str:
    return f"{name} - {description}" if description else name


# Interactive selection


def select_project(client: EnvoyClient, message: str = "Select a project") -> Project:
    projects = client.projects.list()
    if not projects:
        fail("No projects found. Please create a project first with 'envoy projects create'")

    options = [SelectOption(_label(p.name, p.description), p.id) for p in projects]
    project_id = prompt_select(message, options)
    return next(p for p in projects if p.id == project_id)


def select_environment(
    client: EnvoyClient, project_id: str, message: str = "Select an environment"
) -> Environment:
    environments = client.environments.list(project_id)
    if not environments:
        fail(
            "No environments found. "
            "Please create an environment first with 'envoy environments create'"
        )

    options = [SelectOption(_label(e.name, e.description), e.id) for e in environments]
    environment_id = prompt_select(message, options)
    return next(e for e in environments if e.id == environment_id)


def select_variable(
    client: EnvoyClient, project_id: str, environment_id: str, message: str = "Select a variable"
) -> Variable:
    variables = client.variables.list(project_id, environment_id)
    if not variables:
        fail("No variables found. Please create a variable first with 'envoy variables create'")

    options = [SelectOption(_label(v.key, v.description), v.id) for v in variables]
    variable_id = prompt_select(message, options)
    return next(v for v in variables if v.id == variable_id)


# Resolution order: explicit option, then the saved selection, then an interactive menu


def resolve_project_id(client: EnvoyClient, project_id: str | None) -> str:
    if project_id:
        return project_id
    if client.session.project_id:
        return client.session.project_id
    return select_project(client).id


def resolve_environment_id(
    client: EnvoyClient, project_id: str, environment_id: str | None
) -> str:
    if environment_id:
        return environment_id
    # The saved environment only applies to the saved project
    if client.session.environment_id and project_id == client.session.project_id:
        return client.session.environment_id
    return select_environment(client, project_id).id
