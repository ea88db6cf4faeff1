"""Environment variable command handlers, including .env import and export."""

import re
from pathlib import Path
from typing import Annotated, Optional

import structlog
import typer
from rich.markup import escape

from ..api.models import Variable
from ..envfile import parse_env_file, write_env_file
from ..errors import EnvoyError, ExpiredTokenError
from ..prompts import confirm, prompt_string, prompt_with_default
from .common import (
    authenticated_client,
    console,
    err_console,
    fail,
    format_timestamp,
    handle_errors,
    print_field,
    resolve_environment_id,
    resolve_project_id,
    select_variable,
)

logger = structlog.get_logger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9_.-]")
DEFAULT_IMPORT_FILE = ".env"

ProjectOption = Annotated[
    Optional[str],
    typer.Option("--project", "-p", help="Project ID (defaults to the current project)"),
]
EnvironmentOption = Annotated[
    Optional[str],
    typer.Option("--environment", "-e", help="Environment ID (defaults to the current environment)"),
]
VariableIdArgument = Annotated[
    Optional[str], typer.Argument(help="Variable ID (prompted when omitted)", show_default=False)
]


def sanitize_filename(name: str) -> str:
    """Make an environment name safe to use as a file suffix."""
    return UNSAFE_FILENAME_CHARS.sub("_", name).lower()


def _print_variable(variable: Variable):
    print_field("Key", variable.key)
    print_field("Value", variable.value)
    print_field("Description", variable.description)


def _target(client, project: str | None, environment: str | None) -> tuple[str, str]:
    project_id = resolve_project_id(client, project)
    environment_id = resolve_environment_id(client, project_id, environment)
    return project_id, environment_id


def create_variable(
    project: ProjectOption = None,
    environment: EnvironmentOption = None,
    key: Annotated[Optional[str], typer.Option("--key", "-k", help="Variable name")] = None,
    value: Annotated[Optional[str], typer.Option("--value", help="Variable value")] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d", help="Variable description")
    ] = None,
):
    """Create a variable in an environment."""
    with handle_errors("create variable"), authenticated_client() as client:
        project_id, environment_id = _target(client, project, environment)

        if key is None:
            key = prompt_string("Key", required=True)
        if value is None:
            value = prompt_string("Value")
        if description is None:
            description = prompt_string("Description (optional)")

        variable = client.variables.create(project_id, environment_id, key, value, description)

    console.print("[green]Variable created successfully![/green]")
    print_field("ID", variable.id)
    _print_variable(variable)


def list_variables(project: ProjectOption = None, environment: EnvironmentOption = None):
    """List the variables of an environment."""
    with handle_errors("list variables"), authenticated_client() as client:
        project_id, environment_id = _target(client, project, environment)
        variables = client.variables.list(project_id, environment_id)

    if not variables:
        console.print("No variables found")
        return

    console.print(f"Found {len(variables)} variable(s):\n")
    for variable in variables:
        print_field("ID", variable.id)
        _print_variable(variable)
        print_field("Updated", format_timestamp(variable.updated_at))
        console.print()


def get_variable(
    variable_id: VariableIdArgument = None,
    project: ProjectOption = None,
    environment: EnvironmentOption = None,
):
    """Show the details of a variable."""
    with handle_errors("get variable"), authenticated_client() as client:
        project_id, environment_id = _target(client, project, environment)
        if variable_id is None:
            variable_id = select_variable(client, project_id, environment_id).id
        variable = client.variables.get(project_id, environment_id, variable_id)

    console.print("Variable Details:")
    print_field("ID", variable.id)
    _print_variable(variable)
    print_field("Environment ID", variable.environment_id)
    print_field("Created", format_timestamp(variable.created_at))
    print_field("Updated", format_timestamp(variable.updated_at))


def update_variable(
    variable_id: VariableIdArgument = None,
    project: ProjectOption = None,
    environment: EnvironmentOption = None,
):
    """Update the key, value or description of a variable."""
    with handle_errors("update variable"), authenticated_client() as client:
        project_id, environment_id = _target(client, project, environment)
        if variable_id is None:
            variable_id = select_variable(client, project_id, environment_id).id
        variable = client.variables.get(project_id, environment_id, variable_id)

        key = prompt_with_default("Key", variable.key)
        value = prompt_string("Value (leave empty to keep current)") or variable.value
        description = (
            prompt_string("Description (leave empty to keep current)") or variable.description
        )

        updated = client.variables.update(
            project_id, environment_id, variable_id, key, value, description
        )

    console.print("[green]Variable updated successfully![/green]")
    _print_variable(updated)


def delete_variable(
    variable_id: VariableIdArgument = None,
    project: ProjectOption = None,
    environment: EnvironmentOption = None,
):
    """Delete a variable."""
    with handle_errors("delete variable"), authenticated_client() as client:
        project_id, environment_id = _target(client, project, environment)
        if variable_id is None:
            variable_id = select_variable(client, project_id, environment_id).id
        variable = client.variables.get(project_id, environment_id, variable_id)

        console.print(
            f"Are you sure you want to delete variable '{escape(variable.key)}' "
            f"(ID: {escape(variable.id)})?"
        )
        if not confirm("This action cannot be undone"):
            console.print("Operation cancelled")
            return

        client.variables.delete(project_id, environment_id, variable_id)

    console.print("Variable deleted successfully")


def import_variables(
    file: Annotated[
        Path, typer.Option("--file", "-f", help="Path to the .env file to import")
    ] = Path(DEFAULT_IMPORT_FILE),
    project: ProjectOption = None,
    environment: EnvironmentOption = None,
):
    """Import variables from a .env file into an environment."""
    with handle_errors("import variables"), authenticated_client() as client:
        if not file.is_file():
            fail(f"Warning: File '{file}' not found")

        try:
            variables = parse_env_file(file)
        except OSError as e:
            fail(f"Failed to parse file '{file}': {e}")

        if not variables:
            console.print(f"No variables found in {escape(str(file))}")
            return

        project_id, environment_id = _target(client, project, environment)

        console.print(f"Found {len(variables)} variable(s) in {escape(str(file))}:\n")
        for key, value in variables.items():
            console.print(f"  {escape(key)}={escape(value)}")
        console.print()

        if not confirm("Import these variables?"):
            console.print("Import cancelled")
            return

        created = 0
        failed = 0
        for key, value in variables.items():
            try:
                client.variables.create(project_id, environment_id, key, value)
            except ExpiredTokenError:
                raise
            except EnvoyError as e:
                failed += 1
                logger.info("variable_import_failed", key=key, error=str(e))
                err_console.print(f"Failed to import variable {escape(key)}: {escape(str(e))}")
                continue
            created += 1

    console.print(f"Successfully imported {created} variable(s)")
    if failed:
        fail(f"Failed to import {failed} variable(s)")


def export_variables(
    file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Output file (defaults to .env.<environment name>)"),
    ] = None,
    project: ProjectOption = None,
    environment: EnvironmentOption = None,
):
    """Export the variables of an environment to a .env file."""
    with handle_errors("export variables"), authenticated_client() as client:
        project_id, environment_id = _target(client, project, environment)

        if file is None:
            target = client.environments.get(project_id, environment_id)
            file = Path(f".env.{sanitize_filename(target.name)}")

        variables = client.variables.list(project_id, environment_id)
        if not variables:
            console.print("No variables to export")
            return

        if file.exists():
            console.print(f"Warning: File '{escape(str(file))}' already exists")
            if not confirm("Overwrite existing file?"):
                console.print("Export cancelled")
                return

        try:
            write_env_file(file, {v.key: v.value for v in variables})
        except OSError as e:
            fail(f"Failed to write file '{file}': {e}")

    console.print(f"Exported {len(variables)} variable(s) to {escape(str(file))}")
