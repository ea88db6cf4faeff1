"""Environment command handlers."""

from typing import Annotated, Optional

import typer
from rich.markup import escape

from ..api.models import Environment
from ..prompts import confirm, prompt_string, prompt_with_default
from ..session import Session
from .common import (
    authenticated_client,
    console,
    format_timestamp,
    handle_errors,
    print_field,
    resolve_project_id,
    select_environment,
)

ProjectOption = Annotated[
    Optional[str],
    typer.Option("--project", "-p", help="Project ID (defaults to the current project)"),
]
EnvironmentIdArgument = Annotated[
    Optional[str], typer.Argument(help="Environment ID (prompted when omitted)", show_default=False)
]


def _print_environment(environment: Environment):
    print_field("Name", environment.name)
    print_field("Description", environment.description)


def _pick(client, project_id: str, environment_id: str | None) -> str:
    if environment_id is None:
        return select_environment(client, project_id).id
    return environment_id


def create_environment(
    project: ProjectOption = None,
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Environment name")] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d", help="Environment description")
    ] = None,
):
    """Create a new environment in a project."""
    with handle_errors("create environment"), authenticated_client() as client:
        project_id = resolve_project_id(client, project)
        parent = client.projects.get(project_id)
        console.print(
            f"Creating environment for project: {escape(parent.name)} (ID: {escape(parent.id)})"
        )

        if name is None:
            name = prompt_string("Environment name", required=True)
        if description is None:
            description = prompt_string("Description (optional)")

        environment = client.environments.create(project_id, name, description)

    console.print("[green]Environment created successfully![/green]")
    print_field("ID", environment.id)
    _print_environment(environment)
    print_field("Project ID", environment.project_id)


def list_environments(project: ProjectOption = None):
    """List the environments of a project. The current environment is marked with *."""
    with handle_errors("list environments"), authenticated_client() as client:
        project_id = resolve_project_id(client, project)
        environments = client.environments.list(project_id)
        current = client.session.environment_id

    if not environments:
        console.print("No environments found")
        return

    console.print(f"Found {len(environments)} environment(s):\n")
    for environment in environments:
        marker = "*" if environment.id == current else " "
        console.print(f"{marker} ID: {escape(environment.id)}")
        _print_environment(environment)
        print_field("Created", format_timestamp(environment.created_at))
        console.print()


def get_environment(environment_id: EnvironmentIdArgument = None, project: ProjectOption = None):
    """Show the details of an environment."""
    with handle_errors("get environment"), authenticated_client() as client:
        project_id = resolve_project_id(client, project)
        environment_id = _pick(client, project_id, environment_id)
        environment = client.environments.get(project_id, environment_id)

    console.print("Environment Details:")
    print_field("ID", environment.id)
    _print_environment(environment)
    print_field("Project ID", environment.project_id)
    print_field("Created", format_timestamp(environment.created_at))
    print_field("Updated", format_timestamp(environment.updated_at))


def update_environment(
    environment_id: EnvironmentIdArgument = None, project: ProjectOption = None
):
    """Update the name or description of an environment."""
    with handle_errors("update environment"), authenticated_client() as client:
        project_id = resolve_project_id(client, project)
        environment_id = _pick(client, project_id, environment_id)
        environment = client.environments.get(project_id, environment_id)

        name = prompt_with_default("Environment name", environment.name)
        description = (
            prompt_string("Description (leave empty to keep current)") or environment.description
        )

        updated = client.environments.update(project_id, environment_id, name, description)

    console.print("[green]Environment updated successfully![/green]")
    _print_environment(updated)


def delete_environment(
    environment_id: EnvironmentIdArgument = None, project: ProjectOption = None
):
    """Delete an environment and its variables."""
    with handle_errors("delete environment"), authenticated_client() as client:
        project_id = resolve_project_id(client, project)
        environment_id = _pick(client, project_id, environment_id)
        environment = client.environments.get(project_id, environment_id)

        console.print(
            f"Are you sure you want to delete environment '{escape(environment.name)}' "
            f"(ID: {escape(environment.id)})?"
        )
        if not confirm("This action cannot be undone"):
            console.print("Operation cancelled")
            return

        client.environments.delete(project_id, environment_id)
        if client.session.environment_id == environment_id:
            client.session.clear_environment()

    console.print("Environment deleted successfully")


def use_environment(environment_id: EnvironmentIdArgument = None, project: ProjectOption = None):
    """Set the current environment used by variable commands."""
    with handle_errors("set current environment"), authenticated_client() as client:
        project_id = resolve_project_id(client, project)
        environment_id = _pick(client, project_id, environment_id)
        environment = client.environments.get(project_id, environment_id)

        if client.session.project_id != project_id:
            client.session.select_project(project_id)
        client.session.select_environment(environment.id)

    console.print(
        f"Now using environment: {escape(environment.name)} (ID: {escape(environment.id)})"
    )


def unset_environment():
    """Clear the current environment selection."""
    with handle_errors("clear current environment"):
        Session.load().clear_environment()

    console.print("Current environment cleared")
