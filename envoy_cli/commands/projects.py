"""Project command handlers."""

from typing import Annotated, Optional

import structlog
import typer
from rich.markup import escape

from ..api.models import Project
from ..git import detect_git_info
from ..prompts import confirm, prompt_string, prompt_with_default
from ..session import Session
from .common import (
    authenticated_client,
    console,
    format_timestamp,
    handle_errors,
    print_field,
    select_project,
)

logger = structlog.get_logger(__name__)

ProjectIdArgument = Annotated[
    Optional[str], typer.Argument(help="Project ID (prompted when omitted)", show_default=False)
]


def _print_project(project: Project):
    print_field("Name", project.name)
    print_field("Description", project.description)
    print_field("Git Repository", project.git_repo)


def _ask_git_repo() -> str:
    """Offer the origin of the enclosing git repository, or ask for one."""
    git = detect_git_info()
    detected = git.repo_slug()
    logger.debug("git_detected", has_git=git.has_git, host=git.host, repo=detected)

    if detected:
        console.print(f"Detected git repository: {escape(detected)}")
        if confirm("Use this git repository?"):
            return detected

    return prompt_string("Git repository (owner/repo, optional)")


def create_project(
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Project name")] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d", help="Project description")
    ] = None,
    git_repo: Annotated[
        Optional[str], typer.Option("--git-repo", "-g", help="Git repository (owner/repo)")
    ] = None,
):
    """Create a new project, optionally tracking a git repository."""
    with handle_errors("create project"), authenticated_client() as client:
        if name is None:
            name = prompt_string("Project name", required=True)
        if description is None:
            description = prompt_string("Description (optional)")
        if git_repo is None:
            git_repo = _ask_git_repo()

        project = client.projects.create(name, description, git_repo)

    console.print("[green]Project created successfully![/green]")
    print_field("ID", project.id)
    _print_project(project)


def list_projects():
    """List your projects. The current project is marked with *."""
    with handle_errors("list projects"), authenticated_client() as client:
        projects = client.projects.list()
        current = client.session.project_id

    if not projects:
        console.print("No projects found")
        return

    console.print(f"Found {len(projects)} project(s):\n")
    for project in projects:
        marker = "*" if project.id == current else " "
        console.print(f"{marker} ID: {escape(project.id)}")
        _print_project(project)
        print_field("Created", format_timestamp(project.created_at))
        console.print()


def get_project(project_id: ProjectIdArgument = None):
    """Show the details of a project."""
    with handle_errors("get project"), authenticated_client() as client:
        if project_id is None:
            project_id = select_project(client).id
        project = client.projects.get(project_id)

    console.print("Project Details:")
    print_field("ID", project.id)
    _print_project(project)
    print_field("Owner ID", project.owner_id)
    print_field("Created", format_timestamp(project.created_at))
    print_field("Updated", format_timestamp(project.updated_at))


def update_project(project_id: ProjectIdArgument = None):
    """Update the name, description or git repository of a project."""
    with handle_errors("update project"), authenticated_client() as client:
        if project_id is None:
            project_id = select_project(client).id
        project = client.projects.get(project_id)

        name = prompt_with_default("Project name", project.name)
        description = (
            prompt_string("Description (leave empty to keep current)") or project.description
        )
        git_repo = (
            prompt_string("Git repository owner/repo (leave empty to keep current)")
            or project.git_repo
        )

        updated = client.projects.update(project_id, name, description, git_repo)

    console.print("[green]Project updated successfully![/green]")
    _print_project(updated)


def delete_project(project_id: ProjectIdArgument = None):
    """Delete a project permanently."""
    with handle_errors("delete project"), authenticated_client() as client:
        if project_id is None:
            project_id = select_project(client).id
        project = client.projects.get(project_id)

        console.print(
            f"Are you sure you want to delete project '{escape(project.name)}' "
            f"(ID: {escape(project.id)})?"
        )
        if not confirm("This action cannot be undone"):
            console.print("Operation cancelled")
            return

        client.projects.delete(project_id)
        if client.session.project_id == project_id:
            client.session.clear_project()

    console.print("Project deleted successfully")


def use_project(project_id: ProjectIdArgument = None):
    """Set the current project used by environment and variable commands."""
    with handle_errors("set current project"), authenticated_client() as client:
        if project_id is None:
            project = select_project(client)
        else:
            project = client.projects.get(project_id)
        client.session.select_project(project.id)

    console.print(f"Now using project: {escape(project.name)} (ID: {escape(project.id)})")


def unset_project():
    """Clear the current project selection."""
    with handle_errors("clear current project"):
        Session.load().clear_project()

    console.print("Current project cleared")
