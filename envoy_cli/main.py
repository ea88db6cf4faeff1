"""Entry point for the envoy command."""

from typing import Annotated

import typer
from dotenv import load_dotenv

from . import __version__
from .commands import (
    create_environment,
    create_project,
    create_variable,
    delete_environment,
    delete_project,
    delete_variable,
    export_variables,
    get_environment,
    get_project,
    get_variable,
    import_variables,
    list_environments,
    list_projects,
    list_variables,
    login_user,
    logout_user,
    register_user,
    show_profile,
    unset_environment,
    unset_project,
    update_environment,
    update_project,
    update_variable,
    use_environment,
    use_project,
)
from .commands.common import console
from .observability import configure_logging

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

app = typer.Typer(
    name="envoy",
    help="Manage projects, environments and secrets stored on an Envoy server.",
    context_settings=CONTEXT_SETTINGS,
    no_args_is_help=True,
)


def _group(help_text: str) -> typer.Typer:
    return typer.Typer(help=help_text, context_settings=CONTEXT_SETTINGS, no_args_is_help=True)


projects_app = _group("Manage projects")
environments_app = _group("Manage project environments")
variables_app = _group("Manage environment variables")

app.add_typer(projects_app, name="projects")
app.add_typer(environments_app, name="environments")
app.add_typer(variables_app, name="variables")


@app.callback()
def callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log requests and responses to stderr")
    ] = False,
):
    """Envoy command-line client."""
    configure_logging("DEBUG" if verbose else None)


@app.command()
def version():
    """Print the client version."""
    console.print(f"v{__version__}")


app.command("register")(register_user)
app.command("login")(login_user)
app.command("logout")(logout_user)
app.command("profile")(show_profile)

projects_app.command("create")(create_project)
projects_app.command("list")(list_projects)
projects_app.command("get")(get_project)
projects_app.command("update")(update_project)
projects_app.command("delete")(delete_project)
projects_app.command("use")(use_project)
projects_app.command("unset")(unset_project)

environments_app.command("create")(create_environment)
environments_app.command("list")(list_environments)
environments_app.command("get")(get_environment)
environments_app.command("update")(update_environment)
environments_app.command("delete")(delete_environment)
environments_app.command("use")(use_environment)
environments_app.command("unset")(unset_environment)

variables_app.command("create")(create_variable)
variables_app.command("list")(list_variables)
variables_app.command("get")(get_variable)
variables_app.command("update")(update_variable)
variables_app.command("delete")(delete_variable)
variables_app.command("import")(import_variables)
variables_app.command("export")(export_variables)


def main():
    load_dotenv()
    app()


if __name__ == "__main__":
    main()
