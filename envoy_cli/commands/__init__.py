"""CLI command handlers."""

from .auth import login_user, logout_user, register_user, show_profile
from .environments import (
    create_environment,
    delete_environment,
    get_environment,
    list_environments,
    unset_environment,
    update_environment,
    use_environment,
)
from .projects import (
    create_project,
    delete_project,
    get_project,
    list_projects,
    unset_project,
    update_project,
    use_project,
)
from .variables import (
    create_variable,
    delete_variable,
    export_variables,
    get_variable,
    import_variables,
    list_variables,
    update_variable,
)

__all__ = [
    # Auth commands
    "login_user",
    "logout_user",
    "register_user",
    "show_profile",
    # Project commands
    "create_project",
    "delete_project",
    "get_project",
    "list_projects",
    "unset_project",
    "update_project",
    "use_project",
    # Environment commands
    "create_environment",
    "delete_environment",
    "get_environment",
    "list_environments",
    "unset_environment",
    "update_environment",
    "use_environment",
    # Variable commands
    "create_variable",
    "delete_variable",
    "export_variables",
    "get_variable",
    "import_variables",
    "list_variables",
    "update_variable",
]
