"""Authentication command handlers."""

from typing import Annotated, Optional

import typer
from rich.markup import escape

from ..prompts import prompt, prompt_email, prompt_password, prompt_string
from ..validation import validate_email, validate_password
from .common import (
    anonymous_client,
    authenticated_client,
    console,
    fail,
    format_unix_time,
    handle_errors,
    print_field,
)


def register_user():
    """Create an account and log in with it."""
    console.print("Registering new account...")

    with handle_errors("register"):
        name = prompt_string("Name", required=True)
        email = prompt_email("Email")
        password = prompt("Password", required=True, password=True, validator=validate_password)

        with anonymous_client() as client:
            auth = client.auth.register(name, email, password)

    console.print("[green]Account registered successfully![/green]")
    console.print(f"Welcome, {escape(auth.user.name)}!")


def login_user(
    email: Annotated[Optional[str], typer.Option("--email", "-e", help="Account email")] = None,
):
    """Log in and store the session token."""
    console.print("Logging in...")

    with handle_errors("login"):
        if email:
            try:
                validate_email(email)
            except ValueError as e:
                fail(f"Failed to login: {e}")
        else:
            email = prompt_email("Email")
        password = prompt_password("Password")

        with anonymous_client() as client:
            auth = client.auth.login(email, password)

    console.print("[green]Login successful![/green]")
    console.print(f"Welcome back, {escape(auth.user.name)}!")


def logout_user():
    """Forget the stored session token."""
    with handle_errors("logout"), anonymous_client() as client:
        client.auth.logout()

    console.print("Logged out successfully")


def show_profile():
    """Show the profile of the logged-in user."""
    with handle_errors("get profile"), authenticated_client() as client:
        profile = client.auth.profile()

    console.print("Profile Information:")
    print_field("User ID", profile.user_id)
    print_field("Email", profile.email)
    print_field("Token issued at", format_unix_time(profile.issued_at))
    print_field("Token expires at", format_unix_time(profile.expires_at))
