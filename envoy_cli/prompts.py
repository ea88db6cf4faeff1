"""Interactive terminal prompts.

All prompts block on standard input and write to standard output. When stdin
is not a terminal (piped input, tests) passwords are read as plain lines.
"""

import getpass
import sys
from collections.abc import Callable
from dataclasses import dataclass

from .errors import InputError, OperationCancelled
from .validation import validate_email


def _read_line(message: str) -> str:
    try:
        return input(message).strip()
    except EOFError as e:
        raise InputError("failed to read input: end of input") from e


def _read_password(message: str) -> str:
    if sys.stdin.isatty():
        try:
            return getpass.getpass(message)
        except EOFError as e:
            raise InputError("failed to read password: end of input") from e
    return _read_line(message)


def prompt(
    message: str,
    default: str | None = None,
    required: bool = False,
    password: bool = False,
    validator: Callable[[str], object] | None = None,
) -> str:
    """Ask for a value until one is acceptable.

    Args:
        message: Text shown before the input
        default: Returned when the input is empty
        required: Re-prompt on empty input (ignored when a default is given)
        password: Read without echo when attached to a terminal
        validator: Called with the input; a ValueError re-prompts with its reason

    Returns:
        The entered value, the default, or an empty string
    """
    label = f"{message} [{default}]: " if default else f"{message}: "

    while True:
        value = _read_password(label) if password else _read_line(label)

        if not value:
            if default:
                return default
            if required:
                print("This field is required")
                continue
            return ""

        if validator is not None:
            try:
                validator(value)
            except ValueError as e:
                print(f"Invalid input: {e}")
                continue

        return value


def prompt_string(message: str, required: bool = False) -> str:
    return prompt(message, required=required)


def prompt_with_default(message: str, default: str) -> str:
    return prompt(message, default=default)


def prompt_password(message: str) -> str:
    return prompt(message, required=True, password=True)


def prompt_email(message: str) -> str:
    return prompt(message, required=True, validator=validate_email)


def confirm(message: str) -> bool:
    """Yes/no question defaulting to no."""
    while True:
        answer = _read_line(f"{message} [y/N]: ").lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no", ""):
            return False
        print("Please enter 'y' or 'n'")


@dataclass
class SelectOption:
    """One entry of a numbered selection menu."""

    label: str
    value: str


def prompt_select(message: str, options: list[SelectOption], allow_cancel: bool = True) -> str:
    """Show a numbered menu and return the value of the chosen option.

    Raises:
        OperationCancelled: The user picked ``0`` on a cancellable menu
    """
    if not options:
        raise ValueError("prompt_select needs at least one option")

    lowest = 0 if allow_cancel else 1
    count = len(options)

    while True:
        print(f"\n{message}:")
        for index, option in enumerate(options, 1):
            print(f"  {index}. {option.label}")
        if allow_cancel:
            print("  0. Cancel")
        print()

        answer = _read_line(f"Select an option [1-{count}]: ")

        if allow_cancel and answer == "0":
            raise OperationCancelled()

        try:
            selection = int(answer)
        except ValueError:
            print(f"Please enter a number between {lowest} and {count}")
            continue

        if not 1 <= selection <= count:
            print(f"Invalid selection. Please choose {lowest}-{count}")
            continue

        return options[selection - 1].value
