"""Local input checks run before anything is sent to the server."""

MIN_PASSWORD_LENGTH = 8


def validate_email(value: str) -> str:
    if "@" not in value or "." not in value:
        raise ValueError("invalid email format")
    return value


def validate_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
    return value
