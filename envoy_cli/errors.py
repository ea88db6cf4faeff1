"""Errors raised by the Envoy client and command handlers."""


class EnvoyError(Exception):
    """Base class for every error reported to the user."""


class NoTokenError(EnvoyError):
    """Raised when a command needs authentication but no token is stored."""

    def __init__(self):
        super().__init__("not logged in")


class ExpiredTokenError(EnvoyError):
    """Raised when the server rejects the stored token as expired."""

    def __init__(self):
        super().__init__("token has expired")


class ServerError(EnvoyError):
    """Raised when the server rejects a request with an error message."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(f"server error: {message}")


class UnexpectedStatusError(ServerError):
    """Raised for an error status that carries no usable message."""

    def __init__(self, status_code: int):
        super().__init__(f"unexpected status code: {status_code}", status_code)

    def __str__(self) -> str:
        return self.message


class TransportError(EnvoyError):
    """Raised when the server cannot be reached or the request times out."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)


class DecodeError(EnvoyError):
    """Raised when a response body is not the JSON shape we expect."""


class ValidationError(EnvoyError):
    """Raised when local input is rejected before anything is sent."""


class EnvFileError(ValidationError):
    """Raised for a malformed line in a .env file."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"invalid format on line {line_number}: {line}")


class ConfigError(EnvoyError):
    """Raised when the local config file cannot be read or written."""


class InputError(EnvoyError):
    """Raised when the terminal input stream ends."""


class OperationCancelled(EnvoyError):
    """Raised when the user cancels an interactive selection."""

    def __init__(self):
        super().__init__("cancelled by user")
