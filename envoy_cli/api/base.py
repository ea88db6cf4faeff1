"""HTTP transport shared by every Envoy resource controller.

This module wraps a single ``httpx.Client`` with the conventions of the Envoy
REST API:
- JSON request and response bodies
- Bearer token authentication taken from the session
- ``{"error": "<message>"}`` error bodies turned into exceptions
- Expired tokens cleared from the config file as soon as the server reports them
"""

import json
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import (
    ConfigError,
    DecodeError,
    ExpiredTokenError,
    ServerError,
    TransportError,
    UnexpectedStatusError,
)
from ..errors import ValidationError as InvalidInputError
from ..session import Session

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30.0
EXPIRED_TOKEN_MESSAGE = "Token has expired"
DELETED_STATUS_CODES = (200, 204)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def build_body(model: type[M], **fields) -> M:
    """Build a request body, turning pydantic errors into a local ValidationError."""
    try:
        return model(**fields)
    except ValidationError as e:
        detail = e.errors()[0]
        field = ".".join(str(part) for part in detail["loc"])
        message = detail["msg"].removeprefix("Value error, ")
        raise InvalidInputError(f"{field}: {message}" if field else message) from e


def segment(value: str) -> str:
    """Escape an opaque id for use as a single URL path segment."""
    return quote(str(value), safe="")


def error_message(response: httpx.Response) -> str | None:
    """Return the ``error`` field of a response body, if there is one."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return None


class BaseClient:
    """Authenticated JSON client for the Envoy API.

    Example:
        >>> with BaseClient(Session.load()) as base:
        ...     response = base.request("GET", "/projects")
        ...     projects = base.decode(response, list[Project])
    """

    def __init__(
        self,
        session: Session,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            session: Server URL and token; token changes are persisted through it
            timeout: Overall timeout applied to every request, in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.session = session
        self.http = httpx.Client(base_url=session.server_url, timeout=timeout, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the underlying HTTP client."""
        self.http.close()

    def request(
        self,
        method: str,
        path: str,
        body: BaseModel | dict[str, Any] | None = None,
        auth_required: bool = True,
    ) -> httpx.Response:
        """Send a request and classify error responses.

        Args:
            method: HTTP method
            path: Path relative to the server URL
            body: Request body; pydantic models keep unset optional fields as null
            auth_required: Attach the bearer token when the session has one

        Returns:
            The response. Error statuses without a usable ``error`` message are
            returned as well so the caller can inspect the status code.

        Raises:
            ExpiredTokenError: 401 with the expiry message; the token is cleared first
            ServerError: Any other error status with a message
            TransportError: The server could not be reached in time
        """
        headers = {"Content-Type": "application/json"}
        authenticated = auth_required and self.session.token is not None
        if authenticated:
            headers["Authorization"] = f"Bearer {self.session.token}"

        content = None
        if body is not None:
            payload = body.model_dump(mode="json") if isinstance(body, BaseModel) else body
            content = json.dumps(payload)

        logger.debug("envoy_request", method=method, path=path, authenticated=authenticated)

        try:
            response = self.http.request(method, path, content=content, headers=headers)
        except httpx.TimeoutException as e:
            raise TransportError(f"request timed out: {e}", url=self.session.server_url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"request failed: {e}", url=self.session.server_url) from e

        logger.debug("envoy_response", method=method, path=path, status_code=response.status_code)

        if response.status_code >= 400:
            message = error_message(response)
            if message:
                if response.status_code == 401 and message == EXPIRED_TOKEN_MESSAGE:
                    try:
                        self.session.clear_token()
                    except ConfigError as e:
                        logger.warning("token_clear_failed", path=path, error=str(e))
                        self.session.token = None
                    else:
                        logger.info("token_expired_cleared", path=path)
                    raise ExpiredTokenError()
                raise ServerError(message, response.status_code)

        return response

    def decode(self, response: httpx.Response, shape: type[T]) -> T:
        """Validate a JSON response body against a model or a list of models.

        Raises:
            UnexpectedStatusError: The response still carries an error status
            DecodeError: The body is not JSON or does not match the shape
        """
        if response.is_error:
            raise UnexpectedStatusError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"failed to decode response: {e}") from e

        try:
            return TypeAdapter(shape).validate_python(data)
        except ValidationError as e:
            raise DecodeError(f"unexpected response shape: {e}") from e

    def expect_deleted(self, response: httpx.Response):
        """Accept 200 or 204 as a successful delete."""
        if response.status_code in DELETED_STATUS_CODES:
            return

        message = error_message(response)
        if message:
            raise ServerError(message, response.status_code)
        raise UnexpectedStatusError(response.status_code)
