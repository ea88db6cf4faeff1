"""Tests for the shared HTTP transport."""

import httpx
import pytest

from envoy_cli.api import EnvoyClient
from envoy_cli.api.models import Project
from envoy_cli.config import load_config
from envoy_cli.errors import (
    ConfigError,
    DecodeError,
    ExpiredTokenError,
    ServerError,
    TransportError,
    UnexpectedStatusError,
)
from envoy_cli.session import Session


class TestRequest:
    """Test header handling and error classification."""

    def test_bearer_token_attached(self, client, fake_api):
        fake_api.add("GET", "/projects", 200, [])

        client.base.request("GET", "/projects")

        request = fake_api.requests[0]
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.headers["Content-Type"] == "application/json"
        assert str(request.url) == "http://envoy.test/projects"

    def test_no_token_no_authorization(self, logged_out, fake_api):
        """Test an anonymous session never sends an Authorization header."""
        fake_api.add("GET", "/projects", 200, [])
        with EnvoyClient(Session.load(logged_out), transport=httpx.MockTransport(fake_api)) as client:
            client.base.request("GET", "/projects")

        assert "Authorization" not in fake_api.requests[0].headers

    def test_expired_token_cleared(self, client, fake_api, logged_in):
        """Test the expiry message clears the stored token before raising."""
        fake_api.add("GET", "/projects", 401, {"error": "Token has expired"})

        with pytest.raises(ExpiredTokenError):
            client.projects.list()

        assert client.session.token is None
        assert load_config(logged_in).token is None
        assert load_config(logged_in).server_url == "http://envoy.test"

    def test_expired_token_survives_config_write_failure(self, client, fake_api, monkeypatch):
        """Test the expiry is still reported when the token cannot be removed from disk."""
        fake_api.add("GET", "/projects", 401, {"error": "Token has expired"})

        def read_only(*args, **kwargs):
            raise ConfigError("failed to write config file: read-only file system")

        monkeypatch.setattr(client.session, "clear_token", read_only)

        with pytest.raises(ExpiredTokenError):
            client.projects.list()

        assert client.session.token is None

    def test_other_unauthorized_keeps_token(self, client, fake_api, logged_in):
        """Test a 401 with any other message is a plain server error."""
        fake_api.add("GET", "/projects", 401, {"error": "Invalid token"})

        with pytest.raises(ServerError) as exc_info:
            client.projects.list()

        assert not isinstance(exc_info.value, ExpiredTokenError)
        assert exc_info.value.status_code == 401
        assert load_config(logged_in).token == "test-token"

    def test_expired_message_on_other_status(self, client, fake_api, logged_in):
        fake_api.add("GET", "/projects", 403, {"error": "Token has expired"})

        with pytest.raises(ServerError):
            client.projects.list()

        assert load_config(logged_in).token == "test-token"

    def test_error_without_message(self, client, fake_api):
        """Test an error status with no error field surfaces as an unexpected status."""
        fake_api.add("GET", "/projects/p1", 500, {"detail": "boom"})

        with pytest.raises(UnexpectedStatusError, match="unexpected status code: 500"):
            client.projects.get("p1")

    def test_empty_error_message(self, client, fake_api):
        fake_api.add("GET", "/projects/p1", 404, {"error": ""})

        with pytest.raises(UnexpectedStatusError):
            client.projects.get("p1")

    def test_connection_failure(self, session):
        """Test transport errors carry the server URL."""

        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with EnvoyClient(session, transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(TransportError) as exc_info:
                client.projects.list()

        assert exc_info.value.url == "http://envoy.test"

    def test_timeout(self, session):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with EnvoyClient(session, transport=httpx.MockTransport(slow)) as client:
            with pytest.raises(TransportError, match="timed out"):
                client.projects.list()


class TestDecode:
    """Test response decoding."""

    def test_invalid_json(self, client):
        response = httpx.Response(200, content=b"<html>")

        with pytest.raises(DecodeError):
            client.base.decode(response, Project)

    def test_wrong_shape(self, client):
        response = httpx.Response(200, json={"name": "missing id"})

        with pytest.raises(DecodeError):
            client.base.decode(response, Project)

    def test_list_shape(self, client):
        response = httpx.Response(200, json=[{"id": 1, "name": "a"}, {"id": "b", "name": "b"}])

        projects = client.base.decode(response, list[Project])

        assert [p.id for p in projects] == ["1", "b"]


class TestExpectDeleted:
    """Test delete status handling."""

    @pytest.mark.parametrize("status_code", [200, 204])
    def test_success_statuses(self, client, status_code):
        client.base.expect_deleted(httpx.Response(status_code))

    def test_error_message(self, client):
        response = httpx.Response(409, json={"error": "Project has environments"})

        with pytest.raises(ServerError, match="Project has environments"):
            client.base.expect_deleted(response)

    def test_unexpected_status(self, client):
        with pytest.raises(UnexpectedStatusError, match="202"):
            client.base.expect_deleted(httpx.Response(202))
