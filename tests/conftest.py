"""Pytest configuration and shared fixtures."""

import functools
import json

import httpx
import pytest
from typer.testing import CliRunner

from envoy_cli import config
from envoy_cli.api import EnvoyClient
from envoy_cli.commands import common
from envoy_cli.config import Config, save_config
from envoy_cli.observability import configure_logging
from envoy_cli.session import Session

SERVER_URL = "http://envoy.test"
TEST_TOKEN = "test-token"


class FakeAPI:
    """In-memory stand-in for the Envoy server, used as an httpx.MockTransport handler.

    Routes map ``(method, path)`` to a canned response or to a callable that
    builds one from the request. Every request is recorded.
    """

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def add(self, method, path, status_code=200, json_body=None, handler=None):
        self.routes[(method, path)] = handler or (status_code, json_body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))

        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if callable(route):
            return route(request)

        status_code, body = route
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    def bodies(self, method, path):
        """Decoded JSON bodies sent to one route, in order."""
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == method and r.url.path == path
        ]


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep debug events out of captured output."""
    configure_logging("WARNING")


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the config store at a temporary file."""
    path = tmp_path / ".envoy" / "config.json"
    monkeypatch.setattr(config, "CONFIG_FILE", path)
    monkeypatch.delenv("ENVOY_SERVER_URL", raising=False)
    return path


@pytest.fixture
def logged_in(config_file):
    """Config file holding a server URL and a token."""
    save_config(Config(server_url=SERVER_URL, token=TEST_TOKEN), config_file)
    return config_file


@pytest.fixture
def logged_out(config_file):
    """Config file holding a server URL but no token."""
    save_config(Config(server_url=SERVER_URL), config_file)
    return config_file


@pytest.fixture
def fake_api():
    return FakeAPI()


@pytest.fixture
def session(logged_in):
    return Session.load(logged_in)


@pytest.fixture
def client(session, fake_api):
    """EnvoyClient talking to the fake server."""
    with EnvoyClient(session, transport=httpx.MockTransport(fake_api)) as client:
        yield client


@pytest.fixture
def runner(monkeypatch, fake_api, config_file):
    """CliRunner whose commands talk to the fake server."""
    monkeypatch.setattr(
        common, "EnvoyClient", functools.partial(EnvoyClient, transport=httpx.MockTransport(fake_api))
    )
    return CliRunner()


@pytest.fixture
def sample_user():
    return {
        "id": "user-1",
        "name": "Test User",
        "email": "test@example.com",
        "created_at": "2024-01-15T10:30:00Z",
    }


@pytest.fixture
def sample_project():
    return {
        "id": "proj-1",
        "name": "Backend",
        "description": "API services",
        "git_repo": "acme/backend",
        "owner_id": "user-1",
        "created_at": "2024-01-15T10:30:00Z",
        "updated_at": "2024-01-16T08:00:00Z",
    }


@pytest.fixture
def sample_environment():
    return {
        "id": "env-1",
        "project_id": "proj-1",
        "name": "Production",
        "description": None,
        "created_at": "2024-01-15T10:30:00Z",
        "updated_at": "2024-01-15T10:30:00Z",
    }


@pytest.fixture
def sample_variable():
    return {
        "id": "var-1",
        "environment_id": "env-1",
        "key": "DATABASE_URL",
        "value": "postgres://localhost/app",
        "description": None,
        "created_at": "2024-01-15T10:30:00Z",
        "updated_at": "2024-01-15T10:30:00Z",
    }
