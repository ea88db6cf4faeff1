"""Tests for the config file and session persistence."""

import json
import os
import stat

import pytest

from envoy_cli.config import (
    DEFAULT_SERVER_URL,
    Config,
    load_config,
    resolve_server_url,
    save_config,
    update_config,
)
from envoy_cli.errors import ConfigError
from envoy_cli.session import Session


class TestConfigFile:
    """Test reading and writing ~/.envoy/config.json."""

    def test_missing_file_is_empty(self, config_file):
        assert load_config() == Config()

    def test_save_permissions(self, config_file):
        save_config(Config(token="abc"))

        assert stat.S_IMODE(config_file.stat().st_mode) == 0o600
        assert stat.S_IMODE(config_file.parent.stat().st_mode) == 0o700
        assert json.loads(config_file.read_text()) == {"token": "abc"}

    def test_file_created_owner_only(self, config_file, monkeypatch):
        """Test the file is opened with mode 0600 rather than chmodded after writing."""
        calls = []
        real_open = os.open

        def recording_open(path, flags, mode=0o777, *args, **kwargs):
            calls.append((str(path), mode))
            return real_open(path, flags, mode, *args, **kwargs)

        monkeypatch.setattr(os, "open", recording_open)

        save_config(Config(token="abc"))

        assert (str(config_file), 0o600) in calls

    def test_save_tightens_existing_file(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("{}")
        config_file.chmod(0o644)

        save_config(Config(token="abc"))

        assert stat.S_IMODE(config_file.stat().st_mode) == 0o600

    def test_unset_fields_omitted(self, config_file):
        save_config(Config(server_url="http://localhost:8080", token=None))

        assert json.loads(config_file.read_text()) == {"server_url": "http://localhost:8080"}

    def test_update_keeps_other_fields(self, config_file):
        save_config(Config(server_url="http://localhost:8080", token="abc"))

        update_config(project_id="p1")

        assert load_config() == Config(server_url="http://localhost:8080", token="abc", project_id="p1")

    def test_unknown_keys_ignored(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"token": "abc", "theme": "dark"}))

        assert load_config().token == "abc"

    def test_corrupt_file(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("{not json")

        with pytest.raises(ConfigError, match="failed to parse config file"):
            load_config()


class TestServerURL:
    """Test server URL priority: config > environment > default."""

    def test_config_wins(self, monkeypatch):
        monkeypatch.setenv("ENVOY_SERVER_URL", "http://from-env")
        assert resolve_server_url(Config(server_url="http://from-config")) == "http://from-config"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("ENVOY_SERVER_URL", "http://from-env")
        assert resolve_server_url(Config()) == "http://from-env"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("ENVOY_SERVER_URL", raising=False)
        assert resolve_server_url(Config()) == DEFAULT_SERVER_URL == "https://envoy.webiliti.com"


class TestSession:
    """Test session state is written back immediately."""

    def test_empty_token_is_logged_out(self):
        assert not Session("http://envoy.test", token="").logged_in

    def test_adopt_and_clear_token(self, logged_in):
        session = Session.load()

        session.adopt_token("new-token")
        assert load_config().token == "new-token"

        session.clear_token()
        assert load_config().token is None
        assert load_config().server_url == "http://envoy.test"

    def test_select_project_clears_environment(self, logged_in):
        session = Session.load()
        session.select_project("p1")
        session.select_environment("e1")

        session.select_project("p2")

        config = load_config()
        assert config.project_id == "p2"
        assert config.environment_id is None
        assert session.environment_id is None

    def test_clear_project(self, logged_in):
        session = Session.load()
        session.select_project("p1")
        session.select_environment("e1")

        session.clear_project()

        assert load_config().project_id is None
        assert load_config().environment_id is None
        assert load_config().token == "test-token"
