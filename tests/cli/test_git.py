"""Tests for git remote detection."""

import pytest

from envoy_cli.git import detect_git_info, parse_remote_url, read_origin_url

GIT_CONFIG = """[core]
\trepositoryformatversion = 0
[remote "upstream"]
\turl = git@github.com:someone-else/fork.git
[remote "origin"]
\turl = git@github.com:acme/backend.git
\tfetch = +refs/heads/*:refs/remotes/origin/*
[branch "main"]
\tremote = origin
"""


@pytest.mark.parametrize(
    "remote_url, host, owner, repo",
    [
        ("git@github.com:acme/backend.git", "github", "acme", "backend"),
        ("https://github.com/acme/backend.git", "github", "acme", "backend"),
        ("https://github.com/acme/backend", "github", "acme", "backend"),
        ("git@gitlab.com:group/service.git", "gitlab", "group", "service"),
        ("https://gitlab.com/group/service", "gitlab", "group", "service"),
    ],
)
def test_parse_remote_url(remote_url, host, owner, repo):
    info = parse_remote_url(remote_url)

    assert info.host == host
    assert info.repo_slug() == f"{owner}/{repo}"


def test_unknown_host_has_no_slug():
    info = parse_remote_url("ssh://git@example.org/acme/backend.git")

    assert info.has_git
    assert info.host is None
    assert info.repo_slug() is None


def test_read_origin_url_skips_other_remotes(tmp_path):
    config_path = tmp_path / "config"
    config_path.write_text(GIT_CONFIG)

    assert read_origin_url(config_path) == "git@github.com:acme/backend.git"


def test_detect_from_subdirectory(tmp_path):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "config").write_text(GIT_CONFIG)
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)

    info = detect_git_info(nested)

    assert info.has_git
    assert info.repo_slug() == "acme/backend"


def test_repository_without_origin(tmp_path):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "config").write_text("[core]\n\tbare = false\n")

    info = detect_git_info(tmp_path)

    assert info.has_git
    assert info.remote_url is None


def test_no_repository(tmp_path):
    assert not detect_git_info(tmp_path).has_git
