"""Detect the origin remote of the git repository in the working directory."""

import re
from dataclasses import dataclass
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

SECTION_RE = re.compile(r'^\[\s*(\S+)(?:\s+"([^"]*)")?\s*\]')
HOSTS = {"github.com": "github", "gitlab.com": "gitlab"}


@dataclass
class GitInfo:
    """What we could learn about the enclosing repository."""

    has_git: bool = False
    remote_url: str | None = None
    owner: str | None = None
    repo_name: str | None = None
    host: str | None = None

    def repo_slug(self) -> str | None:
        """Return ``owner/repo`` when both parts are known."""
        if self.owner and self.repo_name:
            return f"{self.owner}/{self.repo_name}"
        return None


def find_git_dir(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / ".git"
        if candidate.is_dir():
            return candidate
    return None


def read_origin_url(config_path: Path) -> str | None:
    """Return the url of ``[remote "origin"]`` from a git config file."""
    try:
        lines = config_path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.debug("git_config_unreadable", path=str(config_path), error=str(e))
        return None

    in_origin = False
    for raw_line in lines:
        line = raw_line.strip()

        section = SECTION_RE.match(line)
        if section:
            in_origin = section.group(1) == "remote" and section.group(2) == "origin"
            continue

        if in_origin:
            name, sep, value = line.partition("=")
            if sep and name.strip() == "url":
                return value.strip()

    return None


def parse_remote_url(remote_url: str) -> GitInfo:
    """Split a GitHub/GitLab remote (SSH or HTTPS) into owner and repo."""
    info = GitInfo(has_git=True, remote_url=remote_url)
    clean_url = remote_url.removesuffix(".git")

    for domain, host in HOSTS.items():
        for marker in (f"{domain}:", f"{domain}/"):
            if marker in clean_url:
                info.host = host
                parts = clean_url.split(marker, 1)[1].strip("/").split("/")
                if len(parts) >= 2:
                    info.owner, info.repo_name = parts[0], parts[1]
                return info

    return info


def detect_git_info(start: Path | None = None) -> GitInfo:
    git_dir = find_git_dir((start or Path.cwd()).resolve())
    if git_dir is None:
        return GitInfo()

    remote_url = read_origin_url(git_dir / "config")
    if remote_url is None:
        return GitInfo(has_git=True)

    return parse_remote_url(remote_url)
