"""Resolve the GitHub owner/repository of the working directory.

Two sources are supported:
- the URL of a git remote (``git remote get-url origin``)
- the gh CLI context (``gh repo view``)
"""

import json
import logging
import re

from models.data_models import RemoteDescriptor
from utils.commands import run_capture
from utils.errors import ResolutionError

logger = logging.getLogger(__name__)

# git@github.com:owner/repo
SSH_PATTERN = re.compile(r"^[^@\s/]+@[^:\s/]+:([^/\s]+)/([^/\s]+)$")
# https://github.com/owner/repo, ssh://git@github.com/owner/repo
URL_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://(?:[^@/\s]+@)?[^/\s]+/([^/\s]+)/([^/\s]+)$")


def get_origin_url(remote: str = "origin") -> str:
    """Return the configured URL of ``remote``.

    Raises:
        ResolutionError: If git is unavailable or the remote does not exist
    """
    url = run_capture(["git", "remote", "get-url", remote])
    logger.debug(f"Remote '{remote}' URL: {url}")
    return url


def parse_remote_url(remote_url: str) -> RemoteDescriptor:
    """
    Parse a git remote URL into owner and repository name.

    Args:
        remote_url: Either:
            - "git@github.com:owner/repo(.git)"
            - "https://github.com/owner/repo(.git)"

    Returns:
        RemoteDescriptor with owner and repo_name

    Examples:
        "git@github.com:facebook/react.git" -> ("facebook", "react")
        "https://github.com/facebook/react" -> ("facebook", "react")

    Raises:
        ResolutionError: If the URL matches neither shape
    """
    cleaned = remote_url.strip().rstrip("/")
    if cleaned.endswith(".git"):
        cleaned = cleaned[: -len(".git")]

    match = SSH_PATTERN.match(cleaned) or URL_PATTERN.match(cleaned)
    if not match:
        raise ResolutionError(f"Unexpected GitHub repository URL format: {remote_url}")

    return RemoteDescriptor(owner=match.group(1), repo_name=match.group(2))


def resolve_repository(remote: str = "origin") -> RemoteDescriptor:
    """Owner/repository of the working directory's ``remote``."""
    repository = parse_remote_url(get_origin_url(remote))
    logger.info(f"Repository: {repository.full_name}")
    return repository


def get_repository_from_gh() -> RemoteDescriptor:
    """Owner/repository as reported by ``gh repo view``.

    Raises:
        ResolutionError: If gh is unavailable, fails, or prints unexpected JSON
    """
    output = run_capture(["gh", "repo", "view", "--json", "name,owner"])
    try:
        data = json.loads(output)
        repository = RemoteDescriptor(owner=data["owner"]["login"], repo_name=data["name"])
    except (ValueError, KeyError, TypeError) as e:
        raise ResolutionError(f"Unexpected output from gh repo view: {output[:200]}") from e

    logger.info(f"Repository (gh): {repository.full_name}")
    return repository
