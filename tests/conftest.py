"""Shared pytest fixtures and configuration."""

import pytest
from unittest.mock import Mock

from utils.config_loader import ENV_FIELDS


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """
    Remove every pr-graph environment variable and run in an empty directory.

    Working from tmp_path means no stray .env file is picked up, and
    XDG_CONFIG_HOME points the default token cache into tmp_path too.
    """
    for env_name in ENV_FIELDS:
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def test_env(clean_env, monkeypatch):
    """
    Set valid test environment variables so config can be loaded
    during tests without requiring real credentials.
    """
    monkeypatch.setenv("GITHUB_CLIENT_ID", "Iv1.testclientid123")
    monkeypatch.setenv("PR_GRAPH_CACHE_PATH", str(clean_env / "cache" / "token.json"))
    monkeypatch.setenv("PR_GRAPH_OUTPUT_PATH", str(clean_env / "dist" / "index.html"))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    return {
        "github_client_id": "Iv1.testclientid123",
        "credential_cache_path": clean_env / "cache" / "token.json",
        "output_path": clean_env / "dist" / "index.html",
        "log_level": "DEBUG",
    }


def make_response(status_code=200, json_data=None, text="", headers=None, reason="OK"):
    """Build a Mock shaped like a requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.headers = headers if headers is not None else {"Content-Type": "application/json"}
    response.text = text
    response.url = "https://example.test/"
    response.json.return_value = json_data
    return response


def github_pr(number, head, base, title, draft=False):
    """Minimal REST /pulls list item."""
    return {
        "number": number,
        "title": title,
        "draft": draft,
        "html_url": f"https://github.com/owner/repo/pull/{number}",
        "head": {"ref": head},
        "base": {"ref": base},
        "user": {"login": "octocat"},
    }
