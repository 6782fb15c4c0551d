"""Tests for the CLI entrypoint and the end-to-end pipeline."""

import json
import logging
import subprocess
from unittest.mock import Mock, patch

import pytest

import main
from auth.provider import CredentialProvider
from conftest import github_pr, make_response
from models.config_models import Config
from utils.errors import ApiError, RepositoryNotFoundError


def completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def config(tmp_path):
    return Config(
        github_client_id="Iv1.test",
        credential_cache_path=tmp_path / "cache" / "token.json",
        output_path=tmp_path / "dist" / "index.html",
    )


@pytest.fixture
def provider():
    provider = Mock(spec=CredentialProvider)
    provider.get_token.return_value = "gho_test"
    return provider


class TestGenerateGraph:
    """Tests for generate_graph()."""

    def test_api_pipeline_writes_and_opens_page(self, config, provider):
        opener = Mock(return_value=True)
        prs = [github_pr(1, "feat", "main", "Add X"), github_pr(2, "fix", "main", "Fix Y", draft=True)]

        with patch("subprocess.run", return_value=completed("git@github.com:owner/repo.git")), \
                patch("requests.get", return_value=make_response(json_data=prs)) as mock_get:
            path = main.generate_graph(config, provider=provider, opener=opener)

        assert mock_get.call_args[0][0] == "https://api.github.com/repos/owner/repo/pulls"
        assert mock_get.call_args[1]["headers"]["Authorization"] == "Bearer gho_test"

        html = path.read_text(encoding="utf-8")
        assert path == config.output_path.resolve()
        assert "Pull Request Graph ( repo )" in html
        assert "b0 --&gt; |PR #1 Add X| b1" in html
        assert 'click b2 href "https://github.com/owner/repo/pull/2" _blank' in html
        opener.assert_called_once_with(path.as_uri())

    def test_gh_source_bypasses_auth_and_rest(self, config):
        config = config.model_copy(update={"source": "gh", "label_mode": "status"})
        provider = Mock(spec=CredentialProvider)
        gh_pr_list = json.dumps([{
            "number": 3, "headRefName": "docs", "baseRefName": "main",
            "title": "Docs", "isDraft": True, "url": "https://github.com/o/r/pull/3",
        }])

        def fake_run(command, **kwargs):
            if command[:3] == ["gh", "repo", "view"]:
                return completed('{"name": "r", "owner": {"login": "o"}}')
            return completed(gh_pr_list)

        with patch("subprocess.run", side_effect=fake_run), patch("requests.get") as mock_get:
            path = main.generate_graph(config, provider=provider, opener=Mock(return_value=True))

        mock_get.assert_not_called()
        provider.get_token.assert_not_called()
        assert "b0 --&gt; |Draft| b1" in path.read_text(encoding="utf-8")

    def test_browser_failure_logs_path_as_warning(self, config, provider, caplog):
        """When no browser opens, the page path is shown even above INFO."""
        with patch("subprocess.run", return_value=completed("https://github.com/owner/repo")), \
                patch("requests.get", return_value=make_response(json_data=[])):
            with caplog.at_level(logging.WARNING):
                path = main.generate_graph(config, provider=provider, opener=Mock(return_value=False))

        assert path.exists()
        assert f"Open this file manually: {path}" in caplog.text

    def test_no_output_on_api_failure(self, config, provider):
        """Nothing is written when the fetch fails."""
        with patch("subprocess.run", return_value=completed("https://github.com/owner/repo")), \
                patch("requests.get", return_value=make_response(status_code=404, reason="Not Found")):
            with pytest.raises(RepositoryNotFoundError):
                main.generate_graph(config, provider=provider, opener=Mock())

        assert not config.output_path.exists()

    def test_no_open(self, config, provider):
        config = config.model_copy(update={"open_browser": False})
        opener = Mock()

        with patch("subprocess.run", return_value=completed("https://github.com/owner/repo")), \
                patch("requests.get", return_value=make_response(json_data=[])):
            path = main.generate_graph(config, provider=provider, opener=opener)

        opener.assert_not_called()
        assert path.exists()


class TestMain:
    """Tests for main() argument handling and exit codes."""

    def test_no_command_exits_1(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main.main([])
        assert exc_info.value.code == 1

    def test_graph_success_exits_0(self, test_env):
        with patch("main.generate_graph") as mock_generate:
            with pytest.raises(SystemExit) as exc_info:
                main.main(["graph", "--direction", "RL", "--no-zoom", "--no-open"])

        assert exc_info.value.code == 0
        config = mock_generate.call_args[0][0]
        assert config.diagram_direction == "RL"
        assert config.zoom is False
        assert config.open_browser is False

    def test_resolution_error_propagates_git_exit_code(self, test_env):
        failure = completed(stderr="fatal: not a git repository", returncode=128)

        with patch("subprocess.run", return_value=failure):
            with pytest.raises(SystemExit) as exc_info:
                main.main(["graph", "--no-open"])

        assert exc_info.value.code == 128

    def test_api_error_exits_1(self, test_env):
        with patch("main.generate_graph", side_effect=ApiError("GitHub API failed: 500", status_code=500)):
            with pytest.raises(SystemExit) as exc_info:
                main.main(["graph"])
        assert exc_info.value.code == 1

    def test_missing_client_id_exits_1(self, test_env, monkeypatch):
        monkeypatch.delenv("GITHUB_CLIENT_ID")

        with patch("subprocess.run", return_value=completed("https://github.com/owner/repo")), \
                patch("requests.post") as mock_post:
            with pytest.raises(SystemExit) as exc_info:
                main.main(["graph", "--no-open"])

        assert exc_info.value.code == 1
        mock_post.assert_not_called()

    def test_valid_cached_token_needs_no_client_id(self, test_env, monkeypatch):
        """With a working cached token the device flow, and its client id, are never needed."""
        monkeypatch.delenv("GITHUB_CLIENT_ID")
        cache_path = test_env["credential_cache_path"]
        cache_path.parent.mkdir(parents=True)
        cache_path.write_text('{"access_token": "gho_cached", "created_at": "2025-01-01T00:00:00Z"}')

        def fake_get(url, **kwargs):
            if url.endswith("/user"):
                return make_response(json_data={"login": "octocat"})
            return make_response(json_data=[github_pr(1, "feat", "main", "Add X")])

        with patch("subprocess.run", return_value=completed("https://github.com/owner/repo")), \
                patch("requests.get", side_effect=fake_get), \
                patch("requests.post") as mock_post:
            with pytest.raises(SystemExit) as exc_info:
                main.main(["graph", "--no-open"])

        assert exc_info.value.code == 0
        mock_post.assert_not_called()
        assert test_env["output_path"].exists()

    def test_log_level_after_subcommand(self, test_env):
        with patch("main.generate_graph") as mock_generate:
            with pytest.raises(SystemExit) as exc_info:
                main.main(["graph", "--log-level", "WARNING"])

        assert exc_info.value.code == 0
        assert mock_generate.call_args[0][0].log_level == "WARNING"

    def test_log_level_before_subcommand(self, test_env):
        with patch("main.generate_graph") as mock_generate:
            with pytest.raises(SystemExit):
                main.main(["--log-level", "WARNING", "graph"])

        assert mock_generate.call_args[0][0].log_level == "WARNING"

    def test_invalid_log_level_exits_1(self, test_env):
        with pytest.raises(SystemExit) as exc_info:
            main.main(["--log-level", "LOUD", "graph"])
        assert exc_info.value.code == 1

    def test_logout_removes_cached_token(self, test_env):
        cache_path = test_env["credential_cache_path"]
        cache_path.parent.mkdir(parents=True)
        cache_path.write_text('{"access_token": "gho_x", "created_at": "2025-01-01T00:00:00Z"}')

        with pytest.raises(SystemExit) as exc_info:
            main.main(["logout"])

        assert exc_info.value.code == 0
        assert not cache_path.exists()

    def test_logout_goes_through_provider(self, test_env):
        with patch("main.CredentialProvider.logout", return_value=True) as mock_logout:
            with pytest.raises(SystemExit) as exc_info:
                main.main(["logout"])

        assert exc_info.value.code == 0
        mock_logout.assert_called_once_with()

    def test_logout_without_client_id(self, test_env, monkeypatch):
        monkeypatch.delenv("GITHUB_CLIENT_ID")
        with pytest.raises(SystemExit) as exc_info:
            main.main(["logout"])
        assert exc_info.value.code == 0

    def test_login_force(self, test_env):
        with patch("main.CredentialProvider.login", return_value="gho_x") as mock_login:
            with pytest.raises(SystemExit) as exc_info:
                main.main(["login", "--force"])

        assert exc_info.value.code == 0
        mock_login.assert_called_once_with(force=True)
