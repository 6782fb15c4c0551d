"""Tests for writing and opening the generated page."""

import logging
import webbrowser
from unittest.mock import Mock

import pytest

from graph.launcher import file_url, open_in_browser, write_document
from utils.errors import StorageError


class TestWriteDocument:

    def test_writes_and_creates_parents(self, tmp_path):
        path = write_document("<html></html>", tmp_path / "dist" / "index.html")

        assert path == (tmp_path / "dist" / "index.html").resolve()
        assert path.read_text(encoding="utf-8") == "<html></html>"

    def test_overwrites_previous_output(self, tmp_path):
        target = tmp_path / "index.html"
        target.write_text("old")

        write_document("new", target)

        assert target.read_text() == "new"

    def test_relative_path_resolved_against_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = write_document("x", "dist/index.html")
        assert path == (tmp_path / "dist" / "index.html").resolve()

    def test_write_failure_is_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file")

        with pytest.raises(StorageError):
            write_document("x", blocker / "index.html")

    def test_unicode_content(self, tmp_path):
        path = write_document("プルリクエスト", tmp_path / "index.html")
        assert path.read_text(encoding="utf-8") == "プルリクエスト"


class TestFileUrl:

    def test_absolute_file_uri(self, tmp_path):
        url = file_url(tmp_path / "index.html")
        assert url.startswith("file://")
        assert url.endswith("/index.html")


class TestOpenInBrowser:

    def test_calls_opener_with_url(self):
        opener = Mock(return_value=True)
        assert open_in_browser("file:///tmp/index.html", opener=opener) is True
        opener.assert_called_once_with("file:///tmp/index.html")

    def test_opener_error_is_not_fatal(self, caplog):
        opener = Mock(side_effect=webbrowser.Error("no runnable browser"))

        with caplog.at_level(logging.WARNING):
            assert open_in_browser("file:///tmp/index.html", opener=opener) is False

        assert "Could not open a browser" in caplog.text

    def test_opener_os_error_is_not_fatal(self, caplog):
        opener = Mock(side_effect=OSError("xdg-open missing"))

        with caplog.at_level(logging.WARNING):
            assert open_in_browser("file:///tmp/index.html", opener=opener) is False

        assert "xdg-open missing" in caplog.text

    @pytest.mark.parametrize("result", [False, None])
    def test_falsy_opener_result_is_not_fatal(self, result, caplog):
        with caplog.at_level(logging.WARNING):
            assert open_in_browser("file:///tmp/index.html", opener=Mock(return_value=result)) is False

        assert "No browser could be opened" in caplog.text
