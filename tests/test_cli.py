"""Tests for the command-line entry point."""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest

from pageattrs.__main__ import main

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _drop_log_handler():
    yield
    logger = logging.getLogger("pageattrs")
    for handler in list(logger.handlers):
        if getattr(handler, "_pageattrs_handler", False):
            logger.removeHandler(handler)
            handler.close()


class TestCli:
    def test_selected_attributes(self, capsys):
        code = main([
            str(FIXTURES_DIR / "article.html"),
            "--url", "https://example.com/2020/01/03/foo-bar",
            "--attr", "title",
            "--attr", "favicon",
            "--attr", "feeds",
        ])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data == {
            "title": "Foo Bar",
            "favicon": "https://example.com/favicon.ico",
            "feeds": [
                "https://example.com/feed.xml",
                "https://example.com/atom.xml",
                "https://example.com/feed.xml",
            ],
        }

    def test_full_summary(self, capsys):
        assert main([str(FIXTURES_DIR / "article.html"), "--keywords", "3"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["author"] == "Jane Q. Public"
        assert len(data["keywords"]) <= 3
        assert data["favicon"] == "/favicon.ico"

    def test_stdin(self, capsys, monkeypatch):
        stdin = io.TextIOWrapper(io.BytesIO(b"<html><head><title>From stdin</title></head></html>"))
        monkeypatch.setattr("sys.stdin", stdin)
        assert main(["-", "--attr", "title"]) == 0
        assert json.loads(capsys.readouterr().out) == {"title": "From stdin"}

    def test_keywords_attribute(self, capsys):
        main([str(FIXTURES_DIR / "article.html"), "--attr", "keywords", "--keywords", "1"])
        data = json.loads(capsys.readouterr().out)
        assert len(data["keywords"]) == 1
        phrase, occurrences = data["keywords"][0]
        assert isinstance(phrase, str)
        assert occurrences >= 2

    def test_missing_file(self, capsys, tmp_path):
        assert main([str(tmp_path / "nope.html")]) == 2
        assert "Could not read" in capsys.readouterr().err

    def test_bad_config(self, capsys, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("image_strategy: biggest\n", encoding="utf-8")
        assert main([str(FIXTURES_DIR / "article.html"), "--config", str(config)]) == 1
        assert "Could not load settings" in capsys.readouterr().err

    def test_unknown_attribute_rejected(self):
        with pytest.raises(SystemExit):
            main([str(FIXTURES_DIR / "article.html"), "--attr", "colour"])
