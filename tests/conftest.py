"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from pageattrs.config import reset_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def _default_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def article_html() -> str:
    return _read_fixture("article.html")


@pytest.fixture
def twitter_html() -> str:
    return _read_fixture("twitter.html")


@pytest.fixture
def instagram_html() -> str:
    return _read_fixture("instagram.html")


@pytest.fixture
def livestream_html() -> str:
    return _read_fixture("livestream.html")


class RecordingDateParser:
    """Date parser double that remembers what it was asked to parse."""

    def __init__(self, result=None):
        self.result = result
        self.calls: list[tuple[str, str]] = []

    def parse(self, text, prefer):
        self.calls.append((text, prefer))
        return self.result


@pytest.fixture
def recording_parser() -> RecordingDateParser:
    return RecordingDateParser()
