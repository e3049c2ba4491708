"""Tests for URL helpers."""

from __future__ import annotations

from pageattrs.urls import has_scheme, resolve_url, url_mentions


class TestResolveUrl:
    def test_relative_against_base(self):
        assert resolve_url("/favicon.ico", "https://example.com/a/b") == "https://example.com/favicon.ico"

    def test_path_relative(self):
        assert resolve_url("feed.xml", "https://example.com/blog/") == "https://example.com/blog/feed.xml"

    def test_absolute_passes_through(self):
        assert resolve_url("https://cdn.example.net/x.png", "https://example.com/") == "https://cdn.example.net/x.png"

    def test_no_base(self):
        assert resolve_url("/favicon.ico", None) == "/favicon.ico"

    def test_empty(self):
        assert resolve_url(None, "https://example.com/") is None
        assert resolve_url("", "https://example.com/") == ""

    def test_whitespace_trimmed(self):
        assert resolve_url("  /x  ", "https://example.com/") == "https://example.com/x"


class TestHelpers:
    def test_has_scheme(self):
        assert has_scheme("https://example.com")
        assert has_scheme("mailto:a@example.com")
        assert not has_scheme("/path")

    def test_url_mentions(self):
        assert url_mentions("https://SoundCloud.com/jane", "soundcloud.com")
        assert not url_mentions("https://example.com", "soundcloud.com")
        assert not url_mentions(None, "soundcloud.com")
