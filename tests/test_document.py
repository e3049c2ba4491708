"""Tests for the queryable document wrapper."""

from __future__ import annotations

import pytest

from pageattrs.document import HtmlDocument, MatchRule, as_rules, attr, is_xpath, squish
from pageattrs.errors import DocumentError, SelectorError

LINKS_HTML = """
<html><head>
  <meta name="author" content="  Jane Doe ">
  <link rel="alternate" type="application/rss+xml" href="/a.xml">
  <link rel="alternate" type="application/rss+xml" href="/b.xml">
  <link rel="alternate" type="application/rss+xml" href="/a.xml">
</head><body>
  <p class="byline">  By   Jane
     Doe </p>
  <p class="byline"></p>
  <a href="/profile/jane">Jane</a>
</body></html>
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    def test_squish_collapses_whitespace(self):
        assert squish("  a \n\t b  ") == "a b"

    def test_is_xpath(self):
        assert is_xpath("//p")
        assert is_xpath("./span")
        assert is_xpath("(//p)[1]")
        assert not is_xpath("div.entry p")
        assert not is_xpath('meta[name="author"]')

    def test_as_rules_accepts_bare_selector(self):
        rules = as_rules("title")
        assert rules == [MatchRule("title")]

    def test_as_rules_mixed_sequence(self):
        rule = MatchRule("meta", attr("content"))
        rules = as_rules(["h1", rule])
        assert rules[0] == MatchRule("h1")
        assert rules[1] is rule


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

class TestMatch:
    def test_text_rule_is_squished(self):
        doc = HtmlDocument(LINKS_HTML)
        assert doc.match(".byline") == ["By Jane Doe"]

    def test_attribute_rule(self):
        doc = HtmlDocument(LINKS_HTML)
        assert doc.match(MatchRule('meta[name="author"]', attr("content"))) == ["Jane Doe"]

    def test_document_order_and_duplicates_kept(self):
        doc = HtmlDocument(LINKS_HTML)
        hrefs = doc.match(MatchRule("link[rel~=alternate]", attr("href")))
        assert hrefs == ["/a.xml", "/b.xml", "/a.xml"]

    def test_rule_order_before_document_order(self):
        doc = HtmlDocument(LINKS_HTML)
        values = doc.match([".byline", MatchRule('meta[name="author"]', attr("content"))])
        assert values == ["By Jane Doe", "Jane Doe"]

    def test_xpath_attribute_results(self):
        doc = HtmlDocument(LINKS_HTML)
        assert doc.match("//a[contains(@href, '/profile/')]/@href") == ["/profile/jane"]

    def test_no_match_is_empty(self):
        doc = HtmlDocument(LINKS_HTML)
        assert doc.match(".does-not-exist") == []

    def test_first(self):
        doc = HtmlDocument(LINKS_HTML)
        assert doc.first("p").get("class") == "byline"
        assert doc.first("table") is None


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestSelectorErrors:
    def test_bad_css_raises(self):
        doc = HtmlDocument(LINKS_HTML)
        with pytest.raises(SelectorError) as exc_info:
            doc.match("div[")
        assert exc_info.value.selector == "div["

    def test_bad_xpath_raises(self):
        doc = HtmlDocument(LINKS_HTML)
        with pytest.raises(SelectorError):
            doc.query("//div[")

    def test_selector_error_is_document_error(self):
        assert issubclass(SelectorError, DocumentError)


class TestParsing:
    def test_empty_markup(self):
        doc = HtmlDocument("")
        assert doc.match("title") == []
        assert "<body>" in doc.raw_html()

    def test_comment_only_markup(self):
        doc = HtmlDocument("<!-- nothing here -->")
        assert doc.match("p") == []

    def test_bytes_markup(self):
        doc = HtmlDocument(b"<html><head><title>Bytes</title></head></html>")
        assert doc.match("title") == ["Bytes"]

    def test_xml_declaration_is_ignored(self):
        doc = HtmlDocument('<?xml version="1.0" encoding="utf-8"?><html><body><p>Hi</p></body></html>')
        assert doc.match("p") == ["Hi"]

    def test_raw_html_round_trips_content(self):
        doc = HtmlDocument(LINKS_HTML, url="https://example.com/")
        assert "/profile/jane" in doc.raw_html()
        assert doc.url == "https://example.com/"

    def test_text(self):
        doc = HtmlDocument("<p>One</p><p>Two</p>")
        assert doc.text() == "OneTwo"
