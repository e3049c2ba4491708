"""Tests for publication-date detection."""

from __future__ import annotations

import re
from datetime import datetime

from pageattrs.dates import (
    DEFAULT_DATE_PARSER,
    MIN_MATCH_LENGTH,
    clean_date_text,
    extract_date,
    find_date_text,
)


class TestFindDateText:
    def test_month_day_year(self):
        assert find_date_text("<p>Posted on Monday, January 3rd, 2020</p>") == "January 3rd, 2020"

    def test_iso_date(self):
        assert find_date_text('<time datetime="x">2021-06-15</time>') == "2021-06-15"

    def test_day_month_year(self):
        assert find_date_text("<span>12 March 2019</span>") == "12 March 2019"

    def test_shortest_accepted_match(self):
        assert MIN_MATCH_LENGTH == 5
        assert find_date_text("<p>Jan 9</p>") == "Jan 9"
        assert find_date_text("<p>no dates here</p>") is None

    def test_short_match_dropped(self, monkeypatch):
        monkeypatch.setattr("pageattrs.dates.DATETIME_PATTERNS", (re.compile(r"\d{4}"),))
        assert find_date_text("<p>2020</p>") is None

    def test_short_match_stops_search(self, monkeypatch):
        patterns = (re.compile(r"\d{4}"), re.compile(r"\d{4}-\d{2}-\d{2}"))
        monkeypatch.setattr("pageattrs.dates.DATETIME_PATTERNS", patterns)
        assert find_date_text("<p>2020-01-03</p>") is None

    def test_first_pattern_wins_over_document_order(self):
        markup = "<p>2018-01-01</p><p>February 2, 2019</p>"
        assert find_date_text(markup) == "February 2, 2019"


class TestCleanDateText:
    def test_weekday_comma_and_ordinal(self):
        assert clean_date_text("Monday, January 3rd, 2020") == "January 3 2020"

    def test_nd_ordinal(self):
        assert clean_date_text("February 22nd 2019") == "February 22 2019"

    def test_leading_on(self):
        assert clean_date_text("on 4 July 2017") == "4 July 2017"


class TestExtractDate:
    def test_cleaned_text_goes_to_parser(self, recording_parser):
        result = extract_date("<p>Posted on Monday, January 3rd, 2020</p>", recording_parser)
        assert recording_parser.calls == [("January 3 2020", "past")]
        # The parser returned nothing, so the cleaned text is kept
        assert result == "January 3 2020"

    def test_parser_result_returned(self, recording_parser):
        recording_parser.result = datetime(2020, 1, 3)
        assert extract_date("<p>January 3rd, 2020</p>", recording_parser) == datetime(2020, 1, 3)

    def test_nothing_found(self, recording_parser):
        assert extract_date("<p>Hello</p>", recording_parser) is None
        assert recording_parser.calls == []

    def test_default_parser(self):
        parsed = extract_date("<p>Posted on Monday, January 3rd, 2020</p>", DEFAULT_DATE_PARSER)
        assert isinstance(parsed, datetime)
        assert (parsed.year, parsed.month, parsed.day) == (2020, 1, 3)
