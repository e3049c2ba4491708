"""Rough publication-date detection from page markup.

Clients should prefer HTTP headers (``Last-Modified``) when they have them;
this module only looks at the content.  The first pattern in
:data:`DATETIME_PATTERNS` that matches anywhere in the serialized markup
wins, then the match is cleaned up and handed to a :class:`DateParser`.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Literal, Protocol

import dateparser

logger = logging.getLogger(__name__)

_MONTHS = (
    r"(?:January|February|March|April|May|June|July|August|September|October|November|December"
    r"|Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\.?"
)
_ORDINAL = r"(?:th|st|nd|rd)"

# Order matters: most specific first
DATETIME_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        rf"{_MONTHS}\b\s+\d+\D{{1,10}}\d{{4}}",
        rf"(?:on\s+)?\d+\s+{_MONTHS}\s+\D{{0,10}}\d+",
        rf"(?:on[^\d+]{{1,10}})\d+{_ORDINAL}?.{{1,10}}{_MONTHS}\b[^\d]{{1,10}}\d+",
        r"\b\d{4}-\d{2}-\d{2}\b",
        rf"\d+{_ORDINAL}.{{1,10}}{_MONTHS}\b[^\d]{{1,10}}\d+",
        rf"\d+\s+{_MONTHS}\b[^\d]{{1,10}}\d+",
        rf"on\s+{_MONTHS}\s+\d+",
        rf"{_MONTHS}\s+\d+",
        r"\d{4}[./-]\d{2}[./-]\d{2}",
        r"\d{2}[./-]\d{2}[./-]\d{4}",
    )
)

# Shorter matches are noise; "May 1" is the shortest accepted
MIN_MATCH_LENGTH = 5

_WEEKDAY_RE = re.compile(
    r"\b(?:Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday"
    r"|mon|tues|tue|weds|wed|thurs|thur|thu|fri|sat|sun)\b\W*",
    re.IGNORECASE,
)
_LEADING_NOISE_RE = re.compile(r"on\s+|,|\.", re.IGNORECASE)
_ORDINAL_RE = re.compile(rf"(\d+){_ORDINAL}", re.IGNORECASE)


class DateParser(Protocol):
    """Natural-language date parser."""

    def parse(self, text: str, prefer: Literal["past", "future", "current_period"]) -> datetime | None:
        ...


class DateparserParser:
    """:class:`DateParser` backed by the ``dateparser`` package."""

    def parse(self, text: str, prefer: Literal["past", "future", "current_period"] = "past") -> datetime | None:
        try:
            return dateparser.parse(
                text,
                settings={
                    "PREFER_DATES_FROM": prefer,
                    "PREFER_DAY_OF_MONTH": "first",
                    "RETURN_AS_TIMEZONE_AWARE": False,
                },
            )
        except Exception as exc:
            logger.debug("Date parse failed for %r: %s", text, exc)
            return None


DEFAULT_DATE_PARSER = DateparserParser()


def find_date_text(markup: str) -> str | None:
    """Return the raw date-like text found in *markup*, or ``None``."""
    for pattern in DATETIME_PATTERNS:
        match = pattern.search(markup)
        if match:
            text = match.group(0)
            return text if len(text) >= MIN_MATCH_LENGTH else None
    return None


def clean_date_text(text: str) -> str:
    """Prepare a matched date for the parser.

    ``"Monday, January 3rd, 2020"`` → ``"January 3 2020"``
    """
    text = text.strip()
    text = _WEEKDAY_RE.sub("", text)
    text = _LEADING_NOISE_RE.sub("", text, count=1)
    text = _ORDINAL_RE.sub(r"\1", text, count=1)
    return text.strip()


def extract_date(markup: str, parser: DateParser = DEFAULT_DATE_PARSER) -> datetime | str | None:
    """Best-effort publication date of a page.

    Returns a :class:`~datetime.datetime` when the parser understands the
    cleaned text, the cleaned text itself when it does not, and ``None``
    when nothing date-like was found.
    """
    raw = find_date_text(markup)
    if raw is None:
        return None
    cleaned = clean_date_text(raw)
    parsed = parser.parse(cleaned, "past")
    return parsed if parsed is not None else cleaned
