"""Pure normalization helpers for titles, authors, ledes and tags."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from pageattrs.document import squish
from pageattrs.resolver import Candidate, Many, Single, dedupe

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Titles
# ---------------------------------------------------------------------------

# Unicode "Pd" (dash punctuation) and "Pf" (final quote punctuation)
_DASHES = (
    "\\-\u058a\u05be\u1400\u1806\u2010\u2011\u2012\u2013\u2014\u2015"
    "\u2e17\u2e1a\u2e3a\u2e3b\u2e40\u301c\u3030\u30a0\ufe31\ufe32\ufe58\ufe63\uff0d"
)
_FINAL_QUOTES = "\u00bb\u2019\u201d\u203a\u2e03\u2e05\u2e0a\u2e0d\u2e1d\u2e21"

TITLE_SEPARATORS_RE = re.compile(
    rf"\s(?:[{_DASHES}]|::|:|[{_FINAL_QUOTES}]|\||\.)\s",
)

# Shorter shared fragments ("a ", " - ") say nothing about the title
MIN_COMMON_TITLE_LENGTH = 3


def split_title(title: str) -> str:
    """Drop site names and separators, keeping the longest part of *title*.

    ``"My Post : My Site"`` → ``"My Post"`` (equal lengths keep the first).
    """
    parts = [p.strip() for p in TITLE_SEPARATORS_RE.split(title)]
    parts = [p for p in parts if p]
    if not parts:
        return title.strip()
    return max(parts, key=len)


def longest_common_substring(strings: Sequence[str]) -> str:
    """Return the longest substring shared by every string in *strings*.

    Candidates are taken from the shortest string, longest first, so the
    earliest occurrence wins among equal lengths.
    """
    if not strings:
        return ""
    if len(strings) == 1:
        return strings[0]
    shortest = min(strings, key=len)
    others = [s for s in strings if s is not shortest]
    for length in range(len(shortest), 0, -1):
        for start in range(len(shortest) - length + 1):
            fragment = shortest[start:start + length]
            if all(fragment in other for other in others):
                return fragment
    return ""


def normalize_title(candidate: Candidate) -> Candidate | None:
    if isinstance(candidate, Single):
        return Single(squish(candidate.value))
    return Many.of(dedupe(squish(v) for v in candidate.values if v.strip()))


def select_common_title(candidates: Sequence[Candidate]) -> Candidate | None:
    """Winner = longest substring common to all titles, else the first title."""
    titles = [c.value for c in candidates if isinstance(c, Single)]
    if not titles:
        return candidates[0] if candidates else None
    common = longest_common_substring(titles).strip()
    if len(common) >= MIN_COMMON_TITLE_LENGTH:
        return Single(common)
    return Single(titles[0])


# ---------------------------------------------------------------------------
# Authors
# ---------------------------------------------------------------------------

_BYLINE_PREFIX_RE = re.compile(r"^(post(ed)?\s)?by\W+", re.IGNORECASE)
# Two or more characters outside [A-Za-z0-9' ] in a row end the name
_AUTHOR_BREAK_RE = re.compile(r"[^A-Za-z0-9' ]{2,}")


def strip_byline(value: str) -> str:
    return _BYLINE_PREFIX_RE.sub("", value.strip())


def clean_author(value: str) -> str:
    """``"By Jane Q. Public"`` → ``"Jane Q. Public"``."""
    name = strip_byline(value)
    name = _AUTHOR_BREAK_RE.split(name, maxsplit=1)[0]
    return squish(name)


def normalize_author(candidate: Candidate) -> Candidate | None:
    if isinstance(candidate, Single):
        return Single(clean_author(candidate.value))
    if isinstance(candidate, Many):
        return Many.of(dedupe(strip_byline(v) for v in candidate.values if v.strip()))
    logger.warning("Dropping author candidate %r of type %s", candidate, type(candidate).__name__)
    return None


# ---------------------------------------------------------------------------
# Ledes
# ---------------------------------------------------------------------------

LEDE_RE = re.compile(r"^(?:.*?[.!?]\s){1,3}", re.DOTALL)


def truncate_lede(text: str) -> str:
    """Keep the first one to three sentences of *text*."""
    match = LEDE_RE.match(text)
    return (match.group(0) if match else text).strip()


def normalize_lede(candidate: Candidate) -> Candidate | None:
    if isinstance(candidate, Single):
        return Single(truncate_lede(candidate.value))
    if isinstance(candidate, Many):
        return Many.of(dedupe(truncate_lede(v) for v in candidate.values if v.strip()))
    logger.warning("Dropping lede candidate %r of type %s", candidate, type(candidate).__name__)
    return None


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------

def clean_tag(tag: str) -> str:
    """``" #funny "`` → ``"funny"``."""
    tag = tag.strip()
    if tag.startswith("#"):
        tag = tag[1:]
    return squish(tag)
