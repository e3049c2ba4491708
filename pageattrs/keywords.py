"""Keyword phrases ranked by how often they occur.

The :class:`PhraseScorer` is a small term extractor: words are split on
stop words and punctuation into candidate phrases, every phrase and every
single word inside it is counted, and rare single words are filtered out.
Multi-word phrases are always kept; the caller decides how many occurrences
matter.

One scorer (:data:`DEFAULT_SCORER`) is built at import time and shared;
it holds no mutable state.
"""

from __future__ import annotations

import logging
import math
import re
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NamedTuple

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
DEFAULT_MINIMUM_SCORE = "1%"

_WORD_RE = re.compile(r"[A-Za-z][A-Za-z0-9'\-]*|[.,;:!?()\[\]\"|/]")
_BREAK_TOKENS = frozenset(".,;:!?()[]\"|/")

STOPWORDS: frozenset[str] = frozenset(
    """
    a about above after again against all also am an and any are as at be because been
    before being below between both but by can could did do does doing down during each
    few for from further had has have having he her here hers herself him himself his
    how i if in into is it its itself just let me more most my myself no nor not now of
    off on once only or other our ours ourselves out over own same she should so some
    such than that the their theirs them themselves then there these they this those
    through to too under until up very was we were what when where which while who whom
    why will with would you your yours yourself yourselves may might must shall one two
    new said says like get got make made many much via per since within without upon
    across along around among however though yet still even ever every another well
    """.split(),
)


class Phrase(NamedTuple):
    phrase: str
    occurrences: int
    strength: int  # number of words in the phrase


class Keyword(NamedTuple):
    phrase: str
    occurrences: int


def _tokens(text: str) -> list[str]:
    return _WORD_RE.findall(text)


def _runs(tokens: Iterable[str], stopwords: frozenset[str]) -> list[list[str]]:
    """Split *tokens* into runs of content words."""
    runs: list[list[str]] = []
    current: list[str] = []
    for token in tokens:
        if token in _BREAK_TOKENS or token.lower() in stopwords:
            if current:
                runs.append(current)
                current = []
            continue
        current.append(token)
    if current:
        runs.append(current)
    return runs


def minimum_occurrences(minimum_score: int | str, word_count: int) -> int:
    """Translate ``"1%"`` (share of words) or ``3`` (absolute) to a count.

    A malformed score falls back to :data:`DEFAULT_MINIMUM_SCORE`.
    """
    try:
        if isinstance(minimum_score, str):
            raw = minimum_score.strip()
            if raw.endswith("%"):
                share = float(raw[:-1] or 0) / 100.0
                return max(1, math.ceil(share * word_count))
            return max(1, int(raw))
        return max(1, int(minimum_score))
    except (TypeError, ValueError):
        logger.debug("Bad minimum_score %r, using %s", minimum_score, DEFAULT_MINIMUM_SCORE)
        return minimum_occurrences(DEFAULT_MINIMUM_SCORE, word_count)


@dataclass(frozen=True)
class PhraseScorer:
    """Stop-word based phrase extractor.

    Args:
        stopwords:   Words that break phrases and are never counted.
        max_words:   Longest phrase considered; longer runs are skipped as
                     phrases but their words still count.
        min_length:  Shortest single word counted.
    """

    stopwords: frozenset[str] = field(default=STOPWORDS)
    max_words: int = 4
    min_length: int = 3

    def phrases(self, text: str, minimum_score: int | str = DEFAULT_MINIMUM_SCORE) -> list[Phrase]:
        """Return ``(phrase, occurrences, strength)`` for every kept phrase."""
        tokens = _tokens(text)
        words = [t for t in tokens if t not in _BREAK_TOKENS]
        threshold = minimum_occurrences(minimum_score, len(words))

        counts: Counter[str] = Counter()
        display: dict[str, str] = {}
        strength: dict[str, int] = {}

        def _count(parts: list[str]) -> None:
            phrase = " ".join(parts)
            key = phrase.lower()
            counts[key] += 1
            display.setdefault(key, phrase)
            strength[key] = len(parts)

        for run in _runs(tokens, self.stopwords):
            for word in run:
                if len(word) >= self.min_length:
                    _count([word])
            if 1 < len(run) <= self.max_words:
                _count(run)

        kept: list[Phrase] = []
        for key, occurrences in counts.items():
            if strength[key] == 1 and occurrences < threshold:
                continue
            kept.append(Phrase(display[key], occurrences, strength[key]))
        return kept


DEFAULT_SCORER = PhraseScorer()


def rank_keywords(
    text: str,
    scorer: PhraseScorer = DEFAULT_SCORER,
    limit: int = DEFAULT_LIMIT,
    minimum_score: int | str = DEFAULT_MINIMUM_SCORE,
) -> list[Keyword]:
    """Phrases occurring at least twice, most frequent first."""
    ranked = [
        Keyword(p.phrase.lower(), p.occurrences)
        for p in scorer.phrases(text, minimum_score)
        if p.occurrences >= 2
    ]
    ranked.sort(key=lambda k: k.occurrences, reverse=True)
    return ranked[:max(limit, 0)]
