"""Cascade resolution of one attribute from several candidate sources.

A *source* is a zero-argument callable returning candidates.  Sources run in
priority order; their candidates are flattened, de-duplicated, normalized
and finally reduced to a single winner::

    resolver = AttributeResolver(
        "author",
        sources=[from_rules(doc, AUTHOR_MATCHES), jsonld_authors],
        normalize=normalize_author,
    )
    resolution = resolver.resolve()
    resolution.winner      # Single("Jane Doe") or None
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from pageattrs.document import HtmlDocument, Rules
from pageattrs.errors import DocumentError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Candidate shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Single:
    """One string produced by a source."""

    value: str


@dataclass(frozen=True)
class Many:
    """An ordered group of strings produced by a single source node."""

    values: tuple[str, ...]

    @classmethod
    def of(cls, values: Iterable[str]) -> Many:
        return cls(tuple(values))


Candidate = Union[Single, Many]
Source = Callable[[], Iterable[Candidate]]
Normalizer = Callable[[Candidate], Union[Candidate, None]]
Selector = Callable[[Sequence[Candidate]], Union[Candidate, None]]


def flatten(candidates: Iterable[Candidate]) -> list[str]:
    """Unpack candidates into plain, non-empty strings, keeping order."""
    values: list[str] = []
    for candidate in candidates:
        items = (candidate.value,) if isinstance(candidate, Single) else candidate.values
        values.extend(item for item in items if item)
    return values


def is_empty(candidate: Candidate) -> bool:
    if isinstance(candidate, Single):
        return not candidate.value
    return not candidate.values


def dedupe(items: Iterable[Hashable]) -> list[Any]:
    """Stable de-duplication by equality."""
    seen: set[Hashable] = set()
    unique: list[Any] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


# ---------------------------------------------------------------------------
# Source helpers
# ---------------------------------------------------------------------------

def from_rules(doc: HtmlDocument, rules: Rules) -> Source:
    """Source yielding one :class:`Single` per value matched by *rules*."""

    def _source() -> list[Candidate]:
        return [Single(v) for v in doc.match(rules)]

    return _source


def from_value(fn: Callable[[], str | None]) -> Source:
    """Source wrapping a callable that returns a single optional string."""

    def _source() -> list[Candidate]:
        value = fn()
        return [Single(value)] if value else []

    return _source


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

def first_candidate(candidates: Sequence[Candidate]) -> Candidate | None:
    return candidates[0] if candidates else None


@dataclass(frozen=True)
class Resolution:
    """Outcome of one cascade run."""

    name: str
    candidates: tuple[Candidate, ...] = ()
    winner: Candidate | None = None
    failed_sources: tuple[int, ...] = field(default=())

    @property
    def values(self) -> list[str]:
        return flatten(self.candidates)


class AttributeResolver:
    """Run candidate sources for one attribute and pick a winner.

    Args:
        name:      Attribute name, used for logging only.
        sources:   Callables evaluated in priority order.
        normalize: Applied to every de-duplicated candidate.  Returning
                   ``None`` drops the candidate.
        select:    Picks the winner from the normalized candidates
                   (default: the first one).
        dedupe:    When ``False`` repeated candidates are kept.
    """

    def __init__(
        self,
        name: str,
        sources: Sequence[Source],
        normalize: Normalizer | None = None,
        select: Selector = first_candidate,
        dedupe: bool = True,
    ) -> None:
        self.name = name
        self._sources = tuple(sources)
        self._normalize = normalize
        self._select = select
        self._dedupe = dedupe

    def _collect(self) -> tuple[list[Candidate], list[int]]:
        raw: list[Candidate] = []
        failed: list[int] = []
        for index, source in enumerate(self._sources):
            try:
                produced = list(source())
            except DocumentError:
                raise
            except Exception as exc:
                logger.debug("%s: source #%d failed: %s", self.name, index, exc)
                failed.append(index)
                continue
            raw.extend(produced)
        return raw, failed

    def resolve(self) -> Resolution:
        raw, failed = self._collect()
        if self._dedupe:
            raw = dedupe(raw)

        normalized: list[Candidate] = []
        for candidate in raw:
            result = self._normalize(candidate) if self._normalize else candidate
            if result is None or is_empty(result):
                continue
            normalized.append(result)

        return Resolution(
            name=self.name,
            candidates=tuple(normalized),
            winner=self._select(normalized),
            failed_sources=tuple(failed),
        )


# ---------------------------------------------------------------------------
# Memoization
# ---------------------------------------------------------------------------

class AttributeCache:
    """Per-page store of computed attributes.

    A key's presence is the "computed" flag, so ``None`` results are cached
    too.  Not thread-safe; a page and its cache have a single owner.
    """

    def __init__(self) -> None:
        self._values: dict[Hashable, Any] = {}

    def get(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        if key not in self._values:
            self._values[key] = compute()
        return self._values[key]

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
