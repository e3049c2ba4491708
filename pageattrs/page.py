"""Page: the public attribute surface over one HTML document.

Usage::

    from pageattrs import Page

    page = Page(html, url="https://example.com/2020/01/03/my-post")
    page.title          # "My Post"
    page.author         # "Jane Q. Public"
    page.published_at   # datetime(2020, 1, 3, 0, 0)
    page.keywords()     # [Keyword(phrase="extraction", occurrences=4), ...]
    page.twitter        # TwitterCard(...) or None

Every attribute is computed on first access and cached for the lifetime of
the page.  Missing attributes are ``None`` (or an empty list); only broken
selectors or an unserializable document raise
(:class:`~pageattrs.errors.DocumentError`).

A page owns its document and cache and must not be shared between threads.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from pageattrs.config import Settings, get_settings
from pageattrs.dates import DEFAULT_DATE_PARSER, DateParser, extract_date
from pageattrs.document import HtmlDocument
from pageattrs.images import ImageRanker
from pageattrs.items import ImageRef, PageSummary, VideoRef
from pageattrs.keywords import (
    DEFAULT_LIMIT,
    DEFAULT_MINIMUM_SCORE,
    DEFAULT_SCORER,
    Keyword,
    PhraseScorer,
    rank_keywords,
)
from pageattrs.normalize import (
    clean_tag,
    normalize_author,
    normalize_lede,
    normalize_title,
    select_common_title,
    split_title,
)
from pageattrs.reader import ReaderDocument
from pageattrs.resolver import (
    AttributeCache,
    AttributeResolver,
    Candidate,
    Many,
    Resolution,
    Single,
    dedupe,
    flatten,
    from_rules,
    from_value,
)
from pageattrs.rules import (
    AUTHOR_MATCHES,
    DESCRIPTION_MATCHES,
    FAVICON_MATCHES,
    FEED_MATCHES,
    HTML_TITLE_MATCHES,
    IMAGE_MATCHES,
    LEDE_MATCHES,
    OG_TITLE_MATCHES,
    SITENAME_MATCHES,
    TAG_SELECTORS,
    TITLE_MATCHES,
)
from pageattrs.sites import AdapterResult, Ok, SiteAdapterRegistry, default_registry
from pageattrs.urls import resolve_url

logger = logging.getLogger(__name__)

# Sentences taken from the reader when no lede rule matches
_LEDE_FALLBACK_SENTENCES = 4


def _first(values: list[Any]) -> Any:
    return values[0] if values else None


class Page:
    """Metadata and content attributes of one already-downloaded page.

    Args:
        html:        Raw markup (str or bytes).
        url:         URL the markup was retrieved from; used to resolve
                     relative links and to gate site adapters.
        settings:    Settings snapshot (default: the process-wide settings
                     at construction time).
        registry:    Site adapters to consult (default: the built-ins).
        scorer:      Phrase scorer for :meth:`keywords`.
        date_parser: Parser for :attr:`published_at`.
    """

    def __init__(
        self,
        html: str | bytes,
        url: str | None = None,
        *,
        settings: Settings | None = None,
        registry: SiteAdapterRegistry | None = None,
        scorer: PhraseScorer = DEFAULT_SCORER,
        date_parser: DateParser = DEFAULT_DATE_PARSER,
    ) -> None:
        self.url = url or None
        self.doc = HtmlDocument(html, url=self.url)
        self.settings = settings or get_settings()
        self._registry = registry if registry is not None else default_registry
        self._scorer = scorer
        self._date_parser = date_parser
        self._cache = AttributeCache()

    def _memo(self, key: Any, compute: Any) -> Any:
        return self._cache.get(key, compute)

    def _resolve(self, resolver: AttributeResolver) -> Resolution:
        return self._memo(("resolution", resolver.name), resolver.resolve)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    @property
    def reader(self) -> ReaderDocument:
        return self._memo("reader", lambda: ReaderDocument(self.doc.raw_html(), self.url))

    # ------------------------------------------------------------------
    # Title & site name
    # ------------------------------------------------------------------

    @property
    def og_title(self) -> str | None:
        """``og:title`` content, if any."""
        return self._memo("og_title", lambda: _first(self.doc.match(OG_TITLE_MATCHES)))

    @property
    def html_title(self) -> str | None:
        """``<title>`` with site name and separators stripped."""

        def _compute() -> str | None:
            title = _first(self.doc.match(HTML_TITLE_MATCHES))
            return split_title(title) if title else None

        return self._memo("html_title", _compute)

    def _title_resolution(self) -> Resolution:
        # In order of likely accuracy: og:title, <title>, in-page headings
        return self._resolve(
            AttributeResolver(
                "title",
                sources=[
                    from_value(lambda: self.og_title),
                    from_value(lambda: self.html_title),
                    from_rules(self.doc, TITLE_MATCHES),
                ],
                normalize=normalize_title,
                select=select_common_title,
            ),
        )

    @property
    def titles(self) -> list[str]:
        return flatten(self._title_resolution().candidates)

    @property
    def title(self) -> str | None:
        winner = self._title_resolution().winner
        return winner.value if isinstance(winner, Single) else None

    @property
    def sitename(self) -> str | None:
        return self._memo("sitename", lambda: _first(self.doc.match(SITENAME_MATCHES)))

    # ------------------------------------------------------------------
    # Date
    # ------------------------------------------------------------------

    @property
    def published_at(self) -> datetime | str | None:
        """Rough publication date found in the content.

        A :class:`~datetime.datetime` when parseable, otherwise the cleaned
        date text.  HTTP headers are the caller's business.
        """
        return self._memo(
            "published_at",
            lambda: extract_date(self.doc.raw_html(), self._date_parser),
        )

    # ------------------------------------------------------------------
    # Author
    # ------------------------------------------------------------------

    def _jsonld_nodes(self) -> list[Any]:
        nodes: list[Any] = []
        for script in self.doc.query('script[type="application/ld+json"]'):
            try:
                data = json.loads(script.text_content() or "")
            except ValueError:
                logger.debug("Skipping malformed JSON-LD block")
                continue
            if isinstance(data, list):
                nodes.extend(data)
            elif isinstance(data, dict):
                nodes.extend(data.get("@graph") or [data])
        return nodes

    def _jsonld_authors(self) -> list[Candidate]:
        candidates: list[Candidate] = []
        for node in self._jsonld_nodes():
            if not isinstance(node, dict):
                continue
            author = node.get("author")
            if isinstance(author, dict) and isinstance(author.get("name"), str):
                candidates.append(Single(author["name"]))
            elif isinstance(author, str):
                candidates.append(Single(author))
            elif isinstance(author, list):
                names = [
                    a.get("name") if isinstance(a, dict) else a
                    for a in author
                ]
                names = [n for n in names if isinstance(n, str) and n.strip()]
                if names:
                    candidates.append(Many.of(names))
        return candidates

    def _author_resolution(self) -> Resolution:
        return self._resolve(
            AttributeResolver(
                "author",
                sources=[self._jsonld_authors, from_rules(self.doc, AUTHOR_MATCHES)],
                normalize=normalize_author,
            ),
        )

    @property
    def authors(self) -> list[str]:
        return dedupe(flatten(self._author_resolution().candidates))

    @property
    def author(self) -> str | None:
        return _first(self.authors)

    # ------------------------------------------------------------------
    # Description & lede
    # ------------------------------------------------------------------

    @property
    def descriptions(self) -> list[str]:
        resolution = self._resolve(
            AttributeResolver("description", sources=[from_rules(self.doc, DESCRIPTION_MATCHES)]),
        )
        return flatten(resolution.candidates)

    @property
    def description(self) -> str | None:
        return _first(self.descriptions)

    def _reader_lede(self) -> list[Candidate]:
        sentences = self.reader.sentences(_LEDE_FALLBACK_SENTENCES)
        return [Single(" ".join(sentences))] if sentences else []

    @property
    def ledes(self) -> list[str]:
        """First paragraph(s) of the story, cut to at most three sentences."""

        def _compute() -> list[str]:
            matched = AttributeResolver(
                "lede",
                sources=[from_rules(self.doc, LEDE_MATCHES)],
                normalize=normalize_lede,
            ).resolve()
            candidates = list(matched.candidates)
            if not candidates:
                candidates = AttributeResolver("lede_reader", sources=[self._reader_lede]).resolve().candidates
            return dedupe(flatten(candidates))

        return self._memo("ledes", _compute)

    @property
    def lede(self) -> str | None:
        return _first(self.ledes)

    # ------------------------------------------------------------------
    # Reader-backed content
    # ------------------------------------------------------------------

    def sentences(self, limit: int = 3) -> str | None:
        """The first *limit* sentences of the body, joined, or ``None``."""

        def _compute() -> str | None:
            found = self.reader.sentences(limit)
            return " ".join(found) if found else None

        return self._memo(("sentences", limit), _compute)

    @property
    def body(self) -> str:
        """Main body as plain text ("" when nothing readable was found)."""
        return self._memo("body", lambda: self.reader.content(plain_text=True).strip())

    @property
    def html_body(self) -> str:
        """Main body with its basic HTML formatting intact."""
        return self._memo("html_body", lambda: self.reader.content().strip())

    def images(self, limit: int = 3) -> list[ImageRef]:
        """Content images with absolute URLs, best first."""

        def _compute() -> list[ImageRef]:
            if self.settings.image_strategy == "ranked":
                ranker = ImageRanker(
                    self.doc.raw_html(),
                    self.url,
                    min_width=self.settings.min_image_width,
                    min_height=self.settings.min_image_height,
                    reader=self.reader,
                )
                return ranker.best_images(limit)
            return self.reader.images(limit)

        return self._memo(("images", limit), _compute)

    def videos(self, limit: int = 1) -> list[VideoRef]:
        return self._memo(("videos", limit), lambda: self.reader.videos(limit))

    # ------------------------------------------------------------------
    # Tags & keywords
    # ------------------------------------------------------------------

    @property
    def tags(self) -> list[str]:
        """Tags or categories; the first selector that finds any wins."""

        def _compute() -> list[str]:
            for selector in TAG_SELECTORS:
                found = [clean_tag(t) for t in self.doc.match(selector)]
                found = [t for t in found if t]
                if found:
                    return found
            return []

        return self._memo("tags", _compute)

    def keywords(
        self,
        limit: int = DEFAULT_LIMIT,
        minimum_score: int | str = DEFAULT_MINIMUM_SCORE,
    ) -> list[Keyword]:
        """Key phrases occurring at least twice, most frequent first.

        Not the ``<meta name="keywords">`` tag; phrases are scored from the
        title, description and body.
        """

        def _compute() -> list[Keyword]:
            text = " ".join([self.title or "", self.description or "", self.body])
            return rank_keywords(text, self._scorer, limit=limit, minimum_score=minimum_score)

        return self._memo(("keywords", limit, minimum_score), _compute)

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    @property
    def feeds(self) -> list[str]:
        """RSS/Atom feed URLs in document order (duplicates kept)."""

        def _normalize(candidate: Candidate) -> Candidate | None:
            if isinstance(candidate, Single):
                return Single(resolve_url(candidate.value, self.url) or "")
            return Many.of(resolve_url(v, self.url) or "" for v in candidate.values)

        resolution = self._resolve(
            AttributeResolver(
                "feeds",
                sources=[from_rules(self.doc, FEED_MATCHES)],
                normalize=_normalize,
                dedupe=False,
            ),
        )
        return flatten(resolution.candidates)

    @property
    def feed(self) -> str | None:
        return _first(self.feeds)

    @property
    def favicon(self) -> str | None:
        return self._memo(
            "favicon",
            lambda: resolve_url(_first(self.doc.match(FAVICON_MATCHES)), self.url),
        )

    @property
    def image(self) -> str | None:
        """The page's declared lead image (``og:image`` and friends)."""
        return self._memo(
            "image",
            lambda: resolve_url(_first(self.doc.match(IMAGE_MATCHES)), self.url),
        )

    # ------------------------------------------------------------------
    # Site adapters
    # ------------------------------------------------------------------

    def adapter_result(self, name: str) -> AdapterResult:
        """Raw :class:`~pageattrs.sites.Ok` / ``Err`` / ``Skipped`` for adapter *name*."""
        return self._memo(
            ("site", name),
            lambda: self._registry.run(name, self.doc, self.settings),
        )

    def site_record(self, name: str) -> Any:
        result = self.adapter_result(name)
        return result.record if isinstance(result, Ok) else None

    @property
    def youtube(self) -> Any:
        return self.site_record("youtube")

    @property
    def vine(self) -> Any:
        return self.site_record("vine")

    @property
    def twitter(self) -> Any:
        return self.site_record("twitter")

    @property
    def instagram(self) -> Any:
        return self.site_record("instagram")

    @property
    def livestream(self) -> Any:
        return self.site_record("livestream")

    @property
    def ustream(self) -> Any:
        return self.site_record("ustream")

    @property
    def soundcloud(self) -> Any:
        return self.site_record("soundcloud")

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_summary(self, keyword_limit: int = DEFAULT_LIMIT) -> PageSummary:
        published = self.published_at
        sites = {}
        for name in self._registry.names():
            record = self.site_record(name)
            if record is not None:
                sites[name] = record.model_dump() if hasattr(record, "model_dump") else record
        return PageSummary(
            url=self.url,
            title=self.title,
            sitename=self.sitename,
            author=self.author,
            authors=self.authors,
            published_at=published.isoformat() if isinstance(published, datetime) else published,
            description=self.description,
            lede=self.lede,
            tags=self.tags,
            keywords=[tuple(k) for k in self.keywords(keyword_limit)],
            feeds=self.feeds,
            favicon=self.favicon,
            image=self.image,
            images=self.images(),
            videos=self.videos(),
            sites=sites,
        )

    def to_dict(self, keyword_limit: int = DEFAULT_LIMIT) -> dict[str, Any]:
        """All attributes as a JSON-serializable dict."""
        return self.to_summary(keyword_limit).model_dump(mode="json")

    def __repr__(self) -> str:
        return f"Page(url={self.url!r})"
