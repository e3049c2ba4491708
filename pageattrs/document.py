"""Queryable document: a thin adapter over an lxml HTML tree.

Selectors may be CSS (``meta[property="og:image"]``) or XPath
(``//span[@itemprop="author"]/link``); anything that starts with ``/``,
``./`` or ``(`` is treated as XPath.

Usage::

    from pageattrs.document import HtmlDocument, MatchRule, attr

    doc = HtmlDocument(html, url="https://example.com/post")
    feeds = doc.match([
        MatchRule('link[type="application/rss+xml"]', attr("href")),
    ])
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Union

from cssselect import SelectorError as CSSSelectorError
from lxml import etree
from lxml import html as lxml_html
from lxml.cssselect import CSSSelector

from pageattrs.errors import DocumentError, SelectorError

logger = logging.getLogger(__name__)

_XML_DECL_RE = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_EMPTY_DOCUMENT = "<html><head></head><body></body></html>"

Transform = Callable[[Any], Any]


def squish(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def node_text(node: Any) -> str:
    """Default transform: whitespace-collapsed text content of *node*."""
    if isinstance(node, str):
        return squish(node)
    return squish(node.text_content())


def attr(name: str) -> Transform:
    """Return a transform that reads attribute *name* from a node."""

    def _get(node: Any) -> str | None:
        return node.get(name)

    _get.__name__ = f"attr_{name}"
    return _get


def is_xpath(selector: str) -> bool:
    return selector.lstrip().startswith(("/", "./", "("))


@dataclass(frozen=True)
class MatchRule:
    """One place to look for an attribute: a selector plus an optional transform."""

    selector: str
    transform: Transform | None = None

    def extract(self, node: Any) -> Any:
        if self.transform is None:
            return node_text(node)
        return self.transform(node)


RuleLike = Union[MatchRule, str]
Rules = Union[RuleLike, Sequence[RuleLike]]


def as_rules(rules: Rules) -> list[MatchRule]:
    """Coerce a selector, rule, or sequence of either into a list of rules."""
    if isinstance(rules, (str, MatchRule)):
        rules = [rules]
    return [r if isinstance(r, MatchRule) else MatchRule(r) for r in rules]


def _parse(markup: str | bytes) -> Any:
    if isinstance(markup, bytes):
        if not markup.strip():
            markup = _EMPTY_DOCUMENT
    else:
        # lxml refuses str input that still carries an encoding declaration
        markup = _XML_DECL_RE.sub("", markup, count=1)
        if not markup.strip():
            markup = _EMPTY_DOCUMENT
    try:
        return lxml_html.document_fromstring(markup)
    except etree.ParserError as exc:
        # Comment-only or otherwise content-free markup
        logger.debug("Empty document after parsing: %s", exc)
        return lxml_html.document_fromstring(_EMPTY_DOCUMENT)
    except (ValueError, TypeError) as exc:
        raise DocumentError(f"Could not parse markup: {exc}") from exc


class HtmlDocument:
    """Immutable parsed HTML tree plus the URL it was retrieved from.

    Compiled selectors are cached per instance; lxml evaluators must not be
    shared between threads, and documents are single-owner.
    """

    def __init__(self, markup: str | bytes, url: str | None = None) -> None:
        self.url = url or None
        self._root = _parse(markup)
        self._compiled: dict[str, Callable[[Any], Any]] = {}

    @property
    def root(self) -> Any:
        return self._root

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _compile(self, selector: str) -> Callable[[Any], Any]:
        compiled = self._compiled.get(selector)
        if compiled is not None:
            return compiled
        try:
            if is_xpath(selector):
                compiled = etree.XPath(selector)
            else:
                compiled = CSSSelector(selector, translator="html")
        except (etree.XPathSyntaxError, CSSSelectorError) as exc:
            raise SelectorError(f"Invalid selector {selector!r}: {exc}", selector) from exc
        self._compiled[selector] = compiled
        return compiled

    def query(self, selector: str, node: Any = None) -> list[Any]:
        """Return every node (or XPath string result) matching *selector*."""
        compiled = self._compile(selector)
        try:
            result = compiled(self._root if node is None else node)
        except etree.XPathEvalError as exc:
            raise SelectorError(f"Invalid selector {selector!r}: {exc}", selector) from exc
        if isinstance(result, list):
            return result
        return [result]

    def first(self, selector: str, node: Any = None) -> Any:
        """Return the first node matching *selector*, or ``None``."""
        found = self.query(selector, node)
        return found[0] if found else None

    def match(self, rules: Rules) -> list[str]:
        """Evaluate *rules* in order and return every non-empty value found.

        Values keep rule order first, then document order.  Nothing is
        de-duplicated here; that is the resolver's job.
        """
        values: list[str] = []
        for rule in as_rules(rules):
            for node in self.query(rule.selector):
                value = rule.extract(node)
                if not isinstance(value, str):
                    continue
                value = value.strip()
                if value:
                    values.append(value)
        return values

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @cached_property
    def _serialized(self) -> str:
        try:
            return etree.tostring(self._root, encoding="unicode", method="html")
        except (etree.SerialisationError, ValueError) as exc:
            raise DocumentError(f"Could not serialize document: {exc}") from exc

    def raw_html(self) -> str:
        """Return the whole document serialized back to HTML."""
        return self._serialized

    def text(self) -> str:
        """Return the whitespace-collapsed text of the whole document."""
        return squish(self._root.text_content())

    def __repr__(self) -> str:
        return f"HtmlDocument(url={self.url!r})"
