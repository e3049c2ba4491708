"""Site adapter contract and the Ok/Err/Skipped result types.

Every adapter runs inside a failure boundary: whatever goes wrong in
:meth:`SiteAdapter.extract` becomes an :class:`Err` carrying the reason, so
one broken site record never affects another attribute.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from pageattrs.errors import SelectorError
from pageattrs.urls import url_mentions

if TYPE_CHECKING:
    from pageattrs.config import Settings
    from pageattrs.document import HtmlDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ok:
    record: Any


@dataclass(frozen=True)
class Err:
    reason: str
    error: BaseException | None = None


@dataclass(frozen=True)
class Skipped:
    reason: str


AdapterResult = Union[Ok, Err, Skipped]


class AdapterError(Exception):
    """Raised by adapters for expected shape mismatches (missing nodes, keys)."""


class SiteAdapter:
    """Base class for site-specific structured extractors.

    Subclasses set :attr:`name`, optionally :attr:`domain` (a URL substring
    that must be present for the adapter to run) and implement
    :meth:`extract`.
    """

    name: str = ""
    domain: str | None = None

    def enabled(self, settings: Settings) -> bool:
        """Extra gate evaluated before :meth:`extract` (e.g. credentials)."""
        return True

    def applies_to(self, url: str | None) -> bool:
        return self.domain is None or url_mentions(url, self.domain)

    def extract(self, doc: HtmlDocument, settings: Settings) -> Any:
        raise NotImplementedError

    def run(self, doc: HtmlDocument, settings: Settings) -> AdapterResult:
        if not self.applies_to(doc.url):
            return Skipped(f"url does not mention {self.domain}")
        if not self.enabled(settings):
            return Skipped("adapter disabled by settings")
        try:
            record = self.extract(doc, settings)
        except SelectorError:
            raise
        except Exception as exc:
            logger.debug("%s adapter failed for %s: %s", self.name, doc.url, exc)
            return Err(f"{type(exc).__name__}: {exc}", exc)
        if record is None:
            return Err("no record")
        return Ok(record)


# ---------------------------------------------------------------------------
# Helpers shared by adapters
# ---------------------------------------------------------------------------

def require(value: Any, what: str) -> Any:
    """Return *value*, or raise :class:`AdapterError` when it is missing."""
    if value is None or value == "" or value == []:
        raise AdapterError(f"missing {what}")
    return value


def first_value(doc: HtmlDocument, rules: Any) -> str | None:
    values = doc.match(rules)
    return values[0] if values else None


def inline_scripts(doc: HtmlDocument) -> list[Any]:
    """``<script>`` elements without a ``src`` attribute, in document order."""
    return [s for s in doc.query("script") if s.get("src") is None]


def decode_assignment(script_text: str, prefix: str) -> Any:
    """Decode ``<prefix> {...};`` from an inline script as JSON.

    Raises :class:`AdapterError` when the prefix is absent and
    :class:`json.JSONDecodeError` when the payload is malformed.
    """
    text = script_text.strip()
    if not text.startswith(prefix):
        raise AdapterError(f"payload does not start with {prefix!r}")
    payload = text[len(prefix):].strip()
    if payload.endswith(";"):
        payload = payload[:-1].rstrip()
    return json.loads(payload)
