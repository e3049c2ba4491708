"""Twitter status pages: author card plus a sanitized copy of the tweet.

The card needs handle, name and avatar; if any of them is missing the whole
record is rejected.  Link colour, tweet markup and media image are optional
and fail individually.
"""

from __future__ import annotations

import copy
import logging
import re
from html import escape
from typing import TYPE_CHECKING, Any

from lxml import etree

from pageattrs.items import TwitterCard
from pageattrs.sites.base import SiteAdapter, require
from pageattrs.urls import resolve_url

if TYPE_CHECKING:
    from pageattrs.config import Settings
    from pageattrs.document import HtmlDocument

logger = logging.getLogger(__name__)

TWITTER_BASE = "https://twitter.com"

TWEET_TEXT = "p.tweet-text"
MENTION_CLASS = "twitter-atreply"
HASHTAG_CLASS = "twitter-hashtag"

_LINK_COLOR_RE = re.compile(r"\.u-textUserColor\s+\{\s+color:\s+(\S+?);?\s", re.MULTILINE)


def _replace_with_text(el: Any, text: str) -> None:
    """Swap *el* for plain *text*, keeping its tail."""
    parent = el.getparent()
    if parent is None:
        return
    joined = text + (el.tail or "")
    previous = el.getprevious()
    if previous is not None:
        previous.tail = (previous.tail or "") + joined
    else:
        parent.text = (parent.text or "") + joined
    parent.remove(el)


def _inner_html(el: Any) -> str:
    parts = [escape(el.text or "", quote=False)]
    parts.extend(etree.tostring(child, encoding="unicode", method="html") for child in el)
    return "".join(parts)


def _absolutize(links: list[Any], marker: str) -> None:
    for link in links:
        link.set("class", marker)
        href = resolve_url(link.get("href"), TWITTER_BASE)
        if href:
            link.set("href", href)


def sanitize_tweet(fragment: Any) -> str:
    """Return the inner markup of a cleaned-up copy of *fragment*.

    The source tree is never modified.
    """
    frag = copy.deepcopy(fragment)
    frag.tail = None

    # Only class and href survive
    for el in frag.iter():
        for name in list(el.attrib):
            if name not in ("class", "href"):
                del el.attrib[name]

    for span in frag.xpath(".//span"):
        _replace_with_text(span, span.text_content())

    for link in frag.xpath(".//a"):
        text = link.text_content()
        for child in list(link):
            link.remove(child)
        link.text = text

    _absolutize(frag.xpath(f'.//*[contains(@class, "{MENTION_CLASS}")]'), "username")
    _absolutize(frag.xpath(f'.//*[contains(@class, "{HASHTAG_CLASS}")]'), "hashtag")

    for link in frag.xpath('.//a[not(@class="username") and not(@class="hashtag")]'):
        for name in list(link.attrib):
            if name != "href":
                del link.attrib[name]

    return _inner_html(frag)


class TwitterAdapter(SiteAdapter):
    name = "twitter"

    def link_color(self, doc: HtmlDocument) -> str | None:
        try:
            style = doc.first("style")
            match = _LINK_COLOR_RE.search(style.text_content())
            return match.group(1) if match else None
        except Exception as exc:
            logger.debug("twitter link colour unavailable: %s", exc)
            return None

    def tweet(self, doc: HtmlDocument) -> str | None:
        try:
            return sanitize_tweet(require(doc.first(TWEET_TEXT), "tweet text"))
        except Exception as exc:
            logger.debug("tweet unavailable: %s", exc)
            return None

    def image(self, doc: HtmlDocument) -> str | None:
        try:
            img = doc.first('//a[contains(@class, "media-thumbnail")]/*/img')
            return img.get("src") if img is not None else None
        except Exception as exc:
            logger.debug("twitter image unavailable: %s", exc)
            return None

    def extract(self, doc: HtmlDocument, settings: Settings) -> TwitterCard:
        handle = require(doc.first('//div[contains(@class, "tweet")]/@data-screen-name'), "handle")
        name = require(doc.first('//div[contains(@class, "tweet")]/@data-name'), "name")
        avatar = require(doc.first('//img[contains(@class, "avatar")]/@src'), "avatar")
        return TwitterCard(
            handle=str(handle),
            name=str(name),
            avatar=str(avatar),
            link_color=self.link_color(doc),
            tweet=self.tweet(doc),
            image=self.image(doc),
        )
