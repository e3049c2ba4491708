"""Adapters for video and photo hosts: YouTube, Vine, Instagram, Ustream, Livestream."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pageattrs.document import MatchRule, attr
from pageattrs.items import InstagramMedia, InstagramPost, UstreamChannel, VineUser, YouTubeChannel
from pageattrs.sites.base import (
    AdapterError,
    Ok,
    SiteAdapter,
    decode_assignment,
    first_value,
    inline_scripts,
    require,
)

if TYPE_CHECKING:
    from pageattrs.config import Settings
    from pageattrs.document import HtmlDocument

VINE_BASE = "https://vine.co"
USTREAM_BASE = "https://ustream.tv"


def _prefixed(base: str, name: str = "href") -> Any:
    def _get(node: Any) -> str | None:
        value = node.get(name)
        return base + value if value else None

    return _get


# ---------------------------------------------------------------------------
# YouTube
# ---------------------------------------------------------------------------

YOUTUBE_CHANNEL_NAME_MATCHES = (MatchRule("a.g-hovercard"),)
YOUTUBE_CHANNEL_URL_MATCHES = (
    MatchRule('//span[@itemprop="author"]/link[@itemprop="url"]', attr("href")),
)


class YouTubeAdapter(SiteAdapter):
    name = "youtube"

    def extract(self, doc: HtmlDocument, settings: Settings) -> YouTubeChannel | None:
        name = first_value(doc, YOUTUBE_CHANNEL_NAME_MATCHES)
        url = first_value(doc, YOUTUBE_CHANNEL_URL_MATCHES)
        if name is None and url is None:
            return None
        return YouTubeChannel(name=name, url=url)


# ---------------------------------------------------------------------------
# Vine
# ---------------------------------------------------------------------------

VINE_NAME_MATCHES = (MatchRule("p.username a"),)
VINE_URL_MATCHES = (MatchRule("p.username a", _prefixed(VINE_BASE)),)


class VineAdapter(SiteAdapter):
    name = "vine"

    def extract(self, doc: HtmlDocument, settings: Settings) -> VineUser | None:
        name = first_value(doc, VINE_NAME_MATCHES)
        if name is None:
            return None
        return VineUser(name=name, url=first_value(doc, VINE_URL_MATCHES))


# ---------------------------------------------------------------------------
# Instagram
# ---------------------------------------------------------------------------

INSTAGRAM_SHARED_DATA_PREFIX = "window._sharedData ="
# The page key moved between site revisions
_INSTAGRAM_PAGE_KEYS: tuple[str, ...] = ("PostPage", "DesktopPPage")


class InstagramMediaAdapter(SiteAdapter):
    """Owner and caption from the ``window._sharedData`` bootstrap payload."""

    name = "instagram_media"

    def extract(self, doc: HtmlDocument, settings: Settings) -> InstagramMedia:
        scripts = require(inline_scripts(doc), "inline script")
        data = decode_assignment(scripts[-1].text_content(), INSTAGRAM_SHARED_DATA_PREFIX)
        entry = data["entry_data"]
        page_key = next((k for k in _INSTAGRAM_PAGE_KEYS if k in entry), None)
        if page_key is None:
            raise AdapterError("no post page in entry_data")
        media = entry[page_key][0]["media"]
        caption = media.get("caption")
        return InstagramMedia(
            username=media["owner"]["username"],
            caption=caption if isinstance(caption, str) else None,
        )


class InstagramAdapter(SiteAdapter):
    name = "instagram"

    def __init__(self, media: InstagramMediaAdapter | None = None) -> None:
        self._media = media or InstagramMediaAdapter()

    def extract(self, doc: HtmlDocument, settings: Settings) -> InstagramPost | None:
        result = self._media.run(doc, settings)
        video = first_value(doc, MatchRule('meta[property="og:video"]', attr("content")))
        media = result.record if isinstance(result, Ok) else None
        if video is None and media is None:
            return None
        return InstagramPost(video=video, media=media)


# ---------------------------------------------------------------------------
# Ustream
# ---------------------------------------------------------------------------

USTREAM_CHANNEL_LINK = '.title a[data-content-type="channel"]'


class UstreamAdapter(SiteAdapter):
    name = "ustream"

    def extract(self, doc: HtmlDocument, settings: Settings) -> UstreamChannel:
        href = require(
            first_value(doc, MatchRule(USTREAM_CHANNEL_LINK, attr("href"))),
            "channel link",
        )
        return UstreamChannel(
            title=first_value(doc, MatchRule('meta[property="og:title"]', attr("content"))),
            description=first_value(doc, ".description .moreInfo"),
            channel_name=first_value(doc, USTREAM_CHANNEL_LINK),
            channel_url=USTREAM_BASE + href,
        )


# ---------------------------------------------------------------------------
# Livestream
# ---------------------------------------------------------------------------

LIVESTREAM_CONFIG_PREFIX = "window.config ="


class LivestreamAdapter(SiteAdapter):
    """The player configuration embedded as ``window.config = {...};``."""

    name = "livestream"
    domain = "livestream.com"

    def extract(self, doc: HtmlDocument, settings: Settings) -> dict[str, Any]:
        for script in inline_scripts(doc):
            text = script.text_content()
            if "window.config" in text:
                data = decode_assignment(text, LIVESTREAM_CONFIG_PREFIX)
                if not isinstance(data, dict):
                    raise AdapterError("livestream config is not an object")
                return data
        raise AdapterError("no window.config script")
