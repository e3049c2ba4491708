"""Readability collaborator: main body, sentences, images and videos.

Body extraction runs a two-tier cascade:

Tier 1: readability-lxml  (Mozilla Readability algorithm)
Tier 2: trafilatura       (used when readability finds too little text)

Everything is computed lazily and at most once per :class:`ReaderDocument`.
Failures inside either library are logged and produce empty results.
"""

from __future__ import annotations

import logging
import re
from functools import cached_property
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from pageattrs.items import ImageRef, VideoRef

logger = logging.getLogger(__name__)

_READABILITY_MIN_WORDS = 25
_TRAFILATURA_MIN_WORDS = 25
_MIN_SENTENCE_WORDS = 3

_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+(?=[\"'“(\[]?[A-Z0-9])")

_VIDEO_HOSTS: tuple[str, ...] = (
    "youtube.com",
    "youtube-nocookie.com",
    "youtu.be",
    "vimeo.com",
    "dailymotion.com",
    "vine.co",
    "ustream.tv",
    "livestream.com",
    "soundcloud.com",
    "instagram.com",
)


def _count_words(html: str) -> int:
    try:
        soup = BeautifulSoup(html, "lxml")
        return len(soup.get_text(separator=" ").split())
    except Exception:
        return 0


def _try_readability(html: str, url: str = "") -> str | None:
    try:
        from readability import Document  # type: ignore[import-untyped]

        doc = Document(html, url=url or None)
        content = doc.summary(html_partial=True)
        if _count_words(content) >= _READABILITY_MIN_WORDS:
            return content
    except Exception as exc:
        logger.debug("readability failed: %s", exc)
    return None


def _try_trafilatura(html: str, url: str = "") -> str | None:
    try:
        import trafilatura  # type: ignore[import-untyped]

        content = trafilatura.extract(
            html,
            include_images=True,
            include_tables=True,
            output_format="html",
            url=url or None,
            favor_recall=True,
        )
        if content and _count_words(content) >= _TRAFILATURA_MIN_WORDS:
            return content
    except Exception as exc:
        logger.debug("trafilatura failed: %s", exc)
    return None


def _first_src(img: Tag) -> str:
    src = str(img.get("src") or "").strip()
    if not src:
        srcset = str(img.get("srcset") or "").strip()
        if srcset:
            src = srcset.split(",")[0].strip().split(" ")[0]
    return src


def _dimension(value: object) -> int | None:
    match = re.match(r"\s*(\d+)", str(value or ""))
    return int(match.group(1)) if match else None


def image_refs(html: str, base_url: str = "") -> list[ImageRef]:
    """Every distinct ``<img>`` in *html* with absolute URL, alt, caption and declared size."""
    try:
        soup = BeautifulSoup(html, "lxml")
    except Exception:
        return []

    images: list[ImageRef] = []
    seen: set[str] = set()
    for img in soup.find_all("img"):
        if not isinstance(img, Tag):
            continue
        src = _first_src(img)
        if not src or src.startswith("data:"):
            continue
        if base_url:
            src = urljoin(base_url, src)
        if src in seen:
            continue
        seen.add(src)

        caption = ""
        parent = img.parent
        if isinstance(parent, Tag) and parent.name == "figure":
            figcaption = parent.find("figcaption")
            if figcaption:
                caption = figcaption.get_text().strip()

        images.append(
            ImageRef(
                url=src,
                alt=str(img.get("alt") or "").strip(),
                caption=caption,
                width=_dimension(img.get("width")),
                height=_dimension(img.get("height")),
            ),
        )
    return images


def video_refs(html: str, base_url: str = "") -> list[VideoRef]:
    """Embedded players (iframe/embed/object) from known hosts and ``<video>`` sources."""
    try:
        soup = BeautifulSoup(html, "lxml")
    except Exception:
        return []

    videos: list[VideoRef] = []
    seen: set[str] = set()

    def _add(src: str, kind: str) -> None:
        src = src.strip()
        if not src:
            return
        if base_url:
            src = urljoin(base_url, src)
        if src not in seen:
            seen.add(src)
            videos.append(VideoRef(url=src, kind=kind))

    for el in soup.find_all(["iframe", "embed", "object", "video", "source"]):
        if not isinstance(el, Tag):
            continue
        src = str(el.get("src") or el.get("data") or "")
        if el.name in ("video", "source"):
            if el.name == "source" and (not isinstance(el.parent, Tag) or el.parent.name != "video"):
                continue
            _add(src, "video")
        elif any(host in src for host in _VIDEO_HOSTS):
            _add(src, "embed" if el.name == "iframe" else el.name)
    return videos


class ReaderDocument:
    """Readability view of one page.

    Args:
        html: Raw page markup.
        url:  Page URL, used to absolutize image and video links.
    """

    def __init__(self, html: str, url: str | None = None) -> None:
        self._html = html
        self._url = url or ""

    @cached_property
    def content_html(self) -> str:
        """Main content as an HTML fragment ("" when nothing was found)."""
        if not self._html or not self._html.strip():
            return ""
        content = _try_readability(self._html, self._url)
        if content is None:
            content = _try_trafilatura(self._html, self._url)
        if content is None:
            logger.debug("No readable content found for %s", self._url or "<no url>")
            return ""
        return content.strip()

    @cached_property
    def _plain_text(self) -> str:
        if not self.content_html:
            return ""
        soup = BeautifulSoup(self.content_html, "lxml")
        blocks = [
            " ".join(el.get_text(separator=" ").split())
            for el in soup.find_all(["p", "li", "blockquote", "h1", "h2", "h3", "h4", "pre"])
            if isinstance(el, Tag) and not el.find_parent(["p", "li", "blockquote"])
        ]
        blocks = [b for b in blocks if b]
        if not blocks:
            blocks = [" ".join(soup.get_text(separator=" ").split())]
        return "\n\n".join(blocks)

    def content(self, plain_text: bool = False) -> str:
        """Main content, as HTML or (with *plain_text*) as paragraphs of text."""
        return self._plain_text if plain_text else self.content_html

    @cached_property
    def _sentences(self) -> list[str]:
        sentences: list[str] = []
        for paragraph in self._plain_text.split("\n\n"):
            for sentence in _SENTENCE_SPLIT_RE.split(paragraph.strip()):
                sentence = sentence.strip()
                if len(sentence.split()) >= _MIN_SENTENCE_WORDS:
                    sentences.append(sentence)
        return sentences

    def sentences(self, limit: int | None = None) -> list[str]:
        return self._sentences[:limit] if limit is not None else list(self._sentences)

    @cached_property
    def _images(self) -> list[ImageRef]:
        return image_refs(self.content_html, self._url) if self.content_html else []

    def images(self, limit: int | None = None) -> list[ImageRef]:
        return self._images[:limit] if limit is not None else list(self._images)

    @cached_property
    def _videos(self) -> list[VideoRef]:
        # Readability drops most embeds, so search the whole page
        return video_refs(self._html, self._url)

    def videos(self, limit: int | None = None) -> list[VideoRef]:
        return self._videos[:limit] if limit is not None else list(self._videos)
