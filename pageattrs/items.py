"""Pydantic models for media references and site-specific records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


def _strip(v: Any) -> Any:
    if isinstance(v, str):
        return v.strip() or None
    return v


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------

class ImageRef(BaseModel):
    url: str
    alt: str = ""
    caption: str = ""
    width: int | None = None
    height: int | None = None

    @property
    def area(self) -> int:
        return (self.width or 0) * (self.height or 0)


class VideoRef(BaseModel):
    url: str
    kind: str = "embed"  # embed|video|object


# ---------------------------------------------------------------------------
# Site records
# ---------------------------------------------------------------------------

class SiteRecord(BaseModel):
    """Base for site records: blank strings become ``None``."""

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return _strip(v)


class YouTubeChannel(SiteRecord):
    name: str | None = None
    url: str | None = None


class VineUser(SiteRecord):
    name: str | None = None
    url: str | None = None


class TwitterCard(SiteRecord):
    handle: str
    name: str
    avatar: str
    link_color: str | None = None
    tweet: str | None = None
    image: str | None = None


class InstagramMedia(SiteRecord):
    username: str | None = None
    caption: str | None = None


class InstagramPost(SiteRecord):
    video: str | None = None
    media: InstagramMedia | None = None


class UstreamChannel(SiteRecord):
    channel_url: str
    title: str | None = None
    description: str | None = None
    channel_name: str | None = None


# ---------------------------------------------------------------------------
# Page summary (CLI / to_dict output)
# ---------------------------------------------------------------------------

class PageSummary(BaseModel):
    url: str | None = None
    title: str | None = None
    sitename: str | None = None
    author: str | None = None
    authors: list[str] = Field(default_factory=list)
    published_at: str | None = None
    description: str | None = None
    lede: str | None = None
    tags: list[str] = Field(default_factory=list)
    keywords: list[tuple[str, int]] = Field(default_factory=list)
    feeds: list[str] = Field(default_factory=list)
    favicon: str | None = None
    image: str | None = None
    images: list[ImageRef] = Field(default_factory=list)
    videos: list[VideoRef] = Field(default_factory=list)
    sites: dict[str, Any] = Field(default_factory=dict)
