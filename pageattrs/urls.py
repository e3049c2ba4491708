"""URL helpers: resolving relative references and gating on domains."""

from __future__ import annotations

from urllib.parse import urljoin, urlparse


def has_scheme(url: str) -> bool:
    try:
        return bool(urlparse(url).scheme)
    except ValueError:
        return False


def resolve_url(value: str | None, base_url: str | None) -> str | None:
    """Resolve *value* against *base_url*.

    Absolute URLs pass through unchanged, as does everything when the base
    is unknown.
    """
    if not value:
        return value
    value = value.strip()
    if has_scheme(value) or not base_url:
        return value
    try:
        return urljoin(base_url, value)
    except ValueError:
        return value


def url_mentions(url: str | None, fragment: str) -> bool:
    """True when *fragment* (e.g. ``"soundcloud.com"``) occurs in *url*."""
    return bool(url) and fragment.lower() in url.lower()
