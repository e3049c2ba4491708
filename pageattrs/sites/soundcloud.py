"""SoundCloud: resolve a track/user page through the public API.

This is the only adapter that performs network I/O.  It runs only when a
``soundcloud_client_id`` is configured and the page URL is on
soundcloud.com; a single attempt is made, without retries.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from pageattrs.errors import FetchError
from pageattrs.sites.base import AdapterError, SiteAdapter

if TYPE_CHECKING:
    from pageattrs.config import Settings
    from pageattrs.document import HtmlDocument

logger = logging.getLogger(__name__)

RESOLVE_ENDPOINT = "https://api.soundcloud.com/resolve.json"
_USER_AGENT = "pageattrs/0.1"


def resolve_soundcloud(url: str, client_id: str, timeout: int = 10) -> dict[str, Any]:
    """Return the API's JSON description of the resource at *url*.

    Raises:
        FetchError: On HTTP errors, connection failures, or a non-JSON body.
    """
    query = urlencode({"url": url, "client_id": client_id})
    req = urllib.request.Request(
        f"{RESOLVE_ENDPOINT}?{query}",
        headers={"User-Agent": _USER_AGENT, "Accept": "application/json"},
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            charset = resp.headers.get_content_charset("utf-8") or "utf-8"
            body = resp.read().decode(charset, errors="replace")
    except urllib.error.HTTPError as exc:
        raise FetchError(
            f"HTTP {exc.code} resolving {url}: {exc.reason}", url=url, status=exc.code,
        ) from exc
    except urllib.error.URLError as exc:
        raise FetchError(f"URL error resolving {url}: {exc.reason}", url=url) from exc
    except OSError as exc:
        raise FetchError(f"Network error resolving {url}: {exc}", url=url) from exc

    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise FetchError(f"Invalid JSON from SoundCloud for {url}: {exc}", url=url) from exc


class SoundCloudAdapter(SiteAdapter):
    name = "soundcloud"
    domain = "soundcloud.com"

    def enabled(self, settings: Settings) -> bool:
        return bool(settings.soundcloud_client_id)

    def extract(self, doc: HtmlDocument, settings: Settings) -> dict[str, Any]:
        if not doc.url or not settings.soundcloud_client_id:
            raise AdapterError("soundcloud lookup needs a page url and client id")
        logger.debug("Resolving %s through the SoundCloud API", doc.url)
        data = resolve_soundcloud(doc.url, settings.soundcloud_client_id, settings.lookup_timeout)
        if not isinstance(data, dict):
            raise AdapterError("unexpected SoundCloud payload")
        return data
