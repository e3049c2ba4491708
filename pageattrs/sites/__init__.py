"""Site adapter registry.

Adapters run in registration order.  Custom adapters can be added to the
default registry::

    from pageattrs.sites import SiteAdapter, register_adapter

    class GistAdapter(SiteAdapter):
        name = "gist"
        domain = "gist.github.com"

        def extract(self, doc, settings):
            return {"files": doc.match(".file-header .gist-blob-name")}

    register_adapter(GistAdapter())
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from pageattrs.sites.base import AdapterResult, Err, Ok, SiteAdapter, Skipped
from pageattrs.sites.media import (
    InstagramAdapter,
    InstagramMediaAdapter,
    LivestreamAdapter,
    UstreamAdapter,
    VineAdapter,
    YouTubeAdapter,
)
from pageattrs.sites.soundcloud import SoundCloudAdapter
from pageattrs.sites.twitter import TwitterAdapter

if TYPE_CHECKING:
    from pageattrs.config import Settings
    from pageattrs.document import HtmlDocument


class SiteAdapterRegistry:
    """Ordered, name-addressed collection of :class:`SiteAdapter` objects."""

    def __init__(self, adapters: Iterable[SiteAdapter] = ()) -> None:
        self._adapters: dict[str, SiteAdapter] = {}
        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: SiteAdapter) -> None:
        if not adapter.name:
            raise ValueError("site adapters need a name")
        self._adapters[adapter.name] = adapter

    def get(self, name: str) -> SiteAdapter | None:
        return self._adapters.get(name)

    def names(self) -> list[str]:
        return list(self._adapters)

    def __iter__(self) -> Iterator[SiteAdapter]:
        return iter(list(self._adapters.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def run(self, name: str, doc: HtmlDocument, settings: Settings) -> AdapterResult:
        adapter = self._adapters.get(name)
        if adapter is None:
            return Skipped(f"no adapter named {name!r}")
        return adapter.run(doc, settings)


def builtin_adapters() -> list[SiteAdapter]:
    media = InstagramMediaAdapter()
    return [
        YouTubeAdapter(),
        VineAdapter(),
        TwitterAdapter(),
        media,
        InstagramAdapter(media),
        UstreamAdapter(),
        LivestreamAdapter(),
        SoundCloudAdapter(),
    ]


default_registry = SiteAdapterRegistry(builtin_adapters())


def register_adapter(adapter: SiteAdapter) -> None:
    """Add *adapter* to :data:`default_registry` (replacing one with the same name)."""
    default_registry.register(adapter)


__all__ = [
    "AdapterResult",
    "Err",
    "Ok",
    "SiteAdapter",
    "SiteAdapterRegistry",
    "Skipped",
    "builtin_adapters",
    "default_registry",
    "register_adapter",
]
