"""pageattrs - pull titles, authors, dates, ledes, keywords and more out of HTML.

Quick usage::

    from pageattrs import Page

    page = Page(html, url="https://example.com/blog/some-post")
    print(page.title)
    print(page.author, page.published_at)
    print(page.keywords(limit=10))

Site adapter extension point::

    from pageattrs import SiteAdapter, register_adapter

    class GistAdapter(SiteAdapter):
        name = "gist"
        domain = "gist.github.com"

        def extract(self, doc, settings):
            return {"files": doc.match(".gist-blob-name")}

    register_adapter(GistAdapter())
"""

from pageattrs.config import Settings, configure, configure_logging, get_settings
from pageattrs.errors import DocumentError, FetchError, PageAttrsError, SelectorError
from pageattrs.keywords import Keyword, PhraseScorer
from pageattrs.page import Page
from pageattrs.sites import SiteAdapter, SiteAdapterRegistry, register_adapter

__version__ = "0.1.0"
__all__ = [
    "DocumentError",
    "FetchError",
    "Keyword",
    "Page",
    "PageAttrsError",
    "PhraseScorer",
    "SelectorError",
    "Settings",
    "SiteAdapter",
    "SiteAdapterRegistry",
    "configure",
    "configure_logging",
    "get_settings",
    "register_adapter",
]
