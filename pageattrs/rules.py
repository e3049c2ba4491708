"""Rule sets: where to look for each attribute, most trustworthy first.

Each rule set is an ordered tuple of :class:`~pageattrs.document.MatchRule`.
A bare selector uses the node's text; a rule with a transform reads an
attribute instead.
"""

from __future__ import annotations

from pageattrs.document import MatchRule, attr

_content = attr("content")
_href = attr("href")

# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------

OG_TITLE_MATCHES: tuple[MatchRule, ...] = (
    MatchRule('meta[property~="og:title"]', _content),
)

HTML_TITLE_MATCHES: tuple[MatchRule, ...] = (
    MatchRule("title"),
)

TITLE_MATCHES: tuple[MatchRule, ...] = (
    MatchRule("#pname a"),             # Google Code style
    MatchRule(".entryheader h1"),      # Kubrick
    MatchRule(".entry-title a"),       # Blogger / WordPress
    MatchRule(".post-title a"),
    MatchRule(".post_title a"),
    MatchRule(".posttitle a"),
    MatchRule(".post-header h1"),
    MatchRule(".entry-title"),
    MatchRule(".post-title"),
    MatchRule(".post h1"),
    MatchRule(".post h3 a"),
    MatchRule("a.datitle"),            # Slashdot
    MatchRule(".posttitle"),
    MatchRule(".post_title"),
    MatchRule(".pageTitle"),
    MatchRule("#main h1.title"),
    MatchRule(".title h1"),
    MatchRule(".post h2"),
    MatchRule("h2.title"),
    MatchRule(".entry h2 a"),
    MatchRule(".entry h2"),
    MatchRule('meta[name="title"]', _content),
    MatchRule("h1.headermain"),
    MatchRule("h1.title"),
    MatchRule(".mxb h1"),              # BBC News
    MatchRule("#content h1"),
    MatchRule("#content h2"),
    MatchRule('a[rel="bookmark"]'),
    MatchRule("#main h2"),
    MatchRule("#body h1"),
    MatchRule("#wrapper h1"),
    MatchRule("#page h1"),
    MatchRule(".asset-header h1"),
)

SITENAME_MATCHES: tuple[MatchRule, ...] = (
    MatchRule('meta[property="og:site_name"]', _content),
    MatchRule('meta[name="application-name"]', _content),
)

# ---------------------------------------------------------------------------
# Author
# ---------------------------------------------------------------------------

AUTHOR_MATCHES: tuple[MatchRule, ...] = (
    MatchRule('meta[name="author"]', _content),
    MatchRule('meta[property="article:author"]', _content),
    MatchRule('[itemprop="author"] [itemprop="name"]'),
    MatchRule(".post-author .fn"),
    MatchRule(".wire_author"),
    MatchRule(".cnnByline b"),
    MatchRule(".editorlink"),
    MatchRule(".authors p"),
    MatchRule('a[rel~="author"]'),
    MatchRule(".byline-name"),
    MatchRule(".post_subheader_left a"),
    MatchRule(".byl"),
    MatchRule(".articledata .author a"),
    MatchRule("#owners a"),            # Google Code
    MatchRule(".author a"),
    MatchRule(".author"),
    MatchRule(".auth a"),
    MatchRule(".auth"),
    MatchRule('a[href^="/author/"]'),
    MatchRule(".byline a"),
    MatchRule(".byline"),
    MatchRule(".node-byline"),
    MatchRule(".byline_author"),
    MatchRule(".vcard .fn"),
    MatchRule(".authorname"),
    MatchRule(".entry-meta a"),
    MatchRule("//a[contains(@href, '/profile/')]"),
)

# ---------------------------------------------------------------------------
# Description
# ---------------------------------------------------------------------------

DESCRIPTION_MATCHES: tuple[MatchRule, ...] = (
    MatchRule('meta[name="description"]', _content),
    MatchRule('meta[name="Description"]', _content),
    MatchRule('meta[name="DESCRIPTION"]', _content),
    MatchRule('meta[property="og:description"]', _content),
    MatchRule('meta[name="twitter:description"]', _content),
    MatchRule(".description"),
)

# ---------------------------------------------------------------------------
# Lede
# ---------------------------------------------------------------------------

LEDE_MATCHES: tuple[MatchRule, ...] = (
    MatchRule(".post-text p"),
    MatchRule("#blogpost p"),
    MatchRule(".story-teaser"),
    MatchRule(".article .body p"),
    MatchRule("//div[@class='entrytext']//p[string-length()>40]"),
    MatchRule("section p"),
    MatchRule(".entry .text p"),
    MatchRule(".hentry .content p"),
    MatchRule(".entry-content p"),
    MatchRule("#wikicontent p"),        # Google Code
    MatchRule(".wikistyle p"),          # GitHub
    MatchRule("//td[@class='storybody']/p[string-length()>40]"),
    MatchRule("//div[@class='entry']//p[string-length()>100]"),
    MatchRule(".entry-body p"),
    MatchRule("#story p"),
    MatchRule(".story p"),
    MatchRule("//div[@id='content']//p[string-length()>100]"),
    MatchRule("//div[@id='article']//p[string-length()>100]"),
    MatchRule(".post-body p"),
    MatchRule("article p"),
    MatchRule("//p[string-length()>150]"),
)

# ---------------------------------------------------------------------------
# Links: feeds, favicon, lead image
# ---------------------------------------------------------------------------

# One grouped selector so RSS and Atom links come back in document order
FEED_MATCHES: tuple[MatchRule, ...] = (
    MatchRule(
        'link[type="application/rss+xml"][rel~="alternate"], '
        'link[type="application/atom+xml"][rel~="alternate"]',
        _href,
    ),
)

FAVICON_MATCHES: tuple[MatchRule, ...] = (
    MatchRule('link[rel="fluid-icon"]', _href),
    MatchRule('link[rel="shortcut icon"]', _href),
    MatchRule('link[rel="icon"]', _href),
    MatchRule('link[rel="apple-touch-icon"]', _href),
)

IMAGE_MATCHES: tuple[MatchRule, ...] = (
    MatchRule('meta[property="og:image"]', _content),
    MatchRule('meta[property="og:image:url"]', _content),
    MatchRule('meta[name="twitter:image"]', _content),
)

# ---------------------------------------------------------------------------
# Tags: the first selector that finds anything wins
# ---------------------------------------------------------------------------

TAG_SELECTORS: tuple[str, ...] = (
    ".watch-info-tag-list a",   # YouTube
    ".entry .tags a",           # LiveJournal
    'a[rel~="tag"]',            # WordPress and many others
    "a.tag",                    # Tumblr
    ".tags a",
    ".labels a",
    ".categories a",
    ".topics a",
)
