"""CLI entry point: python -m pageattrs FILE [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from pageattrs.config import configure, configure_logging
from pageattrs.errors import DocumentError
from pageattrs.page import Page

logger = logging.getLogger(__name__)

# Attributes that take a limit argument and are called rather than read
_CALLABLE_ATTRS = {"sentences", "images", "videos", "keywords"}

ATTRIBUTE_NAMES = (
    "title", "titles", "og_title", "html_title", "sitename",
    "published_at", "author", "authors",
    "description", "descriptions", "lede", "ledes", "sentences",
    "body", "html_body", "images", "videos",
    "tags", "keywords", "feed", "feeds", "favicon", "image",
    "youtube", "vine", "twitter", "instagram", "livestream", "ustream", "soundcloud",
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pageattrs",
        description=(
            "Extract metadata (title, author, date, lede, keywords, feeds...)\n"
            "from an already-downloaded HTML page and print it as JSON."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", metavar="FILE",
                        help="HTML file to read, or '-' for stdin")
    parser.add_argument("--url", default=None, metavar="URL",
                        help="URL the page was retrieved from (resolves relative links)")
    parser.add_argument("--attr", action="append", default=None, metavar="NAME",
                        choices=ATTRIBUTE_NAMES,
                        help="Only print this attribute (repeatable; default: everything)")
    parser.add_argument("--keywords", type=int, default=20, metavar="N",
                        help="Maximum keywords to report (default: 20)")
    parser.add_argument("--config", default=None, metavar="PATH",
                        help="YAML settings file")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: from settings, WARNING)")
    return parser


def _read_markup(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _select(page: Page, names: list[str], keyword_limit: int) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name in names:
        if name == "keywords":
            value = page.keywords(keyword_limit)
        elif name in _CALLABLE_ATTRS:
            value = getattr(page, name)()
        else:
            value = getattr(page, name)
        out[name] = _jsonable(value)
    return out


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = configure(args.config, log_level=args.log_level)
    except (OSError, ValidationError, ValueError, yaml.YAMLError) as exc:
        print(f"ERROR: Could not load settings: {exc}", file=sys.stderr)
        return 1
    configure_logging(settings)

    try:
        markup = _read_markup(args.file)
    except OSError as exc:
        print(f"ERROR: Could not read {args.file}: {exc}", file=sys.stderr)
        return 2

    try:
        page = Page(markup, url=args.url, settings=settings)
        if args.attr:
            result = _select(page, args.attr, args.keywords)
        else:
            result = page.to_dict(keyword_limit=args.keywords)
    except DocumentError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    json.dump(result, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
