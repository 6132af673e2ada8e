#!/usr/bin/env python3
"""
Asset browser - group texture/HDRI/image files into browsable assets.

This module serves dual purposes:
1. Library: AssetBrowser facade over the per-directory pipeline
2. CLI: ``asset-browse`` command (serve, list, normalize, tags, report)

Usage as library:
    from assetbrowse import AssetBrowser
    browser = AssetBrowser("/srv/assets")
    listing = browser.list("textures/wood")

Usage as CLI:
    ASSETS_ROOT=/srv/assets asset-browse serve
    asset-browse list textures/wood --root /srv/assets
    asset-browse normalize wood_4k_preview_v2
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Union

from asset_browser import (
    AssetBrowserError,
    AssetRuleset,
    BrowserConfig,
    DirectoryLister,
    DirectoryListing,
    FilenameNormalizer,
    TagExtractor,
    filter_listing,
    load_ruleset,
)
from asset_browser.client import AssetBrowserClient
from asset_browser.dictionary_loader import DEFAULT_DICTIONARY
from asset_browser.excel_writer import write_listing_report
from asset_browser.server import serve

logger = logging.getLogger("assetbrowse")


# ============================================================================
# LIBRARY - AssetBrowser facade
# ============================================================================

class AssetBrowser:
    """Facade over the asset pipeline for one root."""

    def __init__(
        self,
        root: Union[str, Path],
        ruleset: Optional[AssetRuleset] = None,
        stable_order: bool = False,
    ):
        self.ruleset = ruleset or load_ruleset()
        self.normalizer = FilenameNormalizer(self.ruleset)
        self.tag_extractor = TagExtractor(self.ruleset)
        self.lister = DirectoryLister(root, self.ruleset, stable_order=stable_order)

    def normalize(self, stem: str) -> str:
        """Grouping key for a filename stem."""
        return self.normalizer.normalize(stem)

    def tags(self, filename: str) -> List[str]:
        """Tags extracted from a filename."""
        return list(self.tag_extractor.extract(filename))

    def list(
        self,
        rel_path: str = "",
        query: str = "",
        tags: Sequence[str] = (),
        tag_sort: str = "pop",
    ) -> DirectoryListing:
        """
        List a directory, optionally narrowed by name and tags.

        Raises:
            PathTraversalError: if ``rel_path`` escapes the root
            ListingError: if the directory cannot be read
        """
        listing = self.lister.list(rel_path)
        if query or tags or tag_sort != "pop":
            listing = filter_listing(listing, query=query, tags=tags, tag_sort=tag_sort)
        return listing


# ============================================================================
# CLI
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asset-browse",
        description="Group asset files into logical assets with thumbnails and tags",
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    sub = parser.add_subparsers(dest='command', required=True)

    def add_root_options(p: argparse.ArgumentParser) -> None:
        p.add_argument('--root', help='Asset root (default: $ASSETS_ROOT)')
        p.add_argument('--dictionary', help='Alternative asset dictionary JSON')
        p.add_argument('--stable-order', action='store_true', default=None,
                       help='Sort files by name before grouping')

    serve_p = sub.add_parser('serve', help='Run the HTTP API')
    add_root_options(serve_p)
    serve_p.add_argument('--host', help='Bind address (default: $HOST or 127.0.0.1)')
    serve_p.add_argument('--port', type=int, help='Port (default: $PORT or 5174)')

    list_p = sub.add_parser('list', help='Print a directory listing as JSON')
    add_root_options(list_p)
    list_p.add_argument('path', nargs='?', default='', help='Directory relative to the root')
    list_p.add_argument('-q', '--query', default='', help='Keep items whose name contains this')
    list_p.add_argument('-t', '--tag', action='append', default=[], help='Required tag (repeatable)')
    list_p.add_argument('--tag-sort', choices=['pop', 'alpha'], default='pop')
    list_p.add_argument('--server', help='Query a running server instead of the local root')

    report_p = sub.add_parser('report', help='Write an Excel report for a directory')
    add_root_options(report_p)
    report_p.add_argument('path', nargs='?', default='', help='Directory relative to the root')
    report_p.add_argument('-o', '--output', required=True, help='Output .xlsx path')

    norm_p = sub.add_parser('normalize', help='Print grouping keys for filename stems')
    norm_p.add_argument('stems', nargs='+')
    norm_p.add_argument('--dictionary', help='Alternative asset dictionary JSON')

    tags_p = sub.add_parser('tags', help='Print tags extracted from filenames')
    tags_p.add_argument('filenames', nargs='+')
    tags_p.add_argument('--dictionary', help='Alternative asset dictionary JSON')

    return parser


def _config_from_args(args: argparse.Namespace) -> BrowserConfig:
    return BrowserConfig.from_env(
        assets_root=getattr(args, 'root', None),
        host=getattr(args, 'host', None),
        port=getattr(args, 'port', None),
        dictionary=getattr(args, 'dictionary', None),
        stable_order=getattr(args, 'stable_order', None),
    )


def _browser_from_config(config: BrowserConfig) -> AssetBrowser:
    return AssetBrowser(
        config.assets_root,
        ruleset=load_ruleset(config.dictionary),
        stable_order=config.stable_order,
    )


def run(args: argparse.Namespace) -> int:
    if args.command == 'normalize' or args.command == 'tags':
        ruleset = load_ruleset(args.dictionary or DEFAULT_DICTIONARY)
        if args.command == 'normalize':
            normalizer = FilenameNormalizer(ruleset)
            for stem in args.stems:
                print(f"{stem}\t{normalizer.normalize(stem)}")
        else:
            extractor = TagExtractor(ruleset)
            for filename in args.filenames:
                print(f"{filename}\t{', '.join(extractor.extract(filename))}")
        return 0

    if args.command == 'list' and args.server:
        client = AssetBrowserClient(args.server)
        data = client.list_directory(args.path, query=args.query, tags=args.tag, tag_sort=args.tag_sort)
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return 0

    config = _config_from_args(args)

    if args.command == 'serve':
        serve(config)
        return 0

    browser = _browser_from_config(config)
    if args.command == 'list':
        listing = browser.list(args.path, query=args.query, tags=args.tag, tag_sort=args.tag_sort)
        print(json.dumps(listing.to_dict(), indent=2, ensure_ascii=False))
        return 0

    if args.command == 'report':
        output = write_listing_report(args.output, browser.list(args.path))
        logger.info("Wrote Excel report to %s", output)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except AssetBrowserError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == '__main__':
    sys.exit(main())
