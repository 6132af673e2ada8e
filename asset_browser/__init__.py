"""
Asset browser package.

This package contains the per-directory asset pipeline and its surfaces:
- ruleset: static noise tables loaded from the asset dictionary
- normalizer: filename stem -> grouping key
- tag_extractor: filename -> searchable tags
- grouper: file records -> asset groups with primary, thumbnail and kind
- directory_lister: one directory -> sorted listing with tag counts
- listing_filter: name/tag filtering within a listing
- server / client: HTTP listing query and raw file retrieval
- excel_writer: listing reports
"""

from .errors import (
    AssetBrowserError,
    ConfigError,
    ListingError,
    NotFoundError,
    PathTraversalError,
    RulesetError,
)
from .ruleset import AssetRuleset, load_ruleset
from .normalizer import FilenameNormalizer
from .tag_extractor import TagExtractor
from .media_types import AssetKind, MediaTypes
from .file_record import FileRecord, FileRecordBuilder
from .grouper import AssetGroup, AssetGrouper
from .directory_lister import DirectoryItem, DirectoryLister, DirectoryListing, TagCount
from .listing_filter import filter_listing
from .path_guard import safe_join
from .config import BrowserConfig

__all__ = [
    'AssetBrowserError',
    'ConfigError',
    'ListingError',
    'NotFoundError',
    'PathTraversalError',
    'RulesetError',
    'AssetRuleset',
    'load_ruleset',
    'FilenameNormalizer',
    'TagExtractor',
    'AssetKind',
    'MediaTypes',
    'FileRecord',
    'FileRecordBuilder',
    'AssetGroup',
    'AssetGrouper',
    'DirectoryItem',
    'DirectoryLister',
    'DirectoryListing',
    'TagCount',
    'filter_listing',
    'safe_join',
    'BrowserConfig',
]
