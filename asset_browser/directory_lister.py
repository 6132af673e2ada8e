#!/usr/bin/env python3
"""
Directory lister: one directory in, one browsable listing out.

Runs the whole per-directory pipeline: enumerate immediate children, build
file records, group them into assets, sort subdirectories ahead of assets,
and count tags once per asset group. Nothing is cached; every call rescans.
"""

import logging
import os
import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .errors import ListingError
from .file_record import FileRecord, FileRecordBuilder, isoformat_mtime, join_rel
from .grouper import AssetGroup, AssetGrouper
from .path_guard import normalize_rel, safe_join
from .ruleset import AssetRuleset
from .tag_extractor import fold_token

logger = logging.getLogger(__name__)

_DIGIT_RUN_RE = re.compile(r"(\d+)")


def natural_sort_key(name: str) -> Tuple[Any, ...]:
    """
    Numeric-aware, case- and accent-insensitive sort key.

    >>> sorted(["folder10", "Folder2"], key=natural_sort_key)
    ['Folder2', 'folder10']
    """
    parts = _DIGIT_RUN_RE.split(fold_token(name))
    # re.split with a group alternates text/digits, so positions stay comparable
    return tuple(int(p) if i % 2 else p for i, p in enumerate(parts))


@dataclass(frozen=True)
class DirectoryItem:
    """A subdirectory or an asset group, with the fields both share."""

    name: str
    path: str
    is_dir: bool
    mtime: Optional[datetime]
    tags: Tuple[str, ...] = ()
    group: Optional[AssetGroup] = None

    @classmethod
    def for_directory(cls, name: str, path: str, mtime: datetime) -> "DirectoryItem":
        return cls(name=name, path=path, is_dir=True, mtime=mtime)

    @classmethod
    def for_group(cls, group: AssetGroup, rel_dir: str) -> "DirectoryItem":
        primary = group.primary
        return cls(
            name=primary.name,
            path=join_rel(rel_dir, primary.name),
            is_dir=False,
            mtime=primary.mtime,
            tags=group.tags,
            group=group,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Item JSON shape used by the listing API."""
        mtime = isoformat_mtime(self.mtime) if self.mtime else None
        if self.group is None:
            return {
                "name": self.name,
                "path": self.path,
                "isDir": True,
                "size": None,
                "mtime": mtime,
                "url": None,
                "thumbnail": None,
                "mimetype": None,
                "kind": "directory",
                "files": [],
                "normalizeBase": None,
                "tags": [],
            }
        group = self.group
        return {
            "name": self.name,
            "path": self.path,
            "isDir": False,
            "size": group.primary.size,
            "mtime": mtime,
            "url": group.primary.url,
            "thumbnail": group.thumbnail.url if group.thumbnail else None,
            "mimetype": group.primary.mimetype,
            "kind": group.kind.value,
            "files": [variant.to_dict() for variant in group.variants],
            "normalizeBase": group.key,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class TagCount:
    name: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self.count}


@dataclass(frozen=True)
class DirectoryListing:
    """Result of listing one directory."""

    cwd: str
    items: Tuple[DirectoryItem, ...] = ()
    tags: Tuple[TagCount, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cwd": self.cwd,
            "items": [item.to_dict() for item in self.items],
            "tags": [tag.to_dict() for tag in self.tags],
        }


def sort_items(items: Iterable[DirectoryItem]) -> Tuple[DirectoryItem, ...]:
    """Subdirectories first, then assets, each by natural name order."""
    return tuple(sorted(items, key=lambda item: (not item.is_dir, natural_sort_key(item.name))))


def count_tags(items: Iterable[DirectoryItem]) -> Tuple[TagCount, ...]:
    """
    Count each lowercase tag once per asset item.

    Returns:
        Counts sorted by occurrence descending, then name
    """
    counter: Counter = Counter()
    for item in items:
        if item.is_dir:
            continue
        counter.update({tag.lower() for tag in item.tags})
    return tuple(
        TagCount(name, count)
        for name, count in sorted(counter.items(), key=lambda pair: (-pair[1], pair[0]))
    )


@dataclass
class DirectoryLister:
    """
    Lists directories under a fixed root.

    Attributes:
        root: Absolute or relative path of the asset root
        ruleset: Lookup tables for normalization, tagging and grouping
        stable_order: Sort records by name before grouping so fallback
            primary/thumbnail picks do not depend on enumeration order
    """

    root: Union[str, os.PathLike]
    ruleset: AssetRuleset
    stable_order: bool = False
    record_builder: FileRecordBuilder = field(init=False, repr=False)
    grouper: AssetGrouper = field(init=False, repr=False)

    def __post_init__(self):
        self.record_builder = FileRecordBuilder(self.ruleset)
        self.grouper = AssetGrouper(self.ruleset)

    def list(self, rel_path: Optional[str] = "") -> DirectoryListing:
        """
        List one directory.

        Args:
            rel_path: Directory relative to the root; empty means the root

        Returns:
            The complete listing

        Raises:
            PathTraversalError: if ``rel_path`` escapes the root
            ListingError: if the directory is missing, not a directory, or unreadable
        """
        dir_abs = safe_join(self.root, rel_path)
        rel_dir = normalize_rel(rel_path)

        try:
            subdirs, records = self._scan(dir_abs, rel_dir)
        except FileNotFoundError:
            raise ListingError(rel_dir, "not found") from None
        except NotADirectoryError:
            raise ListingError(rel_dir, "not a directory") from None
        except PermissionError:
            raise ListingError(rel_dir, "permission denied") from None
        except OSError as exc:
            raise ListingError(rel_dir, exc.strerror or str(exc)) from exc

        if self.stable_order:
            records.sort(key=lambda r: r.name)

        groups = self.grouper.group(records)
        items = sort_items([*subdirs, *(DirectoryItem.for_group(g, rel_dir) for g in groups)])
        listing = DirectoryListing(cwd=rel_dir, items=items, tags=count_tags(items))
        logger.debug(
            "Listed %r: %d dirs, %d files in %d assets",
            rel_dir, len(subdirs), len(records), len(groups),
        )
        return listing

    def _scan(self, dir_abs: str, rel_dir: str) -> Tuple[List[DirectoryItem], List[FileRecord]]:
        subdirs: List[DirectoryItem] = []
        records: List[FileRecord] = []
        with os.scandir(dir_abs) as entries:
            for entry in entries:
                if entry.is_dir():
                    mtime = datetime.fromtimestamp(entry.stat().st_mtime, tz=timezone.utc)
                    subdirs.append(DirectoryItem.for_directory(entry.name, join_rel(rel_dir, entry.name), mtime))
                    continue
                if self.ruleset.is_ignored(entry.name):
                    continue
                try:
                    stat_result = entry.stat()
                except FileNotFoundError:
                    if entry.is_symlink():
                        logger.warning("Skipping dangling symlink %s", join_rel(rel_dir, entry.name))
                    else:
                        logger.warning("Skipping %s: removed while listing", join_rel(rel_dir, entry.name))
                    continue
                records.append(self.record_builder.build(entry.name, stat_result, rel_dir))
        return subdirs, records
