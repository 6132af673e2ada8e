#!/usr/bin/env python3
"""
Asset grouper: partitions one directory's file records into logical assets.

Records are grouped by normalized stem. For each group the grouper picks the
primary file (raw/HDR formats first), a web-displayable thumbnail (preview
files first) and a coarse kind, and unions the variants' tags.

Fallbacks use the first variant in input order, so callers must pass records
in directory-enumeration order (or sort them first) to get the same result
across runs.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .file_record import FileRecord
from .media_types import AssetKind, MediaTypes
from .normalizer import FilenameNormalizer
from .ruleset import AssetRuleset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetGroup:
    """A logical asset made of one or more variant files."""

    key: str
    variants: Tuple[FileRecord, ...]
    primary: FileRecord
    thumbnail: Optional[FileRecord]
    kind: AssetKind
    tags: Tuple[str, ...]


def union_tags(tag_sets: Iterable[Sequence[str]]) -> Tuple[str, ...]:
    """Merge tag sequences, dropping case-insensitive duplicates, first seen wins."""
    seen = set()
    merged: List[str] = []
    for tags in tag_sets:
        for tag in tags:
            folded = tag.casefold()
            if folded not in seen:
                seen.add(folded)
                merged.append(tag)
    return tuple(merged)


class AssetGrouper:
    """Groups file records by normalized key."""

    def __init__(self, ruleset: AssetRuleset):
        self.ruleset = ruleset
        self.normalizer = FilenameNormalizer(ruleset)
        self.media_types = MediaTypes(ruleset)

    def group(self, records: Iterable[FileRecord]) -> Tuple[AssetGroup, ...]:
        """
        Group records into assets.

        Args:
            records: File records in enumeration order

        Returns:
            Groups in the order their keys were first seen
        """
        by_key: Dict[str, List[FileRecord]] = {}
        for record in records:
            by_key.setdefault(self.normalizer.normalize(record.stem), []).append(record)

        if "" in by_key:
            logger.debug(
                "Empty grouping key merges %d all-noise file(s): %s",
                len(by_key[""]),
                ", ".join(r.name for r in by_key[""]),
            )

        return tuple(self._build_group(key, variants) for key, variants in by_key.items())

    def _build_group(self, key: str, variants: List[FileRecord]) -> AssetGroup:
        primary = self.select_primary(variants)
        return AssetGroup(
            key=key,
            variants=tuple(variants),
            primary=primary,
            thumbnail=self.select_thumbnail(variants),
            kind=self.media_types.kind_for(primary.mimetype, primary.ext),
            tags=union_tags(v.tags for v in variants),
        )

    def select_primary(self, variants: Sequence[FileRecord]) -> FileRecord:
        """First variant in the highest-priority format, else the first variant."""
        for ext in self.ruleset.primary_priority:
            for variant in variants:
                if variant.ext == ext:
                    return variant
        return variants[0]

    def select_thumbnail(self, variants: Sequence[FileRecord]) -> Optional[FileRecord]:
        """Web-safe preview image, else any web-safe image, else None."""
        web_safe = [
            v for v in variants
            if v.is_image and v.ext in self.ruleset.web_image_extensions
        ]
        for variant in web_safe:
            if variant.is_preview:
                return variant
        return web_safe[0] if web_safe else None
