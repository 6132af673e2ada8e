#!/usr/bin/env python3
"""
File records: one read-only description per file in a listed directory.

Records carry everything the grouper and the listing need (extension, size,
mtime, mime type, image and preview flags, tags, public URL), computed once
from a directory entry.
"""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Tuple
from urllib.parse import quote

from .media_types import MediaTypes
from .ruleset import AssetRuleset
from .tag_extractor import TagExtractor

FILES_URL_PREFIX = "/files/"

# Kept literal in /files/ URLs; ";", "?" and "#" must always be escaped
_URL_SAFE = "/,:@&=+$!*'()~"


def join_rel(rel_dir: str, name: str) -> str:
    """Join a listing-relative directory and a child name with forward slashes."""
    rel_dir = rel_dir.replace("\\", "/").strip("/")
    return f"{rel_dir}/{name}" if rel_dir else name


def file_url(rel_path: str) -> str:
    """Public URL of a raw file under the root."""
    return FILES_URL_PREFIX + quote(rel_path, safe=_URL_SAFE)


def isoformat_mtime(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class FileRecord:
    """A single file in a listed directory."""

    name: str
    ext: str
    size: int
    mtime: datetime
    mimetype: str
    is_image: bool
    is_preview: bool
    tags: Tuple[str, ...]
    url: str

    @property
    def stem(self) -> str:
        return self.name[: len(self.name) - len(self.ext)] if self.ext else self.name

    def to_dict(self) -> Dict[str, Any]:
        """Variant JSON shape used by the listing API."""
        return {
            "name": self.name,
            "url": self.url,
            "ext": self.ext,
            "size": self.size,
            "mtime": isoformat_mtime(self.mtime),
            "mimetype": self.mimetype,
            "isImage": self.is_image,
            "isPreviewLike": self.is_preview,
            "tags": list(self.tags),
        }


class FileRecordBuilder:
    """Builds FileRecords; the only place per-file flags and tags are computed."""

    def __init__(self, ruleset: AssetRuleset):
        self.ruleset = ruleset
        self.media_types = MediaTypes(ruleset)
        self.tag_extractor = TagExtractor(ruleset)

    def build(self, name: str, stat_result: os.stat_result, rel_dir: str = "") -> FileRecord:
        """
        Build a record for one file.

        Args:
            name: Filename (no directory part)
            stat_result: ``os.stat`` result for the file
            rel_dir: Listing-relative directory, used for the public URL
        """
        stem, ext = os.path.splitext(name)
        ext = ext.lower()
        mimetype = self.media_types.guess(name, ext)
        return FileRecord(
            name=name,
            ext=ext,
            size=stat_result.st_size,
            mtime=datetime.fromtimestamp(stat_result.st_mtime, tz=timezone.utc),
            mimetype=mimetype,
            is_image=self.media_types.is_image(mimetype, ext),
            is_preview=self.ruleset.is_preview_name(stem),
            tags=self.tag_extractor.extract(name),
            url=file_url(join_rel(rel_dir, name)),
        )
