#!/usr/bin/env python3
"""
Media type lookup and coarse kind classification.

Mime types come from the platform table plus the ruleset's overrides for
formats it does not know (EXR, HDR, DDS...). The coarse kind is a total
mapping from mime type, with the HDR override applied as a separate step.
"""

import mimetypes
from enum import Enum
from typing import Optional

from .ruleset import AssetRuleset

DEFAULT_MIMETYPE = "application/octet-stream"


class AssetKind(str, Enum):
    """Broad display category of an asset group."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    PDF = "pdf"
    TEXT = "text"
    OTHER = "other"


class MediaTypes:
    """Mime lookups bound to one ruleset."""

    def __init__(self, ruleset: AssetRuleset):
        self.ruleset = ruleset
        # Private table; never touch the global mimetypes registry
        self._table = mimetypes.MimeTypes()

    def guess(self, filename: str, ext: Optional[str] = None) -> str:
        """Return the mime type for a filename, or ``application/octet-stream``."""
        ext = (ext if ext is not None else _suffix(filename)).lower()
        override = self.ruleset.extra_mime_types.get(ext)
        if override:
            return override
        guessed, _encoding = self._table.guess_type(filename, strict=False)
        return guessed or DEFAULT_MIMETYPE

    def is_image(self, mimetype: str, ext: str) -> bool:
        """Image mime types, plus extensions the ruleset treats as images anyway."""
        return mimetype.startswith("image/") or ext in self.ruleset.image_fallback_extensions

    def kind_for(self, mimetype: Optional[str], ext: str) -> AssetKind:
        """Classify, then force OTHER for raw HDR formats browsers cannot show."""
        kind = classify_mimetype(mimetype)
        if ext in self.ruleset.non_displayable_extensions:
            return AssetKind.OTHER
        return kind


def classify_mimetype(mimetype: Optional[str]) -> AssetKind:
    if not mimetype:
        return AssetKind.OTHER
    if mimetype.startswith("image/"):
        return AssetKind.IMAGE
    if mimetype.startswith("video/"):
        return AssetKind.VIDEO
    if mimetype.startswith("audio/"):
        return AssetKind.AUDIO
    if mimetype == "application/pdf":
        return AssetKind.PDF
    if mimetype.startswith("text/"):
        return AssetKind.TEXT
    return AssetKind.OTHER


def _suffix(filename: str) -> str:
    dot = filename.rfind(".")
    # Leading-dot names (".DS_Store") have no extension
    return filename[dot:] if dot > 0 else ""
