#!/usr/bin/env python3
"""
Asset ruleset: the static noise tables used by normalization, tagging and grouping.

The tables are loaded from ``asset-dictionary.json`` and compiled once into an
immutable ``AssetRuleset``. Every pipeline component takes a ruleset in its
constructor, so tests can build one directly with their own tables.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Pattern, Sequence, Tuple, Union

from .dictionary_loader import DEFAULT_DICTIONARY, DictionaryLoader
from .errors import RulesetError

# Separator class shared by normalization and tagging
SEPARATORS = r"\s._()\-"

# Bounded by a separator or the string edge, without consuming it
_BOUND_LEFT = rf"(?<![^{SEPARATORS}])"
_BOUND_RIGHT = rf"(?![^{SEPARATORS}])"

_K_RESOLUTION = r"(?:[1-9]|[12][0-9]|3[0-2])k"
_PIXEL_PAIR = r"\d{3,5}x\d{3,5}"
_VIDEO_HEIGHT = r"(?:720|1080|1440|2160|4320)p"
_POWER_OF_TWO = r"(?:512|1024|2048|4096|8192|16384|32768)"

RESOLUTION_TOKEN_RE = re.compile(
    _BOUND_LEFT
    + f"(?:{_K_RESOLUTION}|{_PIXEL_PAIR}|{_VIDEO_HEIGHT}|{_POWER_OF_TWO})"
    + _BOUND_RIGHT,
    re.IGNORECASE,
)
VERSION_TOKEN_RE = re.compile(_BOUND_LEFT + r"v\d{1,4}" + _BOUND_RIGHT, re.IGNORECASE)
SEPARATOR_RUN_RE = re.compile(rf"[{SEPARATORS}]+")

TAG_SPLIT_RE = re.compile(r"[\s._()\-\[\],]+")
TAG_VERSION_RE = re.compile(r"^v\d{1,4}$", re.IGNORECASE)
TAG_RESOLUTION_RE = re.compile(
    f"^(?:{_K_RESOLUTION}|{_PIXEL_PAIR}|{_VIDEO_HEIGHT})$", re.IGNORECASE
)

_LIST_SECTIONS = (
    "preview_words",
    "useless_substrings",
    "channel_words",
    "tag_stopwords",
    "web_image_extensions",
    "image_fallback_extensions",
    "primary_priority",
    "non_displayable_extensions",
    "ignore_files",
)


def _alternation(words: Sequence[str]) -> str:
    # Longest first so "thumbnail" wins over "thumb"
    ordered = sorted({w.lower() for w in words if w}, key=lambda w: (-len(w), w))
    return "|".join(re.escape(w) for w in ordered)


def _word_pattern(words: Sequence[str], bounded: bool) -> Optional[Pattern[str]]:
    alternation = _alternation(words)
    if not alternation:
        return None
    body = f"(?:{alternation})"
    if bounded:
        body = _BOUND_LEFT + body + _BOUND_RIGHT
    return re.compile(body, re.IGNORECASE)


def _extensions(values: Sequence[str]) -> Tuple[str, ...]:
    return tuple(v.lower() for v in values)


@dataclass(frozen=True)
class AssetRuleset:
    """Immutable lookup tables for one asset dictionary."""

    preview_words: Tuple[str, ...] = ()
    useless_substrings: Tuple[str, ...] = ()
    channel_words: Tuple[str, ...] = ()
    tag_stopwords: FrozenSet[str] = frozenset()
    web_image_extensions: FrozenSet[str] = frozenset()
    image_fallback_extensions: FrozenSet[str] = frozenset()
    primary_priority: Tuple[str, ...] = ()
    non_displayable_extensions: FrozenSet[str] = frozenset()
    ignore_files: FrozenSet[str] = frozenset()
    extra_mime_types: Mapping[str, str] = field(default_factory=dict)

    # Token patterns; the defaults cover the usual resolution and version forms
    resolution_re: Pattern[str] = field(default=RESOLUTION_TOKEN_RE, repr=False)
    version_re: Pattern[str] = field(default=VERSION_TOKEN_RE, repr=False)
    separator_run_re: Pattern[str] = field(default=SEPARATOR_RUN_RE, repr=False)
    tag_split_re: Pattern[str] = field(default=TAG_SPLIT_RE, repr=False)
    tag_version_re: Pattern[str] = field(default=TAG_VERSION_RE, repr=False)
    tag_resolution_re: Pattern[str] = field(default=TAG_RESOLUTION_RE, repr=False)

    # Compiled from the tables above in __post_init__
    preview_word_re: Optional[Pattern[str]] = field(init=False, repr=False, compare=False)
    useless_re: Optional[Pattern[str]] = field(init=False, repr=False, compare=False)
    channel_word_re: Optional[Pattern[str]] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "preview_word_re", _word_pattern(self.preview_words, bounded=False))
        object.__setattr__(self, "useless_re", _word_pattern(self.useless_substrings, bounded=False))
        object.__setattr__(self, "channel_word_re", _word_pattern(self.channel_words, bounded=True))

    def is_preview_name(self, stem: str) -> bool:
        """True when the stem contains a preview/thumbnail marker word."""
        return bool(self.preview_word_re and self.preview_word_re.search(stem))

    def is_ignored(self, filename: str) -> bool:
        """True for OS metadata files that never form assets."""
        return filename.lower() in self.ignore_files

    @classmethod
    def from_dictionary(cls, data: Dict[str, Any]) -> "AssetRuleset":
        """
        Build a ruleset from parsed dictionary JSON.

        Raises:
            RulesetError: if a section has the wrong shape
        """
        if not isinstance(data, dict):
            raise RulesetError("Asset dictionary must be a JSON object")

        sections: Dict[str, Tuple[str, ...]] = {}
        for name in _LIST_SECTIONS:
            value = data.get(name, [])
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise RulesetError(f"Section '{name}' must be a list of strings")
            sections[name] = tuple(value)

        mime_types = data.get("extra_mime_types", {})
        if not isinstance(mime_types, dict):
            raise RulesetError("Section 'extra_mime_types' must be an object")

        return cls(
            preview_words=tuple(w.lower() for w in sections["preview_words"]),
            useless_substrings=tuple(w.lower() for w in sections["useless_substrings"]),
            channel_words=tuple(w.lower() for w in sections["channel_words"]),
            tag_stopwords=frozenset(w.lower() for w in sections["tag_stopwords"]),
            web_image_extensions=frozenset(_extensions(sections["web_image_extensions"])),
            image_fallback_extensions=frozenset(_extensions(sections["image_fallback_extensions"])),
            primary_priority=_extensions(sections["primary_priority"]),
            non_displayable_extensions=frozenset(_extensions(sections["non_displayable_extensions"])),
            ignore_files=frozenset(n.lower() for n in sections["ignore_files"]),
            extra_mime_types={str(k).lower(): str(v) for k, v in mime_types.items()},
        )


def load_ruleset(dictionary: Union[str, Path] = DEFAULT_DICTIONARY) -> AssetRuleset:
    """
    Load and compile the ruleset from a dictionary file.

    Args:
        dictionary: Dictionary name inside the package, or a path to one

    Raises:
        RulesetError: if the dictionary cannot be read or is malformed
    """
    data = DictionaryLoader.load_dictionary(dictionary)
    if data is None:
        raise RulesetError(f"Asset dictionary not found or unreadable: {dictionary}")
    return AssetRuleset.from_dictionary(data)
