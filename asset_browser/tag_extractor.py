#!/usr/bin/env python3
"""
Tag extractor: turns a filename into an ordered set of searchable tags.

Tokens are split on separators, folded to lowercase base letters, and filtered:
versions and stopwords are dropped, resolution tags are always kept, bare
numbers and tokens shorter than three characters are dropped.
"""

import unicodedata
from pathlib import PurePath
from typing import List, Tuple

from .ruleset import AssetRuleset

MIN_TAG_LENGTH = 3


def fold_token(token: str) -> str:
    """Strip diacritics and lowercase ("Café" -> "cafe")."""
    decomposed = unicodedata.normalize('NFKD', token)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


class TagExtractor:
    """Extracts tags from filenames using a ruleset's stopwords."""

    def __init__(self, ruleset: AssetRuleset):
        self.ruleset = ruleset

    def extract(self, filename: str) -> Tuple[str, ...]:
        """
        Extract tags from a filename.

        Args:
            filename: Filename with or without extension

        Returns:
            Unique tags in first-seen order

        Example:
            >>> TagExtractor(ruleset).extract("Marble_2048x2048_v3.jpg")
            ('marble', '2048x2048')
        """
        stem = PurePath(filename).stem if filename else ""
        tags: List[str] = []
        for raw in self.ruleset.tag_split_re.split(stem):
            token = fold_token(raw)
            if self._keep(token) and token not in tags:
                tags.append(token)
        return tuple(tags)

    def _keep(self, token: str) -> bool:
        if not token:
            return False
        if self.ruleset.tag_version_re.match(token):
            return False
        if token in self.ruleset.tag_stopwords:
            return False
        if self.ruleset.tag_resolution_re.match(token):
            return True
        if token.isdigit():
            return False
        return len(token) >= MIN_TAG_LENGTH
