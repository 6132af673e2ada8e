#!/usr/bin/env python3
"""
Filename normalizer: reduces a filename stem to an asset grouping key.

Preview markers, known-useless substrings, texture channel words, resolution
tokens and version tokens are stripped, then separators and whitespace are
removed. Two files whose stems normalize to the same key are variants of one
logical asset.
"""

from typing import Optional

from .ruleset import AssetRuleset


class FilenameNormalizer:
    """Computes grouping keys from filename stems."""

    def __init__(self, ruleset: AssetRuleset):
        self.ruleset = ruleset

    def normalize(self, stem: Optional[str]) -> str:
        """
        Normalize a filename stem into a grouping key.

        The strip pass runs until the key stops changing, so normalizing a key
        again always returns it unchanged.

        Args:
            stem: Filename without its extension

        Returns:
            The grouping key; empty when every token was noise

        Example:
            >>> FilenameNormalizer(ruleset).normalize("wood_4k_preview_v2")
            'wood'
        """
        key = (stem or "").lower()
        while True:
            stripped = self._strip_pass(key)
            if stripped == key:
                return key
            key = stripped

    def _strip_pass(self, text: str) -> str:
        rules = self.ruleset
        for pattern in (rules.preview_word_re, rules.useless_re, rules.channel_word_re):
            if pattern is not None:
                text = pattern.sub(" ", text)
        text = rules.resolution_re.sub(" ", text)
        text = rules.version_re.sub(" ", text)
        text = rules.separator_run_re.sub(" ", text).strip()
        return "".join(text.split())
