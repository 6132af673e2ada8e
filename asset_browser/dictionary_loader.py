#!/usr/bin/env python3
"""
Dictionary loader utility for the asset browser's static lookup tables.

Dictionaries live in the package's ``dictionaries`` folder and are plain JSON.
Reads are cached per file name since the tables never change while the
process runs.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

DEFAULT_DICTIONARY = "asset-dictionary.json"

logger = logging.getLogger(__name__)


class DictionaryLoader:
    """Centralized dictionary loader with caching support."""

    # Raw JSON only; compiled rulesets are rebuilt by their callers
    _cache: Dict[str, Any] = {}

    @staticmethod
    def get_dictionary_path(dictionary_name: str = DEFAULT_DICTIONARY) -> Path:
        """
        Get the absolute path to a dictionary file.

        Args:
            dictionary_name: Name of the dictionary file, or an explicit path

        Returns:
            Absolute path to the dictionary file
        """
        candidate = Path(dictionary_name)
        if candidate.is_absolute() or candidate.parent != Path("."):
            return candidate.resolve()
        return Path(__file__).resolve().parent / "dictionaries" / dictionary_name

    @classmethod
    def load_dictionary(
        cls,
        dictionary_name: Union[str, Path] = DEFAULT_DICTIONARY,
        use_cache: bool = True
    ) -> Optional[Any]:
        """
        Load a dictionary from the dictionaries folder.

        Args:
            dictionary_name: Name of the dictionary file to load
            use_cache: Whether to use cached version if available

        Returns:
            Dictionary contents, or None if the file is missing or not valid JSON
        """
        cache_key = str(dictionary_name)
        if use_cache and cache_key in cls._cache:
            return cls._cache[cache_key]

        dictionary_path = cls.get_dictionary_path(cache_key)

        try:
            with open(dictionary_path, 'r', encoding='utf-8') as f:
                dictionary = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError, IOError) as exc:
            logger.warning("Could not load dictionary %s: %s", dictionary_path, exc)
            return None

        if use_cache:
            cls._cache[cache_key] = dictionary
        return dictionary

    @classmethod
    def clear_cache(cls, dictionary_name: Optional[str] = None) -> None:
        """Clear one cached dictionary, or all of them."""
        if dictionary_name:
            cls._cache.pop(dictionary_name, None)
        else:
            cls._cache.clear()
