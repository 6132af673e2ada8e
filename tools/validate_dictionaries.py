#!/usr/bin/env python3
"""Validate asset dictionaries against the JSON Schema and custom rules."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from jsonschema import Draft7Validator

ROOT = Path(__file__).resolve().parent.parent
SCHEMA_PATH = ROOT / "schemas" / "asset-dictionary.schema.json"
DEFAULT_DICTIONARY_PATH = ROOT / "asset_browser" / "dictionaries" / "asset-dictionary.json"

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


def load_json(path: Path):
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def validate_with_schema(data, schema_path: Path, label: str) -> List[str]:
    schema = load_json(schema_path)
    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))

    messages = []
    for error in errors:
        location = " > ".join(str(p) for p in error.absolute_path) or "root"
        messages.append(f"{label}: {location}: {error.message}")
    return messages


def check_duplicates(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    for section in _LIST_SECTIONS:
        seen: Dict[str, int] = {}
        for idx, value in enumerate(data.get(section) or []):
            if not isinstance(value, str):
                continue
            key = value.lower()
            if key in seen:
                errors.append(f"{section}[{idx}]: duplicate '{value}' also at index {seen[key]}")
            else:
                seen[key] = idx
    return errors


def check_extension_sets(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    web_safe = set(data.get("web_image_extensions") or [])
    for ext in data.get("primary_priority") or []:
        if ext in web_safe:
            errors.append(f"primary_priority: '{ext}' is also web-displayable; primaries should be raw formats")
    for ext in data.get("non_displayable_extensions") or []:
        if ext in web_safe:
            errors.append(f"non_displayable_extensions: '{ext}' is listed in web_image_extensions")
    return errors


def check_stopwords(data: Dict[str, Any]) -> List[str]:
    # Tags are folded to lowercase before the stopword lookup
    return [
        f"tag_stopwords[{idx}]: '{word}' must be lowercase"
        for idx, word in enumerate(data.get("tag_stopwords") or [])
        if isinstance(word, str) and word != word.lower()
    ]


def check_asset_dictionary(data: Any, schema_path: Path = SCHEMA_PATH) -> List[str]:
    """Return every schema and custom-rule failure for a parsed dictionary."""
    failures = validate_with_schema(data, schema_path, "asset-dictionary")
    if isinstance(data, dict):
        failures.extend(check_duplicates(data))
        failures.extend(check_extension_sets(data))
        failures.extend(check_stopwords(data))
    return failures


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("dictionary", nargs="?", type=Path, default=DEFAULT_DICTIONARY_PATH,
                        help="Dictionary JSON to validate")
    args = parser.parse_args(argv)

    failures = check_asset_dictionary(load_json(args.dictionary))
    if failures:
        print("Dictionary validation failed:")
        for failure in failures:
            print(f" - {failure}")
        return 1

    print("All dictionaries validated successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
