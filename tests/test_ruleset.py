#!/usr/bin/env python3
"""
Tests for building rulesets from dictionaries.
"""

import json
import re

import pytest

from asset_browser import AssetRuleset, FilenameNormalizer, RulesetError, TagExtractor, load_ruleset
from asset_browser.dictionary_loader import DictionaryLoader


def test_shipped_dictionary_loads():
    ruleset = load_ruleset()
    assert ruleset.primary_priority == (".exr", ".hdr")
    assert ".jpg" in ruleset.web_image_extensions
    assert "preview" in ruleset.tag_stopwords


def test_ignore_files_case_insensitive():
    ruleset = load_ruleset()
    assert ruleset.is_ignored("thumbs.DB")
    assert ruleset.is_ignored(".DS_Store")
    assert not ruleset.is_ignored("thumbs.jpg")


def test_preview_marker_detection():
    ruleset = load_ruleset()
    assert ruleset.is_preview_name("Rock_Thumbnail")
    assert ruleset.is_preview_name("rockpreview")
    assert not ruleset.is_preview_name("rock")


def test_injected_ruleset_changes_behaviour():
    ruleset = AssetRuleset.from_dictionary({
        "preview_words": ["mini"],
        "tag_stopwords": ["mini", "wood"],
    })
    assert FilenameNormalizer(ruleset).normalize("wood_mini_albedo") == "woodalbedo"
    assert TagExtractor(ruleset).extract("wood_mini_albedo.jpg") == ("albedo",)


def test_empty_ruleset_still_strips_resolution_and_version():
    ruleset = AssetRuleset()
    assert FilenameNormalizer(ruleset).normalize("wood_preview_4k_v2") == "woodpreview"


def test_injected_token_patterns():
    ruleset = AssetRuleset(
        resolution_re=re.compile(r"(?<![^\s._()\-])hd(?![^\s._()\-])"),
        tag_resolution_re=re.compile(r"^hd$"),
    )
    normalizer = FilenameNormalizer(ruleset)
    assert normalizer.normalize("wood_hd") == "wood"
    assert normalizer.normalize("wood_4k") == "wood4k"
    assert TagExtractor(ruleset).extract("wood_4k_hd.jpg") == ("wood", "hd")


@pytest.mark.parametrize("data", [
    [],
    {"preview_words": "preview"},
    {"tag_stopwords": [1, 2]},
    {"extra_mime_types": ["image/x-exr"]},
])
def test_malformed_dictionary_rejected(data):
    with pytest.raises(RulesetError):
        AssetRuleset.from_dictionary(data)


def test_load_ruleset_from_path(tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"primary_priority": [".TIF"]}), encoding="utf-8")
    try:
        ruleset = load_ruleset(path)
    finally:
        DictionaryLoader.clear_cache(str(path))
    assert ruleset.primary_priority == (".tif",)


def test_missing_dictionary_raises(tmp_path):
    with pytest.raises(RulesetError):
        load_ruleset(tmp_path / "missing.json")
