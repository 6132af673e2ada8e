#!/usr/bin/env python3
"""
Tests for asset dictionary validation.
"""

import json

from tools.validate_dictionaries import DEFAULT_DICTIONARY_PATH, check_asset_dictionary, load_json, main


def _minimal(**extra):
    data = {
        "preview_words": ["preview"],
        "tag_stopwords": ["preview"],
        "web_image_extensions": [".jpg"],
        "primary_priority": [".exr"],
        "ignore_files": ["Thumbs.db"],
    }
    data.update(extra)
    return data


def test_shipped_dictionary_is_valid():
    assert check_asset_dictionary(load_json(DEFAULT_DICTIONARY_PATH)) == []


def test_minimal_dictionary_is_valid():
    assert check_asset_dictionary(_minimal()) == []


def test_schema_errors_reported():
    failures = check_asset_dictionary(_minimal(web_image_extensions=["JPG"], unknown_section=[]))
    assert any("web_image_extensions" in f for f in failures)
    assert any("unknown_section" in f for f in failures)


def test_duplicates_reported():
    failures = check_asset_dictionary(_minimal(preview_words=["preview", "Preview"]))
    assert failures == ["preview_words[1]: duplicate 'Preview' also at index 0"]


def test_web_safe_primary_reported():
    failures = check_asset_dictionary(_minimal(primary_priority=[".jpg"]))
    assert len(failures) == 1
    assert "primary_priority" in failures[0]


def test_uppercase_stopword_reported():
    failures = check_asset_dictionary(_minimal(tag_stopwords=["Preview"]))
    assert failures == ["tag_stopwords[0]: 'Preview' must be lowercase"]


def test_main_exit_codes(tmp_path, capsys):
    good = tmp_path / "good.json"
    good.write_text(json.dumps(_minimal()), encoding="utf-8")
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"preview_words": "preview"}), encoding="utf-8")

    assert main([str(good)]) == 0
    assert main([str(bad)]) == 1
    assert "Dictionary validation failed" in capsys.readouterr().out
