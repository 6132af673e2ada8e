#!/usr/bin/env python3
"""
Tests for narrowing a listing by name and tags.
"""

import pytest

from asset_browser import DirectoryLister, filter_listing, load_ruleset


@pytest.fixture
def listing(tmp_path):
    for name in ["oak_floor.jpg", "oak_table.jpg", "pine_floor.jpg", "Oak_Door.png"]:
        (tmp_path / name).write_bytes(b"x")
    (tmp_path / "oak_archive").mkdir()
    return DirectoryLister(tmp_path, load_ruleset()).list("")


def test_no_filters_keeps_everything(listing):
    filtered = filter_listing(listing)
    assert filtered.items == listing.items
    assert filtered.tags == listing.tags


def test_query_is_case_insensitive_substring(listing):
    filtered = filter_listing(listing, query="  OAK ")
    assert [i.name for i in filtered.items] == ["oak_archive", "Oak_Door.png", "oak_floor.jpg", "oak_table.jpg"]


def test_all_active_tags_required(listing):
    filtered = filter_listing(listing, tags=["oak", "FLOOR"])
    assert [i.name for i in filtered.items] == ["oak_floor.jpg"]


def test_tags_recounted_over_kept_items(listing):
    filtered = filter_listing(listing, tags=["floor"])
    assert [(t.name, t.count) for t in filtered.tags] == [("floor", 2), ("oak", 1), ("pine", 1)]


def test_unmatched_active_tag_listed_with_zero(listing):
    filtered = filter_listing(listing, tags=["walnut"])
    assert filtered.items == ()
    assert [(t.name, t.count) for t in filtered.tags] == [("walnut", 0)]


def test_alpha_tag_sort(listing):
    filtered = filter_listing(listing, tag_sort="alpha")
    names = [t.name for t in filtered.tags]
    assert names == sorted(names)


def test_unknown_tag_sort_rejected(listing):
    with pytest.raises(ValueError):
        filter_listing(listing, tag_sort="random")
