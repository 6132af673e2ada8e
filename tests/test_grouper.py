#!/usr/bin/env python3
"""
Tests for grouping file records into assets and picking primary/thumbnail/kind.
"""

import os
from datetime import datetime, timezone

import pytest

from asset_browser import AssetGrouper, AssetKind, FileRecord, FileRecordBuilder, load_ruleset


@pytest.fixture(scope="module")
def ruleset():
    return load_ruleset()


@pytest.fixture
def grouper(ruleset):
    return AssetGrouper(ruleset)


@pytest.fixture
def records(ruleset):
    """Build records for the given names, in the given order."""
    builder = FileRecordBuilder(ruleset)

    def build(*names):
        return [
            builder.build(name, os.stat_result((0o100644, 0, 0, 1, 0, 0, 100 + idx, 0, 1_700_000_000, 0)))
            for idx, name in enumerate(names)
        ]

    return build


def _record(name, tags):
    return FileRecord(
        name=name, ext=os.path.splitext(name)[1], size=1,
        mtime=datetime(2024, 1, 1, tzinfo=timezone.utc), mimetype="image/jpeg",
        is_image=True, is_preview=False, tags=tags, url=f"/files/{name}",
    )


class TestPrimaryAndThumbnail:

    def test_exr_primary_with_preview_thumbnail(self, grouper, records):
        groups = grouper.group(records("rock.exr", "rock_preview.jpg", "rock_thumb.png"))

        assert len(groups) == 1
        group = groups[0]
        assert group.key == "rock"
        assert group.primary.name == "rock.exr"
        assert group.thumbnail.name == "rock_preview.jpg"
        assert group.kind is AssetKind.OTHER

    def test_thumbnail_prefers_preview_marked_over_earlier_image(self, grouper, records):
        group = grouper.group(records("rock_albedo.png", "rock.exr", "rock_preview.jpg"))[0]
        assert group.thumbnail.name == "rock_preview.jpg"

    def test_thumbnail_tie_goes_to_first_preview(self, grouper, records):
        group = grouper.group(records("rock.exr", "rock_thumb.png", "rock_preview.jpg"))[0]
        assert group.thumbnail.name == "rock_thumb.png"

    def test_priority_order_exr_before_hdr(self, grouper, records):
        group = grouper.group(records("sky.hdr", "sky.exr"))[0]
        assert group.primary.name == "sky.exr"

    def test_primary_falls_back_to_first_variant(self, grouper, records):
        group = grouper.group(records("wood.png", "wood_2k.jpg"))[0]
        assert group.primary.name == "wood.png"
        assert group.thumbnail.name == "wood.png"
        assert group.kind is AssetKind.IMAGE

    def test_no_web_image_means_no_thumbnail(self, grouper, records):
        group = grouper.group(records("photo.tif"))[0]
        assert group.primary.is_image
        assert group.thumbnail is None
        assert group.kind is AssetKind.IMAGE

    def test_exr_alone_has_no_thumbnail(self, grouper, records):
        group = grouper.group(records("studio.exr"))[0]
        assert group.thumbnail is None


class TestKind:

    @pytest.mark.parametrize("name, kind", [
        ("manual.pdf", AssetKind.PDF),
        ("clip.mp4", AssetKind.VIDEO),
        ("notes.txt", AssetKind.TEXT),
        ("sound.wav", AssetKind.AUDIO),
        ("mesh.fbx", AssetKind.OTHER),
        ("wall.jpg", AssetKind.IMAGE),
        ("sky.hdr", AssetKind.OTHER),
        ("sky.exr", AssetKind.OTHER),
    ])
    def test_kind_from_primary(self, grouper, records, name, kind):
        assert grouper.group(records(name))[0].kind is kind


class TestPartition:

    def test_every_record_in_exactly_one_group(self, grouper, records):
        recs = records("wood_albedo.jpg", "stone.png", "wood_4k.exr", "stone_preview.jpg", "moss.tif")
        groups = grouper.group(recs)

        grouped = [v for g in groups for v in g.variants]
        assert sorted(r.name for r in grouped) == sorted(r.name for r in recs)
        assert len(grouped) == len(recs)

    def test_groups_in_first_seen_key_order(self, grouper, records):
        groups = grouper.group(records("wood_albedo.jpg", "stone.png", "wood_4k.exr"))
        assert [g.key for g in groups] == ["wood", "stone"]
        assert [v.name for v in groups[0].variants] == ["wood_albedo.jpg", "wood_4k.exr"]

    def test_all_noise_stems_share_empty_key(self, grouper, records):
        groups = grouper.group(records("4k.jpg", "preview.png"))
        assert len(groups) == 1
        assert groups[0].key == ""
        assert len(groups[0].variants) == 2

    def test_empty_input(self, grouper):
        assert grouper.group([]) == ()

    def test_union_tags_case_insensitive(self, grouper):
        group = grouper.group([_record("wood.jpg", ("Wood",)), _record("wood_2k.jpg", ("wood", "2k"))])[0]
        assert group.tags == ("Wood", "2k")
