#!/usr/bin/env python3
"""
Tests for the Excel listing report.
"""

from __future__ import annotations

from openpyxl import load_workbook

from asset_browser import DirectoryLister, load_ruleset
from asset_browser.excel_writer import listing_sheets, write_listing_report


def _listing(tmp_path):
    root = tmp_path / "assets"
    root.mkdir()
    for name in ["rock.exr", "rock_preview.jpg", "mesh.fbx"]:
        (root / name).write_bytes(b"x")
    (root / "maps").mkdir()
    return DirectoryLister(root, load_ruleset(), stable_order=True).list("")


def test_listing_sheets_shape(tmp_path):
    sheets = listing_sheets(_listing(tmp_path))

    assert [s.name for s in sheets] == ["Assets", "Variants", "Tags"]
    assets, variants, tags = sheets
    assert [row[0] for row in assets.rows] == ["maps", "mesh.fbx", "rock.exr"]
    assert len(variants.rows) == 3
    assert [row[0] for row in tags.rows] == ["mesh", "rock"]


def test_report_highlights_missing_thumbnail_and_bolds_primary(tmp_path):
    output_path = tmp_path / "reports" / "out.xlsx"
    written = write_listing_report(output_path, _listing(tmp_path))
    assert written == output_path

    wb = load_workbook(output_path)
    try:
        assert wb.sheetnames == ["Assets", "Variants", "Tags"]

        assets = wb["Assets"]
        assert assets.cell(row=1, column=1).value == "name"
        # mesh.fbx has no web-displayable image
        assert assets.cell(row=3, column=1).value == "mesh.fbx"
        assert assets.cell(row=3, column=1).fill.fill_type == "solid"
        assert assets.cell(row=4, column=1).value == "rock.exr"
        assert assets.cell(row=4, column=1).fill.fill_type != "solid"

        variants = wb["Variants"]
        rows = {variants.cell(row=r, column=2).value: r for r in range(2, variants.max_row + 1)}
        assert variants.cell(row=rows["rock.exr"], column=2).font.bold is True
        assert variants.cell(row=rows["rock_preview.jpg"], column=2).font.bold is not True
    finally:
        wb.close()
