#!/usr/bin/env python3
"""
Excel report of a directory listing.

Writes three styled tables with openpyxl: ``Assets`` (one row per item, rows
without a thumbnail highlighted), ``Variants`` (one row per file, primary
files in bold) and ``Tags`` (the tag counts).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from .directory_lister import DirectoryListing
from .file_record import isoformat_mtime

MAX_COLUMN_WIDTH = 60
HIGHLIGHT_FILL = PatternFill(start_color="FFFF00", end_color="FFFF00", fill_type="solid")


@dataclass(frozen=True)
class ReportSheet:
    """
    One sheet of a report.

    Attributes:
        name: Sheet/tab name (also the table name, without spaces)
        headers: Column headers
        rows: Row values ordered like ``headers``
        highlighted_rows: Row indexes (0-based, excluding header) to fill yellow
        bold_rows: Row indexes to render in bold
    """

    name: str
    headers: Sequence[str]
    rows: Sequence[Sequence[Any]]
    highlighted_rows: frozenset = frozenset()
    bold_rows: frozenset = frozenset()


def listing_sheets(listing: DirectoryListing) -> List[ReportSheet]:
    """Build the Assets, Variants and Tags sheets for a listing."""
    asset_rows: List[List[Any]] = []
    missing_thumbnails = set()
    variant_rows: List[List[Any]] = []
    primary_rows = set()

    for item in listing.items:
        group = item.group
        mtime = isoformat_mtime(item.mtime) if item.mtime else ""
        if group is None:
            asset_rows.append([item.name, item.path, "directory", "", "", "", 0, "", mtime])
            continue
        if group.thumbnail is None:
            missing_thumbnails.add(len(asset_rows))
        asset_rows.append([
            item.name,
            item.path,
            group.kind.value,
            group.key,
            group.thumbnail.name if group.thumbnail else "",
            group.primary.size,
            len(group.variants),
            ", ".join(group.tags),
            mtime,
        ])
        for variant in group.variants:
            if variant is group.primary:
                primary_rows.add(len(variant_rows))
            variant_rows.append([
                group.key,
                variant.name,
                variant.ext,
                variant.mimetype,
                variant.size,
                "yes" if variant.is_image else "",
                "yes" if variant.is_preview else "",
                ", ".join(variant.tags),
            ])

    return [
        ReportSheet(
            name="Assets",
            headers=["name", "path", "kind", "key", "thumbnail", "size", "variants", "tags", "mtime"],
            rows=asset_rows,
            highlighted_rows=frozenset(missing_thumbnails),
        ),
        ReportSheet(
            name="Variants",
            headers=["key", "file", "ext", "mimetype", "size", "image", "preview", "tags"],
            rows=variant_rows,
            bold_rows=frozenset(primary_rows),
        ),
        ReportSheet(
            name="Tags",
            headers=["tag", "count"],
            rows=[[tag.name, tag.count] for tag in listing.tags],
        ),
    ]


def _write_sheet(ws, sheet: ReportSheet) -> None:
    ws.title = sheet.name
    ws.append(list(sheet.headers))

    bold_font = Font(bold=True)
    for row_idx, row in enumerate(sheet.rows):
        ws.append(list(row))
        if row_idx not in sheet.highlighted_rows and row_idx not in sheet.bold_rows:
            continue
        for cell in ws[row_idx + 2]:
            if row_idx in sheet.highlighted_rows:
                cell.fill = HIGHLIGHT_FILL
            if row_idx in sheet.bold_rows:
                cell.font = bold_font

    for col_idx, header in enumerate(sheet.headers, 1):
        letter = get_column_letter(col_idx)
        longest = max((len(str(c.value)) for c in ws[letter] if c.value is not None), default=len(header))
        ws.column_dimensions[letter].width = min(longest + 2, MAX_COLUMN_WIDTH)

    if sheet.rows:
        ref = f"A1:{get_column_letter(len(sheet.headers))}{len(sheet.rows) + 1}"
        table = Table(displayName=sheet.name.replace(" ", "") + "Table", ref=ref)
        table.tableStyleInfo = TableStyleInfo(name="TableStyleMedium9", showRowStripes=True)
        ws.add_table(table)


def write_listing_report(output_path: Path | str, listing: DirectoryListing) -> Path:
    """
    Write a listing report workbook.

    Args:
        output_path: Destination ``.xlsx`` path; parent folders are created
        listing: Listing to report on

    Returns:
        Path to the written workbook
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    for idx, sheet in enumerate(listing_sheets(listing)):
        ws = wb.active if idx == 0 else wb.create_sheet()
        _write_sheet(ws, sheet)

    wb.save(output_path)
    return output_path
