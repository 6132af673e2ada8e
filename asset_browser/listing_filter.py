#!/usr/bin/env python3
"""
In-directory filtering of a listing by name and tags.

Filtering never rescans the filesystem: it narrows an existing listing and
recounts tags over what is left, so the counts match the visible items.
"""

from typing import Iterable, List, Sequence

from .directory_lister import DirectoryListing, TagCount, count_tags

TAG_SORTS = ("pop", "alpha")


def filter_listing(
    listing: DirectoryListing,
    query: str = "",
    tags: Sequence[str] = (),
    tag_sort: str = "pop",
) -> DirectoryListing:
    """
    Keep items whose name contains ``query`` and that carry every tag in ``tags``.

    Args:
        listing: Listing to narrow
        query: Case-insensitive substring of the item name; blank matches all
        tags: Active tags; an item must carry all of them
        tag_sort: ``"pop"`` (count descending, then name) or ``"alpha"`` (name)

    Returns:
        A new listing with recounted tags. Active tags that no remaining item
        carries are still listed, with a count of 0.

    Raises:
        ValueError: for an unknown ``tag_sort``
    """
    if tag_sort not in TAG_SORTS:
        raise ValueError(f"tag_sort must be one of {TAG_SORTS}, got {tag_sort!r}")

    term = (query or "").strip().lower()
    active = _unique_lower(tags)

    kept = []
    for item in listing.items:
        if term and term not in item.name.lower():
            continue
        item_tags = {t.lower() for t in item.tags}
        if not all(tag in item_tags for tag in active):
            continue
        kept.append(item)

    counts: List[TagCount] = list(count_tags(kept))
    present = {c.name for c in counts}
    counts.extend(TagCount(tag, 0) for tag in active if tag not in present)

    if tag_sort == "alpha":
        counts.sort(key=lambda c: c.name)
    else:
        counts.sort(key=lambda c: (-c.count, c.name))

    return DirectoryListing(cwd=listing.cwd, items=tuple(kept), tags=tuple(counts))


def _unique_lower(tags: Iterable[str]) -> List[str]:
    result: List[str] = []
    for tag in tags:
        tag = (tag or "").strip().lower()
        if tag and tag not in result:
            result.append(tag)
    return result
