"""Closet browsing filters."""

from __future__ import annotations

from typing import List, Sequence

from models.clothing_item import ClothingItem
from models.taxonomy import validate_category


def _matches_query(item: ClothingItem, query: str) -> bool:
    if query in item.name.lower():
        return True
    if item.brand and query in item.brand.lower():
        return True
    return any(query in tag.lower() for tag in item.tags)


def filter_items(
    items: Sequence[ClothingItem],
    category: str | None = None,
    query: str | None = None,
) -> List[ClothingItem]:
    """Narrow ``items`` by category and a free-text query, keeping input order.

    The query is a case-insensitive substring match against the name, the
    brand or any tag. A blank query matches everything and an unknown
    category matches nothing.
    """

    selected = list(items)
    if category:
        try:
            category_key = validate_category(category)
        except ValueError:
            return []
        selected = [item for item in selected if item.category == category_key]

    needle = (query or "").strip().lower()
    if needle:
        selected = [item for item in selected if _matches_query(item, needle)]
    return selected


__all__ = ["filter_items"]
