"""Derived, non-persisted analytics and suggestion results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from models.clothing_item import ClothingItem

NEVER_WORN = -1


@dataclass(frozen=True)
class ItemAnalytics:
    """Per-item metrics recomputed on demand from an item and its wear logs.

    ``days_since_last_wear`` uses ``-1`` as the "never worn" sentinel; check
    :attr:`never_worn` before treating it as a day count.
    """

    item_id: str
    times_worn: int
    cost_per_wear: float
    days_since_last_wear: int
    days_owned: int
    wear_frequency: float

    @property
    def never_worn(self) -> bool:
        return self.days_since_last_wear == NEVER_WORN


@dataclass(frozen=True)
class OutfitSuggestion:
    items: Tuple[ClothingItem, ...]
    score: float
    reason: str
    avg_cost_per_wear: float

    @property
    def item_ids(self) -> List[str]:
        return [item.item_id for item in self.items]


@dataclass
class WardrobeSummary:
    """Closet-wide totals shown on the insights view."""

    total_items: int
    total_wears: int
    total_spent: float
    avg_cost_per_wear: float
    stagnant_items: List[ClothingItem] = field(default_factory=list)
    most_worn: List[ClothingItem] = field(default_factory=list)
    item_analytics: List[ItemAnalytics] = field(default_factory=list)


__all__ = ["NEVER_WORN", "ItemAnalytics", "OutfitSuggestion", "WardrobeSummary"]
