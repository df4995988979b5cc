"""Per-item wear analytics and closet-wide insights.

Everything here is a pure function of its inputs plus an injectable ``now``;
nothing is cached between calls.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Sequence

from logic.date_math import days_since, parse_timestamp, resolve_now
from models.analytics import NEVER_WORN, ItemAnalytics, WardrobeSummary
from models.clothing_item import ClothingItem, WearLog

logger = logging.getLogger(__name__)

STAGNANT_THRESHOLD_DAYS = 90
MOST_WORN_LIMIT = 5

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def calculate_cost_per_wear(purchase_price: float, times_worn: int) -> float:
    """Price divided by wears; the price itself when the item was never worn."""

    if times_worn == 0:
        return purchase_price
    return purchase_price / times_worn


def latest_wear_log(wear_logs: Sequence[WearLog]) -> WearLog | None:
    if not wear_logs:
        return None
    return max(wear_logs, key=lambda log: parse_timestamp(log.wear_date) or _EARLIEST)


def calculate_days_since_last_wear(wear_logs: Sequence[WearLog], now: datetime | None = None) -> int:
    """Days since the most recent wear, or ``-1`` when there are no logs."""

    latest = latest_wear_log(wear_logs)
    if latest is None:
        return NEVER_WORN
    return days_since(latest.wear_date, now=now)


def calculate_days_owned(purchase_date: str, now: datetime | None = None) -> int:
    return days_since(purchase_date, now=now)


def calculate_wear_frequency(times_worn: int, days_owned: int) -> float:
    """Wears per day owned; ``0`` for items owned less than a day."""

    if days_owned == 0:
        return 0
    return times_worn / days_owned


def calculate_item_analytics(
    item: ClothingItem, wear_logs: Sequence[WearLog], now: datetime | None = None
) -> ItemAnalytics:
    """Derive the five per-item metrics from an item and its wear logs."""

    reference = resolve_now(now)
    times_worn = len(wear_logs)
    days_owned = calculate_days_owned(item.purchase_date, now=reference)
    return ItemAnalytics(
        item_id=item.item_id,
        times_worn=times_worn,
        cost_per_wear=calculate_cost_per_wear(item.purchase_price, times_worn),
        days_since_last_wear=calculate_days_since_last_wear(wear_logs, now=reference),
        days_owned=days_owned,
        wear_frequency=calculate_wear_frequency(times_worn, days_owned),
    )


def group_wear_logs_by_item(
    items: Iterable[ClothingItem], wear_logs: Iterable[WearLog]
) -> Dict[str, List[WearLog]]:
    """Map every item id to its wear logs.

    Items without logs map to an empty list. Logs pointing at unknown items
    are dropped.
    """

    grouped: Dict[str, List[WearLog]] = {item.item_id: [] for item in items}
    orphaned = 0
    for log in wear_logs:
        bucket = grouped.get(log.item_id)
        if bucket is None:
            orphaned += 1
            continue
        bucket.append(log)
    if orphaned:
        logger.debug("Dropped %s wear logs for unknown items", orphaned)
    return grouped


def identify_stagnant_items(
    items: Sequence[ClothingItem],
    wear_logs_by_item: Mapping[str, Sequence[WearLog]],
    threshold_days: int = STAGNANT_THRESHOLD_DAYS,
    now: datetime | None = None,
) -> List[ClothingItem]:
    """Items never worn or not worn for ``threshold_days`` or more, in input order."""

    reference = resolve_now(now)
    stagnant = []
    for item in items:
        days = calculate_days_since_last_wear(wear_logs_by_item.get(item.item_id, []), now=reference)
        if days == NEVER_WORN or days >= threshold_days:
            stagnant.append(item)
    return stagnant


def summarize_wardrobe(
    items: Sequence[ClothingItem],
    wear_logs: Sequence[WearLog],
    now: datetime | None = None,
    threshold_days: int = STAGNANT_THRESHOLD_DAYS,
    top_n: int = MOST_WORN_LIMIT,
) -> WardrobeSummary:
    """Closet totals, stagnant items and the most worn pieces."""

    reference = resolve_now(now)
    grouped = group_wear_logs_by_item(items, wear_logs)
    analytics = [calculate_item_analytics(item, grouped[item.item_id], now=reference) for item in items]

    total_wears = len(wear_logs)
    total_spent = sum(item.purchase_price for item in items)
    avg_cost_per_wear = total_spent / total_wears if total_wears > 0 else total_spent

    by_id = {item.item_id: item for item in items}
    ranked = sorted(analytics, key=lambda entry: entry.times_worn, reverse=True)
    most_worn = [by_id[entry.item_id] for entry in ranked[:top_n]]

    stagnant = identify_stagnant_items(items, grouped, threshold_days=threshold_days, now=reference)
    logger.info(
        "Summarised wardrobe: %s items, %s wears, %s stagnant", len(items), total_wears, len(stagnant)
    )
    return WardrobeSummary(
        total_items=len(items),
        total_wears=total_wears,
        total_spent=total_spent,
        avg_cost_per_wear=avg_cost_per_wear,
        stagnant_items=stagnant,
        most_worn=most_worn,
        item_analytics=analytics,
    )


__all__ = [
    "STAGNANT_THRESHOLD_DAYS",
    "calculate_cost_per_wear",
    "calculate_days_since_last_wear",
    "calculate_days_owned",
    "calculate_wear_frequency",
    "calculate_item_analytics",
    "group_wear_logs_by_item",
    "identify_stagnant_items",
    "latest_wear_log",
    "summarize_wardrobe",
]
