"""Per-item analytics, stagnation detection and closet insights."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from logic.item_analytics import (
    calculate_cost_per_wear,
    calculate_days_since_last_wear,
    calculate_item_analytics,
    calculate_wear_frequency,
    group_wear_logs_by_item,
    identify_stagnant_items,
    summarize_wardrobe,
)
from models.clothing_item import ClothingItem, WearLog

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _item(item_id: str, price: float = 50.0, owned_days: int = 100, category: str = "tops") -> ClothingItem:
    return ClothingItem(
        item_id=item_id,
        name=f"Item {item_id}",
        category=category,
        purchase_price=price,
        purchase_date=(NOW - timedelta(days=owned_days)).isoformat(),
    )


def _logs(item_id: str, *days_ago: float) -> List[WearLog]:
    return [
        WearLog(log_id=f"{item_id}-{index}", item_id=item_id, wear_date=(NOW - timedelta(days=days)).isoformat())
        for index, days in enumerate(days_ago)
    ]


def test_never_worn_item_keeps_price_and_sentinel() -> None:
    analytics = calculate_item_analytics(_item("a", price=40.0), [], now=NOW)

    assert analytics.times_worn == 0
    assert analytics.cost_per_wear == 40.0
    assert analytics.days_since_last_wear == -1
    assert analytics.never_worn
    assert analytics.wear_frequency == 0


def test_worn_item_metrics() -> None:
    item = _item("b", price=80.0, owned_days=100)
    analytics = calculate_item_analytics(item, _logs("b", 40, 10, 25, 70), now=NOW)

    assert analytics.times_worn == 4
    assert analytics.cost_per_wear == 20.0
    assert analytics.days_since_last_wear == 10
    assert analytics.days_owned == 100
    assert analytics.wear_frequency == pytest.approx(0.04)
    assert not analytics.never_worn


def test_days_owned_zero_yields_zero_frequency() -> None:
    item = ClothingItem(
        item_id="fresh",
        name="Fresh",
        category="tops",
        purchase_price=10,
        purchase_date=(NOW - timedelta(hours=6)).isoformat(),
    )
    analytics = calculate_item_analytics(item, _logs("fresh", 0.1, 0.2), now=NOW)

    assert analytics.days_owned == 0
    assert analytics.wear_frequency == 0


def test_malformed_purchase_date_degrades_to_zero_days_owned() -> None:
    item = ClothingItem(item_id="odd", name="Odd", category="shoes", purchase_price=10, purchase_date="someday")
    analytics = calculate_item_analytics(item, _logs("odd", 3), now=NOW)

    assert analytics.days_owned == 0
    assert analytics.wear_frequency == 0
    assert analytics.days_since_last_wear == 3


def test_helpers_follow_division_policies() -> None:
    assert calculate_cost_per_wear(0.0, 0) == 0.0
    assert calculate_cost_per_wear(99.0, 0) == 99.0
    assert calculate_cost_per_wear(99.0, 3) == 33.0
    assert calculate_wear_frequency(5, 0) == 0
    assert calculate_wear_frequency(5, 10) == 0.5
    assert calculate_days_since_last_wear([], now=NOW) == -1


def test_recomputing_analytics_is_repeatable() -> None:
    item = _item("c", price=120.0, owned_days=365)
    logs = _logs("c", 5, 50, 150)

    first = calculate_item_analytics(item, logs, now=NOW)
    second = calculate_item_analytics(item, list(reversed(logs)), now=NOW)

    assert first == second


def test_stagnation_boundary_at_ninety_days() -> None:
    items = [_item("never"), _item("d89"), _item("d90"), _item("recent"), _item("d200")]
    grouped = group_wear_logs_by_item(
        items,
        _logs("d89", 89) + _logs("d90", 90) + _logs("recent", 1, 120) + _logs("d200", 200),
    )

    stagnant = identify_stagnant_items(items, grouped, now=NOW)

    assert [item.item_id for item in stagnant] == ["never", "d90", "d200"]


def test_stagnation_threshold_is_configurable() -> None:
    items = [_item("x")]
    grouped = {"x": _logs("x", 45)}

    assert identify_stagnant_items(items, grouped, threshold_days=30, now=NOW) == items
    assert identify_stagnant_items(items, grouped, now=NOW) == []


def test_stagnation_treats_missing_mapping_entry_as_never_worn() -> None:
    items = [_item("missing")]
    assert identify_stagnant_items(items, {}, now=NOW) == items


def test_group_wear_logs_by_item_covers_every_item_and_drops_orphans() -> None:
    items = [_item("a"), _item("b")]
    logs = _logs("a", 1, 2) + _logs("ghost", 3)

    grouped = group_wear_logs_by_item(items, logs)

    assert set(grouped) == {"a", "b"}
    assert len(grouped["a"]) == 2
    assert grouped["b"] == []


def test_summarize_wardrobe_totals_and_rankings() -> None:
    items = [
        _item("a", price=100.0),
        _item("b", price=50.0),
        _item("c", price=30.0),
    ]
    logs = _logs("a", 1, 2, 3) + _logs("b", 100)

    summary = summarize_wardrobe(items, logs, now=NOW)

    assert summary.total_items == 3
    assert summary.total_wears == 4
    assert summary.total_spent == 180.0
    assert summary.avg_cost_per_wear == 45.0
    assert [item.item_id for item in summary.most_worn] == ["a", "b", "c"]
    assert [item.item_id for item in summary.stagnant_items] == ["b", "c"]
    assert len(summary.item_analytics) == 3


def test_summarize_wardrobe_without_wears_reports_total_spent() -> None:
    summary = summarize_wardrobe([_item("a", price=25.0), _item("b", price=15.0)], [], now=NOW)

    assert summary.avg_cost_per_wear == 40.0
    assert summary.total_wears == 0
