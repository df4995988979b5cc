"""Rule-based outfit composition and ranking."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List

import pytest

from logic.outfit_composer import group_by_category, suggest_outfits
from models.clothing_item import ClothingItem, WearLog
from models.weather import WeatherReading

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
COLD = WeatherReading(temperature=50, feels_like=48, description="clear")
MILD = WeatherReading(temperature=68, feels_like=68, description="clear")
HOT = WeatherReading(temperature=88, feels_like=90, description="sunny")


def _item(
    item_id: str,
    category: str,
    price: float = 50.0,
    owned_days: int = 100,
    tags: List[str] | None = None,
) -> ClothingItem:
    return ClothingItem(
        item_id=item_id,
        name=item_id,
        category=category,
        purchase_price=price,
        purchase_date=(NOW - timedelta(days=owned_days)).isoformat(),
        tags=tags or [],
    )


def _logs(item_id: str, *days_ago: int) -> List[WearLog]:
    return [
        WearLog(log_id=f"{item_id}-{index}", item_id=item_id, wear_date=(NOW - timedelta(days=days)).isoformat())
        for index, days in enumerate(days_ago)
    ]


def _wardrobe(tops: int, bottoms: int) -> List[ClothingItem]:
    return [_item(f"top{i}", "tops") for i in range(tops)] + [
        _item(f"bottom{i}", "bottoms") for i in range(bottoms)
    ]


def test_end_to_end_single_outfit_in_cold_weather() -> None:
    top = _item("top", "tops", price=40.0, owned_days=30)
    bottom = _item("bottom", "bottoms", price=80.0, owned_days=100)
    logs: Dict[str, List[WearLog]] = {"bottom": _logs("bottom", 10, 20, 30, 40)}

    outfits = suggest_outfits([top, bottom], COLD, logs, now=NOW)

    assert len(outfits) == 1
    outfit = outfits[0]
    assert outfit.item_ids == ["top", "bottom"]
    assert outfit.reason == "Perfect for the cold weather"
    assert outfit.avg_cost_per_wear == pytest.approx(30.0)
    # weather 1.0, wear frequency avg 0.02, recency avg (30 + 10) / 2
    assert outfit.score == pytest.approx(0.4 * 1.0 + 0.3 * 0.98 + 0.3 * (20 / 30))


@pytest.mark.parametrize(
    "items",
    [
        [],
        _wardrobe(tops=0, bottoms=3),
        _wardrobe(tops=3, bottoms=0),
        [_item("coat", "outerwear"), _item("boots", "shoes"), _item("scarf", "accessories")],
    ],
)
def test_missing_tops_or_bottoms_yield_no_outfits(items) -> None:
    assert suggest_outfits(items, COLD, {}, now=NOW) == []


def test_at_most_five_outfits_each_with_top_and_bottom() -> None:
    outfits = suggest_outfits(_wardrobe(tops=7, bottoms=6), MILD, {}, now=NOW)

    assert len(outfits) == 5
    for outfit in outfits:
        categories = [item.category for item in outfit.items]
        assert "tops" in categories and "bottoms" in categories


def test_candidates_come_from_nested_loop_order() -> None:
    tops = [_item("heavy", "tops"), _item("light", "tops"), _item("fresh", "tops")]
    bottoms = [_item(f"bottom{i}", "bottoms") for i in range(3)]
    logs = {
        "heavy": _logs("heavy", *range(1, 61)),
        "light": _logs("light", 5, 15),
    }

    outfits = suggest_outfits(tops + bottoms, MILD, logs, now=NOW)

    used_tops = {outfit.items[0].item_id for outfit in outfits}
    assert len(outfits) == 5
    # "fresh" ranks first and fills three slots, "light" the remaining two
    assert used_tops == {"fresh", "light"}
    assert sum(1 for outfit in outfits if outfit.items[0].item_id == "fresh") == 3


def test_outerwear_only_when_cold_and_best_shoes_always() -> None:
    items = [
        _item("tee", "tops"),
        _item("jeans", "bottoms"),
        _item("parka", "outerwear", tags=["warm"]),
        _item("windbreaker", "outerwear"),
        _item("worn-sneakers", "shoes"),
        _item("boots", "shoes"),
        _item("scarf", "accessories"),
    ]
    logs = {"worn-sneakers": _logs("worn-sneakers", *range(1, 50))}

    cold = suggest_outfits(items, COLD, logs, now=NOW)
    hot = suggest_outfits(items, HOT, logs, now=NOW)

    assert cold[0].item_ids == ["tee", "jeans", "parka", "boots"]
    assert hot[0].item_ids == ["tee", "jeans", "boots"]
    assert hot[0].reason == "Great for warm weather"
    assert all("scarf" not in outfit.item_ids for outfit in cold + hot)


def test_outfits_sorted_by_score_descending() -> None:
    items = _wardrobe(tops=2, bottoms=2)
    logs = {"bottom0": _logs("bottom0", 1, 2, 3), "top1": _logs("top1", 1)}

    outfits = suggest_outfits(items, MILD, logs, now=NOW)
    scores = [outfit.score for outfit in outfits]

    assert scores == sorted(scores, reverse=True)
    assert len(outfits) == 4


def test_rainy_reason_and_equal_scores_keep_input_order() -> None:
    rainy = WeatherReading(temperature=65, feels_like=65, description="Light Rain")
    outfits = suggest_outfits(_wardrobe(tops=2, bottoms=1), rainy, {}, now=NOW)

    assert [outfit.item_ids for outfit in outfits] == [["top0", "bottom0"], ["top1", "bottom0"]]
    assert {outfit.reason for outfit in outfits} == {"Rain-ready outfit"}


def test_group_by_category_builds_all_buckets() -> None:
    grouped = group_by_category([_item("scarf", "accessories")])

    assert set(grouped) == {"tops", "bottoms", "outerwear", "shoes", "accessories"}
    assert [item.item_id for item in grouped["accessories"]] == ["scarf"]
