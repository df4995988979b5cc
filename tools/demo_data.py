"""Deterministic demo wardrobe for local runs and screenshots."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Dict, List, Tuple

from logic.date_math import resolve_now
from models.clothing_item import ClothingItem, WearLog
from models.taxonomy import CATEGORIES, COMMON_TAGS

BRANDS = [
    "Nike", "Adidas", "Zara", "H&M", "Uniqlo", "Levi's", "Gap", "Old Navy",
    "J.Crew", "Banana Republic", "Calvin Klein", "Ralph Lauren",
]
SIZES = ["XS", "S", "M", "L", "XL", "28", "30", "32", "34", "8", "9", "10", "11"]
COLOR_OPTIONS = [
    ["Black"], ["White"], ["Navy"], ["Gray"], ["Beige"], ["Brown"], ["Blue"], ["Red"],
    ["Green"], ["Black", "White"], ["Blue", "White"], ["Gray", "Navy"], ["Beige", "Brown"],
]
MATERIALS = ["Cotton", "Polyester", "Denim", "Wool", "Leather", "Linen", "Fleece", "Canvas"]
CARE_INSTRUCTIONS = [
    "Machine wash cold", "Hand wash only", "Dry clean only", "Hang dry", "Tumble dry low",
]
ITEM_NAMES: Dict[str, List[str]] = {
    "tops": ["T-Shirt", "Polo Shirt", "Button-Down Shirt", "Sweater", "Hoodie", "Henley", "Turtleneck"],
    "bottoms": ["Jeans", "Chinos", "Cargo Pants", "Shorts", "Joggers", "Dress Pants", "Skirt"],
    "outerwear": ["Parka", "Bomber Jacket", "Denim Jacket", "Raincoat", "Trench Coat", "Puffer Jacket"],
    "shoes": ["Sneakers", "Running Shoes", "Boots", "Loafers", "Sandals"],
    "accessories": ["Scarf", "Beanie", "Belt", "Watch", "Tote Bag"],
}
PRICE_RANGES: Dict[str, Tuple[int, int]] = {
    "tops": (15, 80),
    "bottoms": (30, 120),
    "outerwear": (60, 300),
    "shoes": (50, 200),
    "accessories": (10, 90),
}
_CATEGORY_TAGS = {"outerwear": ["warm", "waterproof"], "shoes": ["waterproof"]}


def _pick_tags(rng: random.Random, category: str) -> List[str]:
    tags = rng.sample(COMMON_TAGS, k=rng.randint(1, 3))
    extra = _CATEGORY_TAGS.get(category)
    if extra and rng.random() < 0.5:
        tags.append(rng.choice(extra))
    return tags


def generate_demo_wardrobe(
    count: int = 20, seed: int = 0, now: datetime | None = None
) -> Tuple[List[ClothingItem], List[WearLog]]:
    """Build ``count`` items spread across every category plus a wear history."""

    rng = random.Random(seed)
    reference = resolve_now(now)
    items: List[ClothingItem] = []
    logs: List[WearLog] = []

    for index in range(count):
        category = CATEGORIES[index % len(CATEGORIES)]
        low, high = PRICE_RANGES[category]
        purchased = reference - timedelta(days=rng.randint(0, 720))
        created = purchased.isoformat()
        brand = rng.choice(BRANDS)
        item = ClothingItem(
            item_id=f"demo-{index + 1:03d}",
            name=f"{brand} {rng.choice(ITEM_NAMES[category])}",
            category=category,
            purchase_price=float(rng.randint(low, high)),
            purchase_date=purchased.date().isoformat(),
            photo_uri=f"demo://{category}/{index + 1}",
            colors=list(rng.choice(COLOR_OPTIONS)),
            tags=_pick_tags(rng, category),
            brand=brand,
            size=rng.choice(SIZES),
            material=rng.choice(MATERIALS),
            care_instructions=rng.choice(CARE_INSTRUCTIONS),
            created_at=created,
            updated_at=created,
        )
        items.append(item)

        owned_days = max((reference - purchased).days, 1)
        for wear_index in range(rng.randint(0, 12)):
            worn = reference - timedelta(days=rng.randint(0, owned_days))
            logs.append(
                WearLog(
                    log_id=f"{item.item_id}-wear-{wear_index + 1:02d}",
                    item_id=item.item_id,
                    wear_date=worn.isoformat(),
                )
            )

    return items, logs


__all__ = ["generate_demo_wardrobe"]
