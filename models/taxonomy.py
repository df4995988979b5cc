"""Canonical taxonomy definitions for clothing items.

Categories form a closed set; tags are free text but a handful of common
labels drive weather matching ("warm", "waterproof") and are offered as
suggestions during catalog entry.
"""

from typing import Iterable, List, Tuple


CATEGORIES: Tuple[str, ...] = ("tops", "bottoms", "outerwear", "shoes", "accessories")

CATEGORY_LABELS = {
    "tops": "Tops",
    "bottoms": "Bottoms",
    "outerwear": "Outerwear",
    "shoes": "Shoes",
    "accessories": "Accessories",
}

COMMON_TAGS: Tuple[str, ...] = (
    "casual",
    "formal",
    "workout",
    "waterproof",
    "warm",
    "cool",
    "dressy",
    "everyday",
    "seasonal",
    "vintage",
)

WARM_TAG = "warm"
WATERPROOF_TAG = "waterproof"


def _normalize_key(value: str) -> str:
    return str(value).strip().lower()


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Raises a :class:`ValueError` if the category is not part of the closed set.
    """

    key = _normalize_key(value)
    if key not in CATEGORIES:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {list(CATEGORIES)}")
    return key


def normalise_tags(values: Iterable[str]) -> List[str]:
    """Strip, lowercase and deduplicate tags while keeping their order."""

    normalised = []
    seen = set()
    for value in values:
        key = _normalize_key(value)
        if key and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


__all__ = [
    "CATEGORIES",
    "CATEGORY_LABELS",
    "COMMON_TAGS",
    "WARM_TAG",
    "WATERPROOF_TAG",
    "validate_category",
    "normalise_tags",
]
