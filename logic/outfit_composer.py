"""Deterministic outfit assembly from weather fitness and wear history.

Items are ranked inside their category by a blend of weather fit and
under-use, then the best tops and bottoms are paired in nested order. Each
pair picks up the best outerwear (cold days only) and the best shoes, and the
resulting outfits are scored and sorted.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Mapping, Sequence

from logic.date_math import resolve_now
from logic.item_analytics import calculate_item_analytics
from logic.weather_scoring import (
    WeatherConditions,
    classify_weather,
    score_item_for_weather,
    weather_reason,
)
from models.analytics import ItemAnalytics, OutfitSuggestion
from models.clothing_item import ClothingItem, WearLog
from models.taxonomy import CATEGORIES
from models.weather import WeatherReading

logger = logging.getLogger(__name__)

MAX_OUTFITS = 5
MAX_PER_SIDE = 5
RECENCY_CAP_DAYS = 30

ITEM_WEIGHTS = {"weather": 0.6, "wear": 0.4}
OUTFIT_WEIGHTS = {"weather": 0.4, "wear": 0.3, "recency": 0.3}


def group_by_category(items: Sequence[ClothingItem]) -> Dict[str, List[ClothingItem]]:
    grouped: Dict[str, List[ClothingItem]] = {category: [] for category in CATEGORIES}
    for item in items:
        if item.category in grouped:
            grouped[item.category].append(item)
    return grouped


class _ScoringPass:
    """Weather and analytics lookups for one suggestion request."""

    def __init__(
        self,
        conditions: WeatherConditions,
        wear_logs_by_item: Mapping[str, Sequence[WearLog]],
        now: datetime,
    ) -> None:
        self.conditions = conditions
        self.wear_logs_by_item = wear_logs_by_item
        self.now = now
        self._analytics: Dict[str, ItemAnalytics] = {}

    def weather(self, item: ClothingItem) -> float:
        return score_item_for_weather(item, self.conditions)

    def analytics(self, item: ClothingItem) -> ItemAnalytics:
        cached = self._analytics.get(item.item_id)
        if cached is None:
            logs = self.wear_logs_by_item.get(item.item_id, [])
            cached = calculate_item_analytics(item, logs, now=self.now)
            self._analytics[item.item_id] = cached
        return cached

    def rank(self, items: Sequence[ClothingItem]) -> List[ClothingItem]:
        """Sort descending by combined score; equal scores keep input order."""

        def combined(item: ClothingItem) -> float:
            wear_score = 1 - self.analytics(item).wear_frequency
            return self.weather(item) * ITEM_WEIGHTS["weather"] + wear_score * ITEM_WEIGHTS["wear"]

        return sorted(items, key=combined, reverse=True)

    def score_outfit(self, outfit: Sequence[ClothingItem]) -> tuple[float, float]:
        """Return ``(score, avg_cost_per_wear)`` for a complete outfit."""

        analytics = [self.analytics(item) for item in outfit]
        count = len(outfit)
        avg_weather = sum(self.weather(item) for item in outfit) / count
        avg_frequency = sum(entry.wear_frequency for entry in analytics) / count
        avg_days = (
            sum(
                RECENCY_CAP_DAYS if entry.never_worn else min(entry.days_since_last_wear, RECENCY_CAP_DAYS)
                for entry in analytics
            )
            / count
        )
        avg_cost_per_wear = sum(entry.cost_per_wear for entry in analytics) / count
        score = (
            avg_weather * OUTFIT_WEIGHTS["weather"]
            + (1 - avg_frequency) * OUTFIT_WEIGHTS["wear"]
            + avg_days / RECENCY_CAP_DAYS * OUTFIT_WEIGHTS["recency"]
        )
        return score, avg_cost_per_wear


def suggest_outfits(
    items: Sequence[ClothingItem],
    weather: WeatherReading,
    wear_logs_by_item: Mapping[str, Sequence[WearLog]],
    now: datetime | None = None,
) -> List[OutfitSuggestion]:
    """Rank up to five outfits for the given weather and wear history.

    Returns an empty list when there is no top or no bottom. Candidates are
    the first five generated in top-major, bottom-minor order; score only
    decides their final ordering.
    """

    grouped = group_by_category(items)
    if not grouped["tops"] or not grouped["bottoms"]:
        logger.info(
            "Cannot compose outfits: %s tops, %s bottoms", len(grouped["tops"]), len(grouped["bottoms"])
        )
        return []

    conditions = classify_weather(weather)
    scoring = _ScoringPass(conditions, wear_logs_by_item, resolve_now(now))
    tops = scoring.rank(grouped["tops"])
    bottoms = scoring.rank(grouped["bottoms"])
    outerwear = scoring.rank(grouped["outerwear"])
    shoes = scoring.rank(grouped["shoes"])
    reason = weather_reason(conditions)

    suggestions: List[OutfitSuggestion] = []
    for top in tops[:MAX_PER_SIDE]:
        if len(suggestions) >= MAX_OUTFITS:
            break
        for bottom in bottoms[:MAX_PER_SIDE]:
            if len(suggestions) >= MAX_OUTFITS:
                break
            outfit = [top, bottom]
            if conditions.is_cold and outerwear:
                outfit.append(outerwear[0])
            if shoes:
                outfit.append(shoes[0])
            score, avg_cost_per_wear = scoring.score_outfit(outfit)
            suggestions.append(
                OutfitSuggestion(
                    items=tuple(outfit),
                    score=score,
                    reason=reason,
                    avg_cost_per_wear=avg_cost_per_wear,
                )
            )

    ranked = sorted(suggestions, key=lambda suggestion: suggestion.score, reverse=True)[:MAX_OUTFITS]
    logger.info("Composed %s outfit suggestions (%s)", len(ranked), reason)
    return ranked


__all__ = ["suggest_outfits", "group_by_category", "MAX_OUTFITS"]
