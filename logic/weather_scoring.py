"""Weather classification and per-item weather fitness scoring."""

from __future__ import annotations

from dataclasses import dataclass

from models.clothing_item import ClothingItem
from models.taxonomy import WARM_TAG, WATERPROOF_TAG
from models.weather import WeatherReading

COLD_BELOW_F = 60
HOT_ABOVE_F = 75
BASE_SCORE = 1.0

REASON_COLD = "Perfect for the cold weather"
REASON_HOT = "Great for warm weather"
REASON_RAINY = "Rain-ready outfit"
REASON_DEFAULT = "Weather-appropriate outfit"


@dataclass(frozen=True)
class WeatherConditions:
    """Coarse flags derived from a reading. Flags may overlap."""

    is_cold: bool
    is_hot: bool
    is_rainy: bool


def classify_weather(weather: WeatherReading) -> WeatherConditions:
    return WeatherConditions(
        is_cold=weather.temperature < COLD_BELOW_F,
        is_hot=weather.temperature > HOT_ABOVE_F,
        is_rainy="rain" in (weather.description or "").lower(),
    )


def score_item_for_weather(item: ClothingItem, conditions: WeatherConditions) -> float:
    """Additive fitness score around a base of 1.0; unclamped, for ranking only."""

    is_outerwear = item.category == "outerwear"
    is_warm = WARM_TAG in item.tags
    score = BASE_SCORE

    if conditions.is_cold:
        if is_warm or is_outerwear:
            score += 0.5
        if is_outerwear:
            score += 0.3

    if conditions.is_hot:
        if is_warm and is_outerwear:
            score -= 0.5
        if is_outerwear:
            score -= 0.2

    if conditions.is_rainy:
        if WATERPROOF_TAG in item.tags or is_outerwear:
            score += 0.4

    return score


def weather_reason(conditions: WeatherConditions) -> str:
    """Reason text; cold wins over hot, hot over rainy."""

    if conditions.is_cold:
        return REASON_COLD
    if conditions.is_hot:
        return REASON_HOT
    if conditions.is_rainy:
        return REASON_RAINY
    return REASON_DEFAULT


__all__ = [
    "WeatherConditions",
    "classify_weather",
    "score_item_for_weather",
    "weather_reason",
    "COLD_BELOW_F",
    "HOT_ABOVE_F",
]
