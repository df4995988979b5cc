"""Common interface for the outfit suggestion paths."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Generic, List, Mapping, Sequence, TypeVar

from logic.outfit_composer import suggest_outfits
from models.analytics import OutfitSuggestion
from models.clothing_item import ClothingItem, WearLog
from models.weather import WeatherReading

ResultT = TypeVar("ResultT")


class OutfitSuggester(ABC, Generic[ResultT]):
    """Produces an outfit recommendation from the closet, weather and wear history."""

    name: str = "suggester"

    @abstractmethod
    def suggest(
        self,
        items: Sequence[ClothingItem],
        weather: WeatherReading,
        wear_logs_by_item: Mapping[str, Sequence[WearLog]],
    ) -> ResultT:
        """Return this suggester's recommendation."""


class RuleBasedSuggester(OutfitSuggester[List[OutfitSuggestion]]):
    """Deterministic ranking engine; never raises on degenerate input."""

    name = "rule_based"

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self.clock = clock

    def suggest(
        self,
        items: Sequence[ClothingItem],
        weather: WeatherReading,
        wear_logs_by_item: Mapping[str, Sequence[WearLog]],
    ) -> List[OutfitSuggestion]:
        now = self.clock() if self.clock else None
        return suggest_outfits(items, weather, wear_logs_by_item, now=now)


__all__ = ["OutfitSuggester", "RuleBasedSuggester"]
