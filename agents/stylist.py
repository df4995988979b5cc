"""Stylist agent running the rule-based and advisory suggestion paths side by side."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Sequence

from agents.outfit_advisor import AdvisorError, OutfitRecommendation
from agents.suggester import OutfitSuggester, RuleBasedSuggester
from models.analytics import OutfitSuggestion
from models.clothing_item import ClothingItem, WearLog
from models.weather import WeatherReading
from tools.weather_provider import WeatherError, WeatherProvider
from wearwise_app.logging_config import get_logger, log_event, operation_context

LOGGER = get_logger(__name__)


@dataclass
class DailySuggestions:
    """Everything the "today" view shows.

    ``weather`` is ``None`` when no reading could be obtained, in which case
    no suggestions are attempted and ``weather_error`` explains why.
    """

    weather: WeatherReading | None
    outfits: List[OutfitSuggestion] = field(default_factory=list)
    advisory: OutfitRecommendation | None = None
    weather_error: str | None = None
    advisory_error: str | None = None


class StylistAgent:
    """Fetches weather, then asks each configured suggester for outfits."""

    def __init__(
        self,
        weather_provider: WeatherProvider,
        rule_based: RuleBasedSuggester | None = None,
        advisor: OutfitSuggester[OutfitRecommendation] | None = None,
    ) -> None:
        self.weather_provider = weather_provider
        self.rule_based = rule_based or RuleBasedSuggester()
        self.advisor = advisor

    def suggest_for_weather(
        self,
        items: Sequence[ClothingItem],
        weather: WeatherReading,
        wear_logs_by_item: Mapping[str, Sequence[WearLog]],
    ) -> DailySuggestions:
        result = DailySuggestions(weather=weather)
        result.outfits = self.rule_based.suggest(items, weather, wear_logs_by_item)

        if self.advisor is not None:
            try:
                result.advisory = self.advisor.suggest(items, weather, wear_logs_by_item)
            except AdvisorError as exc:
                LOGGER.warning("Advisory stylist unavailable: %s", exc)
                result.advisory_error = str(exc)
            except Exception as exc:
                LOGGER.exception("Advisory stylist failed unexpectedly")
                result.advisory_error = f"Advisory stylist failed: {exc}"
        return result

    def daily_suggestions(
        self,
        items: Sequence[ClothingItem],
        wear_logs_by_item: Mapping[str, Sequence[WearLog]],
        lat: float,
        lon: float,
    ) -> DailySuggestions:
        """Suggest outfits for current conditions at ``(lat, lon)``."""

        with operation_context("agent:stylist.daily_suggestions") as correlation_id:
            try:
                weather = self.weather_provider.get_current_weather(lat, lon)
            except WeatherError as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "weather_unavailable",
                    correlation_id=correlation_id,
                    error_type=type(exc).__name__,
                )
                return DailySuggestions(weather=None, weather_error=str(exc))

            result = self.suggest_for_weather(items, weather, wear_logs_by_item)
            log_event(
                LOGGER,
                logging.INFO,
                "agent_call_completed",
                agent="stylist",
                method="daily_suggestions",
                correlation_id=correlation_id,
                outfits=len(result.outfits),
                advisory=result.advisory is not None,
            )
            return result


__all__ = ["DailySuggestions", "StylistAgent"]
