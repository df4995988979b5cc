"""WearWise app bootstrap."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List

from agents.outfit_advisor import GeminiOutfitAdvisor
from agents.stylist import DailySuggestions, StylistAgent
from agents.suggester import RuleBasedSuggester
from logic.closet_filter import filter_items
from logic.date_math import parse_timestamp, resolve_now
from logic.item_analytics import calculate_item_analytics, group_wear_logs_by_item, summarize_wardrobe
from models.analytics import ItemAnalytics, WardrobeSummary
from models.clothing_item import ClothingItem, WearLog, from_raw_metadata
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.weather_provider import OpenWeatherProvider, WeatherCache, WeatherProvider
from wearwise_app.config import WearWiseConfig
from wearwise_app.logging_config import configure_logging, get_logger, log_event, operation_context


LOGGER = get_logger(__name__)


class ItemNotFoundError(LookupError):
    """Raised when an operation names an item id that is not in the closet."""


class WearWiseApp:
    """Wires together storage, weather, the stylist agent and analytics."""

    def __init__(
        self,
        config: WearWiseConfig | None = None,
        store: WardrobeStore | None = None,
        weather_provider: WeatherProvider | None = None,
        advisor: GeminiOutfitAdvisor | None = None,
        configure_logs: bool = True,
    ) -> None:
        self.config = config or WearWiseConfig.from_env()
        if configure_logs:
            configure_logging()

        self.store = store or SQLiteWardrobeStore(self.config.wardrobe_db_path)
        self.weather_provider = weather_provider or OpenWeatherProvider(
            api_key=self.config.weather_api_key,
            cache=WeatherCache(ttl_seconds=self.config.weather_cache_ttl_seconds),
        )
        if advisor is None and self.config.gemini_api_key:
            advisor = GeminiOutfitAdvisor(
                api_key=self.config.gemini_api_key, model_name=self.config.gemini_model
            )
        self.advisor = advisor
        self.stylist = StylistAgent(
            weather_provider=self.weather_provider,
            rule_based=RuleBasedSuggester(),
            advisor=self.advisor,
        )

    def list_items(self, category: str | None = None, query: str | None = None) -> List[ClothingItem]:
        items = self.store.list_items()
        if category or query:
            return filter_items(items, category=category, query=query)
        return items

    def get_item(self, item_id: str) -> ClothingItem:
        item = self.store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def add_item(self, item_data: Dict[str, Any]) -> ClothingItem:
        """Catalog a new item from loose form data; raises ``ValueError`` on bad input."""

        item = from_raw_metadata(item_data)
        stored = self.store.create_item(item)
        log_event(LOGGER, logging.INFO, "item_added", item_id=stored.item_id, category=stored.category)
        return stored

    def update_item(self, item_id: str, updated_fields: Dict[str, Any]) -> ClothingItem:
        current = self.get_item(item_id)
        merged = {**asdict(current), **updated_fields, "item_id": item_id}
        candidate = from_raw_metadata(merged)
        updated = self.store.update_item(candidate)
        if updated is None:
            raise ItemNotFoundError(item_id)
        return updated

    def delete_item(self, item_id: str) -> None:
        if not self.store.delete_item(item_id):
            raise ItemNotFoundError(item_id)

    def log_wear(
        self, item_id: str, worn_at: datetime | str | None = None, now: datetime | None = None
    ) -> WearLog:
        """Record a wear; ``worn_at`` defaults to now and may not lie in the future."""

        self.get_item(item_id)
        if worn_at is not None:
            worn = parse_timestamp(worn_at)
            if worn is None:
                raise ValueError(f"Unparseable wear date: {worn_at!r}")
            if worn > resolve_now(now):
                raise ValueError("Wear date cannot be in the future")
        log = self.store.log_wear(item_id, worn_at)
        log_event(LOGGER, logging.INFO, "wear_logged", item_id=item_id)
        return log

    def item_analytics(self, item_id: str, now: datetime | None = None) -> ItemAnalytics:
        item = self.get_item(item_id)
        return calculate_item_analytics(item, self.store.list_wear_logs_for_item(item_id), now=now)

    def insights(self, now: datetime | None = None) -> WardrobeSummary:
        with operation_context("app:insights"):
            return summarize_wardrobe(
                self.store.list_items(),
                self.store.list_wear_logs(),
                now=now,
                threshold_days=self.config.stagnant_threshold_days,
            )

    def daily_suggestions(self, lat: float, lon: float) -> DailySuggestions:
        items = self.store.list_items()
        grouped = group_wear_logs_by_item(items, self.store.list_wear_logs())
        return self.stylist.daily_suggestions(items, grouped, lat=lat, lon=lon)

    def describe(self) -> Dict[str, Any]:
        return {
            "environment": self.config.environment or "local",
            "weather_configured": bool(self.config.weather_api_key),
            "advisor_configured": self.advisor is not None,
        }


__all__ = ["WearWiseApp", "ItemNotFoundError"]
