"""Generative outfit advisor backed by Gemini.

The advisor is optional and purely advisory: it runs next to the rule-based
engine and its failures are reported as :class:`AdvisorError` subclasses so
callers can show them without touching the deterministic suggestions.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, List, Mapping, Sequence

from google import generativeai as genai
from google.api_core import exceptions as google_exceptions
from pydantic import BaseModel, Field, ValidationError

from agents.suggester import OutfitSuggester
from logic.item_analytics import latest_wear_log
from models.clothing_item import ClothingItem, WearLog
from models.weather import WeatherReading
from tools.observability import instrument_tool
from wearwise_app.config import DEFAULT_GEMINI_MODEL

LOGGER = logging.getLogger(__name__)

GENERATION_SETTINGS = {"temperature": 0.7, "top_p": 0.95, "top_k": 40}

SYSTEM_INSTRUCTION = """You are a personal stylist AI that helps users get more value from their wardrobe.

CRITICAL PRIORITIES:
1. Prioritize "forgotten" items - items with low wear_count and old last_worn dates should be given HIGHEST priority
2. Weather appropriateness is MANDATORY - the outfit must be suitable for the current weather conditions
3. Create complete, cohesive outfits that include appropriate items for the weather

OUTFIT SELECTION RULES:
- Always include at least one top and one bottom
- Add outerwear if the weather is cold (temp < 60°F)
- Include shoes that are appropriate for the weather
- Prefer items that haven't been worn recently (old last_worn dates)
- Prefer items with low wear_count (items that need more use)
- Consider tags when matching items (e.g., casual, formal, workout)
- Ensure color coordination when possible

WEATHER CONSIDERATIONS:
- Cold weather (< 60°F): Include warm layers, jackets, or coats
- Hot weather (> 75°F): Avoid heavy outerwear, prefer breathable materials
- Rainy conditions: Prefer waterproof items if available
- Windy conditions: Consider layering options

Your response must be a valid JSON object matching the schema."""


class AdvisorError(Exception):
    """Base class for advisory stylist failures."""


class AdvisorConfigurationError(AdvisorError):
    """Missing or rejected Gemini credential."""


class EmptyInventoryError(AdvisorError):
    """The closet has no items to recommend from."""


class MalformedRecommendationError(AdvisorError):
    """The model response was not valid JSON or missed required fields."""


class ClosetItem(BaseModel):
    """Compact item view sent to the model."""

    id: str
    name: str
    category: str
    wear_count: int
    last_worn: str
    tags: List[str] = Field(default_factory=list)


class OutfitRecommendation(BaseModel):
    outfit_ids: List[str]
    styling_advice: str = Field(min_length=1)
    weather_rationale: str = Field(min_length=1)


def _response_schema() -> genai.protos.Schema:
    schema_type = genai.protos.Type
    return genai.protos.Schema(
        type=schema_type.OBJECT,
        properties={
            "outfit_ids": genai.protos.Schema(
                type=schema_type.ARRAY,
                items=genai.protos.Schema(type=schema_type.STRING),
                description="Array of item IDs that make up the recommended outfit",
            ),
            "styling_advice": genai.protos.Schema(
                type=schema_type.STRING,
                description="Styling tips and advice for wearing this outfit",
            ),
            "weather_rationale": genai.protos.Schema(
                type=schema_type.STRING,
                description="Explanation of why this outfit is appropriate for the current weather conditions",
            ),
        },
        required=["outfit_ids", "styling_advice", "weather_rationale"],
    )


def convert_to_closet_items(
    items: Sequence[ClothingItem], wear_logs_by_item: Mapping[str, Sequence[WearLog]]
) -> List[ClosetItem]:
    """Summarise items with wear count and last worn date (creation date if never worn)."""

    closet = []
    for item in items:
        logs = wear_logs_by_item.get(item.item_id, [])
        latest = latest_wear_log(logs)
        closet.append(
            ClosetItem(
                id=item.item_id,
                name=item.name,
                category=item.category,
                wear_count=len(logs),
                last_worn=latest.wear_date if latest else item.created_at,
                tags=list(item.tags),
            )
        )
    return closet


def build_prompt(inventory: Sequence[ClosetItem], weather: WeatherReading) -> str:
    inventory_summary = "\n".join(
        f"ID: {item.id}, Name: {item.name}, Category: {item.category}, "
        f"Worn: {item.wear_count} times, Last worn: {item.last_worn}, Tags: {', '.join(item.tags)}"
        for item in inventory
    )
    return (
        "Current Weather Conditions:\n"
        f"- Temperature: {weather.temperature}°F (feels like {weather.feels_like}°F)\n"
        f"- Conditions: {weather.description}\n"
        f"- Humidity: {weather.humidity}%\n"
        f"- Wind Speed: {weather.wind_speed} mph\n\n"
        "Available Closet Items:\n"
        f"{inventory_summary}\n\n"
        "Based on the weather conditions and prioritizing forgotten items (low wear_count, old last_worn), "
        "suggest a complete, weather-appropriate outfit. Include styling advice and explain why this "
        "outfit works for the current weather."
    )


def parse_recommendation(text: str) -> OutfitRecommendation:
    try:
        return OutfitRecommendation.model_validate(json.loads(text))
    except json.JSONDecodeError as exc:
        raise MalformedRecommendationError("Failed to parse AI response. Please try again.") from exc
    except ValidationError as exc:
        raise MalformedRecommendationError(
            "Invalid response format: outfit_ids, styling_advice or weather_rationale missing"
        ) from exc


class GeminiOutfitAdvisor(OutfitSuggester[OutfitRecommendation]):
    """Asks Gemini for a single outfit built around under-worn items."""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None,
        model_name: str = DEFAULT_GEMINI_MODEL,
        model_factory: Callable[[], Any] | None = None,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self._model_factory = model_factory or self._build_model
        self._model: Any = None

    def _build_model(self) -> genai.GenerativeModel:
        genai.configure(api_key=self.api_key)
        return genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=SYSTEM_INSTRUCTION,
            generation_config=genai.GenerationConfig(
                response_mime_type="application/json",
                response_schema=_response_schema(),
                **GENERATION_SETTINGS,
            ),
        )

    @property
    def model(self) -> Any:
        if self._model is None:
            self._model = self._model_factory()
        return self._model

    def suggest(
        self,
        items: Sequence[ClothingItem],
        weather: WeatherReading,
        wear_logs_by_item: Mapping[str, Sequence[WearLog]],
    ) -> OutfitRecommendation:
        return self.suggest_from_closet(convert_to_closet_items(items, wear_logs_by_item), weather)

    @instrument_tool("suggest_outfit_ai", expected_errors=(AdvisorError,))
    def suggest_from_closet(self, inventory: Sequence[ClosetItem], weather: WeatherReading) -> OutfitRecommendation:
        if not self.api_key:
            raise AdvisorConfigurationError(
                "Gemini API key not configured. Set GEMINI_API_KEY in the environment."
            )
        if not inventory:
            raise EmptyInventoryError("Inventory is empty. Cannot suggest outfits.")

        prompt = build_prompt(inventory, weather)
        try:
            model = self.model
            response = model.generate_content(prompt)
            text = response.text
        except (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied) as exc:
            raise AdvisorConfigurationError(
                "Invalid Gemini API key. Please check your GEMINI_API_KEY."
            ) from exc
        except (google_exceptions.GoogleAPIError, ValueError) as exc:
            if "api key" in str(exc).lower():
                raise AdvisorConfigurationError(
                    "Invalid Gemini API key. Please check your GEMINI_API_KEY."
                ) from exc
            raise AdvisorError(f"Failed to generate outfit suggestion: {exc}") from exc
        except Exception as exc:
            # Blocked prompts, SDK setup failures and the like.
            raise AdvisorError(f"Failed to generate outfit suggestion: {exc}") from exc

        recommendation = parse_recommendation(text)
        known_ids = {item.id for item in inventory}
        unknown = [item_id for item_id in recommendation.outfit_ids if item_id not in known_ids]
        if unknown:
            LOGGER.warning("AI recommendation references unknown item ids: %s", unknown)
        return recommendation


__all__ = [
    "AdvisorError",
    "AdvisorConfigurationError",
    "EmptyInventoryError",
    "MalformedRecommendationError",
    "ClosetItem",
    "OutfitRecommendation",
    "GeminiOutfitAdvisor",
    "SYSTEM_INSTRUCTION",
    "build_prompt",
    "convert_to_closet_items",
    "parse_recommendation",
]
