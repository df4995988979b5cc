"""Gemini advisory stylist with an injected fake model."""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, List

import pytest
from google.api_core import exceptions as google_exceptions

from agents.outfit_advisor import (
    AdvisorConfigurationError,
    AdvisorError,
    EmptyInventoryError,
    GeminiOutfitAdvisor,
    MalformedRecommendationError,
    OutfitRecommendation,
    convert_to_closet_items,
)
from models.clothing_item import ClothingItem, WearLog
from models.weather import WeatherReading

WEATHER = WeatherReading(
    temperature=50.0, feels_like=47.0, description="overcast clouds", icon="04d", humidity=70, wind_speed=9.0
)
VALID_RESPONSE = {
    "outfit_ids": ["top-1", "bottom-1"],
    "styling_advice": "Tuck the shirt in loosely.",
    "weather_rationale": "Layers keep you warm on a cool day.",
}


class _FakeModel:
    def __init__(self, result: Any) -> None:
        self.result = result
        self.prompts: List[str] = []

    def generate_content(self, prompt: str) -> SimpleNamespace:
        self.prompts.append(prompt)
        if isinstance(self.result, Exception):
            raise self.result
        return SimpleNamespace(text=self.result)


def _items() -> List[ClothingItem]:
    return [
        ClothingItem(
            item_id="top-1",
            name="Oxford Shirt",
            category="tops",
            purchase_price=45,
            purchase_date="2024-03-01",
            tags=["casual"],
            created_at="2024-03-02T09:00:00+00:00",
        ),
        ClothingItem(
            item_id="bottom-1",
            name="Chinos",
            category="bottoms",
            purchase_price=60,
            purchase_date="2024-01-10",
            created_at="2024-01-11T09:00:00+00:00",
        ),
    ]


def _logs() -> dict:
    return {
        "top-1": [],
        "bottom-1": [
            WearLog(log_id="l1", item_id="bottom-1", wear_date="2025-04-01T08:00:00+00:00"),
            WearLog(log_id="l2", item_id="bottom-1", wear_date="2025-05-20T08:00:00+00:00"),
            WearLog(log_id="l3", item_id="bottom-1", wear_date="2025-02-11T08:00:00+00:00"),
        ],
    }


def _advisor(result: Any, api_key: str | None = "gemini-key") -> tuple[GeminiOutfitAdvisor, _FakeModel]:
    model = _FakeModel(result)
    return GeminiOutfitAdvisor(api_key=api_key, model_factory=lambda: model), model


def test_convert_to_closet_items_uses_latest_wear_or_creation_date() -> None:
    closet = convert_to_closet_items(_items(), _logs())

    assert closet[0].wear_count == 0
    assert closet[0].last_worn == "2024-03-02T09:00:00+00:00"
    assert closet[1].wear_count == 3
    assert closet[1].last_worn == "2025-05-20T08:00:00+00:00"


def test_successful_recommendation_and_prompt_contents() -> None:
    advisor, model = _advisor(json.dumps(VALID_RESPONSE))

    recommendation = advisor.suggest(_items(), WEATHER, _logs())

    assert recommendation == OutfitRecommendation(**VALID_RESPONSE)
    prompt = model.prompts[0]
    assert "Temperature: 50.0°F (feels like 47.0°F)" in prompt
    assert "ID: top-1, Name: Oxford Shirt, Category: tops, Worn: 0 times" in prompt
    assert "Worn: 3 times, Last worn: 2025-05-20T08:00:00+00:00" in prompt


def test_missing_credential_fails_without_building_a_model() -> None:
    built = []
    advisor = GeminiOutfitAdvisor(api_key=None, model_factory=lambda: built.append(1))

    with pytest.raises(AdvisorConfigurationError):
        advisor.suggest(_items(), WEATHER, _logs())
    assert built == []


def test_empty_inventory_is_rejected() -> None:
    advisor, model = _advisor(json.dumps(VALID_RESPONSE))

    with pytest.raises(EmptyInventoryError):
        advisor.suggest([], WEATHER, {})
    assert model.prompts == []


@pytest.mark.parametrize(
    "text",
    [
        "not json at all",
        json.dumps({"outfit_ids": "top-1", "styling_advice": "x", "weather_rationale": "y"}),
        json.dumps({"outfit_ids": ["top-1"], "styling_advice": "", "weather_rationale": "y"}),
        json.dumps({"outfit_ids": ["top-1"], "styling_advice": "x"}),
    ],
)
def test_malformed_responses_raise(text: str) -> None:
    advisor, _ = _advisor(text)

    with pytest.raises(MalformedRecommendationError):
        advisor.suggest(_items(), WEATHER, _logs())


def test_rejected_credential_maps_to_configuration_error() -> None:
    advisor, _ = _advisor(google_exceptions.PermissionDenied("API key not valid"))

    with pytest.raises(AdvisorConfigurationError):
        advisor.suggest(_items(), WEATHER, _logs())


def test_other_model_failures_are_advisor_errors() -> None:
    advisor, _ = _advisor(google_exceptions.ServiceUnavailable("overloaded"))

    with pytest.raises(AdvisorError) as excinfo:
        advisor.suggest(_items(), WEATHER, _logs())
    assert not isinstance(excinfo.value, (AdvisorConfigurationError, MalformedRecommendationError))
    assert "Failed to generate outfit suggestion" in str(excinfo.value)


def test_model_construction_failure_is_an_advisor_error() -> None:
    def broken_factory() -> Any:
        raise RuntimeError("could not configure client")

    advisor = GeminiOutfitAdvisor(api_key="gemini-key", model_factory=broken_factory)

    with pytest.raises(AdvisorError, match="could not configure client"):
        advisor.suggest(_items(), WEATHER, _logs())
