"""Environment driven configuration and the demo wardrobe generator."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from logic.item_analytics import group_wear_logs_by_item
from models.taxonomy import CATEGORIES
from tools.demo_data import generate_demo_wardrobe
from wearwise_app.config import DEFAULT_DB_PATH, DEFAULT_GEMINI_MODEL, WearWiseConfig

_ENV_KEYS = [
    "APP_ENV",
    "APP_CONFIG_PATH",
    "WEARWISE_CONFIG_DIR",
    "OPENWEATHER_API_KEY",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "WARDROBE_DB_PATH",
    "WEATHER_CACHE_TTL_SECONDS",
    "STAGNANT_THRESHOLD_DAYS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment() -> None:
    config = WearWiseConfig.from_env()

    assert config.weather_api_key is None
    assert config.gemini_api_key is None
    assert config.gemini_model == DEFAULT_GEMINI_MODEL
    assert config.wardrobe_db_path == DEFAULT_DB_PATH
    assert config.weather_cache_ttl_seconds == 1800
    assert config.stagnant_threshold_days == 90


def test_environment_yaml_is_merged_with_env_vars(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "staging.yaml").write_text(
        "# staging settings\n"
        'openweather_api_key: "yaml-weather"\n'
        "gemini_model: gemini-pro\n"
        "stagnant_threshold_days: 60\n"
    )
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("WEARWISE_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("GEMINI_MODEL", "gemini-from-env")

    config = WearWiseConfig.from_env()

    assert config.environment == "staging"
    assert config.weather_api_key == "yaml-weather"
    assert config.gemini_model == "gemini-from-env"
    assert config.stagnant_threshold_days == 60


def test_explicit_config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text("wardrobe_db_path: /tmp/closet.db\nweather_cache_ttl_seconds: 60\n")
    monkeypatch.setenv("APP_CONFIG_PATH", str(path))

    config = WearWiseConfig.from_env()

    assert config.wardrobe_db_path == "/tmp/closet.db"
    assert config.weather_cache_ttl_seconds == 60.0


def test_demo_wardrobe_is_deterministic() -> None:
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    items, logs = generate_demo_wardrobe(count=10, seed=7, now=now)
    again, again_logs = generate_demo_wardrobe(count=10, seed=7, now=now)

    assert items == again
    assert logs == again_logs
    assert {item.category for item in items} == set(CATEGORIES)
    assert all(item.name.startswith(item.brand) for item in items)

    grouped = group_wear_logs_by_item(items, logs)
    assert sum(len(entries) for entries in grouped.values()) == len(logs)
