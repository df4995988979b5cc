"""Configuration helpers for the WearWise app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_GEMINI_MODEL = "gemini-flash-latest"
DEFAULT_DB_PATH = "data/wearwise.db"
DEFAULT_WEATHER_CACHE_TTL_SECONDS = 30 * 60
DEFAULT_STAGNANT_THRESHOLD_DAYS = 90


@dataclass
class WearWiseConfig:
    """Configuration values for the WearWise app.

    Credentials are optional: without a weather key no suggestions are made,
    and without a Gemini key the advisory stylist is simply not wired in.
    """

    weather_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    wardrobe_db_path: str = DEFAULT_DB_PATH
    weather_cache_ttl_seconds: float = DEFAULT_WEATHER_CACHE_TTL_SECONDS
    stagnant_threshold_days: int = DEFAULT_STAGNANT_THRESHOLD_DAYS
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "WearWiseConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that secrets can be
        injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("WEARWISE_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        return cls(
            weather_api_key=get_value("openweather_api_key") or None,
            gemini_api_key=get_value("gemini_api_key") or None,
            gemini_model=str(get_value("gemini_model") or DEFAULT_GEMINI_MODEL),
            wardrobe_db_path=str(get_value("wardrobe_db_path") or DEFAULT_DB_PATH),
            weather_cache_ttl_seconds=float(
                get_value("weather_cache_ttl_seconds") or DEFAULT_WEATHER_CACHE_TTL_SECONDS
            ),
            stagnant_threshold_days=int(
                get_value("stagnant_threshold_days") or DEFAULT_STAGNANT_THRESHOLD_DAYS
            ),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal ``key: value`` config file."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
