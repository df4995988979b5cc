"""Current-weather provider abstractions and the OpenWeather implementation."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, List

import requests
from pydantic import BaseModel, Field, ValidationError

from models.weather import WeatherReading
from tools.observability import instrument_tool

LOGGER = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_CACHE_TTL_SECONDS = 30 * 60
_PLACEHOLDER_KEYS = {"your_key_here"}


class WeatherError(Exception):
    """Base class for weather lookup failures."""


class WeatherConfigurationError(WeatherError):
    """No usable API credential is configured."""


class WeatherAuthenticationError(WeatherError):
    """The weather service rejected the credential (HTTP 401)."""


class WeatherLocationNotFoundError(WeatherError):
    """The coordinates were rejected (HTTP 404 or out of range)."""


class WeatherServiceError(WeatherError):
    """Connectivity problems, unexpected status codes or malformed payloads."""


class _Coordinates(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class _Condition(BaseModel):
    description: str = ""
    icon: str = ""


class _Main(BaseModel):
    temp: float
    feels_like: float
    humidity: float = 0.0


class _Wind(BaseModel):
    speed: float = 0.0


class _CurrentWeatherResponse(BaseModel):
    main: _Main
    weather: List[_Condition] = Field(min_length=1)
    wind: _Wind = Field(default_factory=_Wind)


class WeatherCache:
    """Single-entry cache that keeps a reading fresh for ``ttl_seconds``.

    The clock is injectable so freshness can be tested without sleeping.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._reading: WeatherReading | None = None
        self._stored_at = 0.0

    def get(self) -> WeatherReading | None:
        if self._reading is None:
            return None
        if self.clock() - self._stored_at >= self.ttl_seconds:
            return None
        return self._reading

    def set(self, reading: WeatherReading) -> None:
        self._reading = reading
        self._stored_at = self.clock()

    def clear(self) -> None:
        self._reading = None
        self._stored_at = 0.0


class WeatherProvider(ABC):
    """Abstract current-weather interface."""

    @abstractmethod
    def get_current_weather(self, lat: float, lon: float) -> WeatherReading:
        """Return the current weather at the given coordinates."""


class OpenWeatherProvider(WeatherProvider):
    """OpenWeather current-conditions lookup with a time-boxed cache."""

    def __init__(
        self,
        api_key: str | None = None,
        cache: WeatherCache | None = None,
        timeout_seconds: float = 5.0,
        units: str = "imperial",
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.cache = cache or WeatherCache()
        self.timeout_seconds = timeout_seconds
        self.units = units
        self.session = session or requests.Session()

    def _has_usable_key(self) -> bool:
        if not self.api_key:
            return False
        key = self.api_key.strip()
        return bool(key) and key not in _PLACEHOLDER_KEYS

    def get_current_weather(self, lat: float, lon: float) -> WeatherReading:
        cached = self.cache.get()
        if cached is not None:
            LOGGER.debug("Returning cached weather reading")
            return cached

        if not self._has_usable_key():
            raise WeatherConfigurationError(
                "Weather API key not configured. Set OPENWEATHER_API_KEY in the environment."
            )

        try:
            reading = self._fetch(lat=lat, lon=lon)
        except ValidationError as exc:
            raise WeatherLocationNotFoundError("Coordinates out of range.") from exc
        self.cache.set(reading)
        return reading

    @instrument_tool("get_current_weather", input_model=_Coordinates, expected_errors=(WeatherError,))
    def _fetch(self, lat: float, lon: float) -> WeatherReading:
        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": self.units}
        try:
            response = self.session.get(OPENWEATHER_URL, params=params, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            raise WeatherServiceError(
                "Unable to connect to weather service. Please check your internet connection."
            ) from exc

        if response.status_code == 401:
            raise WeatherAuthenticationError("Invalid API key. Please check your OpenWeatherMap API key.")
        if response.status_code == 404:
            raise WeatherLocationNotFoundError("Location not found. Please try again.")
        if not response.ok:
            raise WeatherServiceError(f"Weather API error: {_error_message(response)}")

        try:
            parsed = _CurrentWeatherResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            raise WeatherServiceError("Weather API returned an unexpected payload.") from exc

        condition = parsed.weather[0]
        return WeatherReading(
            temperature=parsed.main.temp,
            feels_like=parsed.main.feels_like,
            description=condition.description,
            icon=condition.icon,
            humidity=parsed.main.humidity,
            wind_speed=parsed.wind.speed,
        )


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return "Unknown error"


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests and demos."""

    def __init__(self, reading: WeatherReading | None = None) -> None:
        self.reading = reading or WeatherReading(
            temperature=68.0,
            feels_like=67.0,
            description="clear sky",
            icon="01d",
            humidity=45.0,
            wind_speed=4.0,
        )
        self.calls = 0

    def get_current_weather(self, lat: float, lon: float) -> WeatherReading:
        self.calls += 1
        return self.reading


__all__ = [
    "WeatherCache",
    "WeatherProvider",
    "OpenWeatherProvider",
    "MockWeatherProvider",
    "WeatherError",
    "WeatherConfigurationError",
    "WeatherAuthenticationError",
    "WeatherLocationNotFoundError",
    "WeatherServiceError",
]
