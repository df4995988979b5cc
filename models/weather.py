"""Weather snapshot consumed by the suggestion engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherReading:
    """Current conditions in imperial units (degrees Fahrenheit, mph)."""

    temperature: float
    feels_like: float
    description: str
    icon: str = ""
    humidity: float = 0.0
    wind_speed: float = 0.0
