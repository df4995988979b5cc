"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.clothing_item import ClothingItem, WearLog, from_raw_metadata, new_wear_log
from models.weather import WeatherReading

__all__ = ["ClothingItem", "WearLog", "WeatherReading", "from_raw_metadata", "new_wear_log"]
