"""Console entrypoint: print insights and outfit suggestions for a wardrobe."""

import argparse
import json
from dataclasses import asdict

from agents.stylist import StylistAgent
from logic.item_analytics import group_wear_logs_by_item, summarize_wardrobe
from models.weather import WeatherReading
from tools.demo_data import generate_demo_wardrobe
from tools.weather_provider import MockWeatherProvider
from wearwise_app.app import WearWiseApp
from wearwise_app.logging_config import configure_logging


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="WearWise wardrobe insights and outfit suggestions")
    parser.add_argument("--demo", action="store_true", help="Use a generated demo wardrobe and mock weather")
    parser.add_argument("--lat", type=float, default=40.7128)
    parser.add_argument("--lon", type=float, default=-74.0060)
    parser.add_argument("--temp", type=float, default=50.0, help="Mock temperature in F for --demo")
    parser.add_argument("--description", default="clear sky", help="Mock conditions for --demo")
    return parser.parse_args()


def _render(summary, suggestions) -> dict:
    return {
        "insights": {
            "total_items": summary.total_items,
            "total_wears": summary.total_wears,
            "total_spent": round(summary.total_spent, 2),
            "avg_cost_per_wear": round(summary.avg_cost_per_wear, 2),
            "stagnant": [item.name for item in summary.stagnant_items[:5]],
            "most_worn": [item.name for item in summary.most_worn],
        },
        "weather": asdict(suggestions.weather) if suggestions.weather else suggestions.weather_error,
        "outfits": [
            {
                "items": [item.name for item in outfit.items],
                "score": round(outfit.score, 3),
                "reason": outfit.reason,
                "avg_cost_per_wear": round(outfit.avg_cost_per_wear, 2),
            }
            for outfit in suggestions.outfits
        ],
        "advisory": suggestions.advisory.model_dump() if suggestions.advisory else suggestions.advisory_error,
    }


def main() -> None:
    args = _parse_args()
    if args.demo:
        configure_logging("WARNING")
        items, logs = generate_demo_wardrobe()
        reading = WeatherReading(
            temperature=args.temp, feels_like=args.temp, description=args.description
        )
        stylist = StylistAgent(weather_provider=MockWeatherProvider(reading))
        suggestions = stylist.daily_suggestions(
            items, group_wear_logs_by_item(items, logs), lat=args.lat, lon=args.lon
        )
        summary = summarize_wardrobe(items, logs)
    else:
        app = WearWiseApp()
        summary = app.insights()
        suggestions = app.daily_suggestions(lat=args.lat, lon=args.lon)
    print(json.dumps(_render(summary, suggestions), indent=2))


if __name__ == "__main__":
    main()
