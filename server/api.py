"""FastAPI server exposing the wardrobe, insights and suggestion endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from agents.stylist import DailySuggestions
from models.analytics import OutfitSuggestion, WardrobeSummary
from models.clothing_item import ClothingItem
from wearwise_app.app import ItemNotFoundError, WearWiseApp
from wearwise_app.logging_config import configure_logging


class ItemRequest(BaseModel):
    """Catalog-entry payload for a clothing item."""

    name: str
    category: str
    purchase_price: float = Field(..., ge=0)
    purchase_date: str = Field(..., description="ISO-8601 purchase date")
    photo_uri: str = ""
    colors: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    brand: str | None = None
    size: str | None = None
    material: str | None = None
    care_instructions: str | None = None


class ItemUpdateRequest(BaseModel):
    name: str | None = None
    category: str | None = None
    purchase_price: float | None = Field(None, ge=0)
    purchase_date: str | None = None
    photo_uri: str | None = None
    colors: List[str] | None = None
    tags: List[str] | None = None
    brand: str | None = None
    size: str | None = None
    material: str | None = None
    care_instructions: str | None = None


class WearRequest(BaseModel):
    worn_at: str | None = Field(None, description="ISO-8601 timestamp; defaults to now")


def _item_payload(item: ClothingItem) -> Dict[str, Any]:
    return asdict(item)


def _outfit_payload(outfit: OutfitSuggestion) -> Dict[str, Any]:
    return {
        "item_ids": outfit.item_ids,
        "items": [_item_payload(item) for item in outfit.items],
        "score": outfit.score,
        "reason": outfit.reason,
        "avg_cost_per_wear": outfit.avg_cost_per_wear,
    }


def _summary_payload(summary: WardrobeSummary) -> Dict[str, Any]:
    return {
        "total_items": summary.total_items,
        "total_wears": summary.total_wears,
        "total_spent": summary.total_spent,
        "avg_cost_per_wear": summary.avg_cost_per_wear,
        "stagnant_item_ids": [item.item_id for item in summary.stagnant_items],
        "most_worn_item_ids": [item.item_id for item in summary.most_worn],
        "item_analytics": [asdict(entry) for entry in summary.item_analytics],
    }


def _suggestions_payload(result: DailySuggestions) -> Dict[str, Any]:
    return {
        "weather": asdict(result.weather) if result.weather else None,
        "outfits": [_outfit_payload(outfit) for outfit in result.outfits],
        "advisory": result.advisory.model_dump() if result.advisory else None,
        "advisory_error": result.advisory_error,
    }


def create_app(wearwise: WearWiseApp | None = None) -> FastAPI:
    """Build the API around a :class:`WearWiseApp` (constructed from env if omitted)."""

    wearwise_app = wearwise or WearWiseApp()
    api = FastAPI(title="WearWise", version="0.1.0")

    def _lookup(item_id: str) -> ClothingItem:
        try:
            return wearwise_app.get_item(item_id)
        except ItemNotFoundError as exc:
            raise HTTPException(status_code=404, detail=f"Item {item_id} not found") from exc

    @api.get("/healthz")
    def healthcheck() -> dict:
        return {"status": "ok", "service": "wearwise", **wearwise_app.describe()}

    @api.get("/items")
    def list_items(category: str | None = None, q: str | None = None) -> list:
        return [_item_payload(item) for item in wearwise_app.list_items(category=category, query=q)]

    @api.post("/items", status_code=201)
    def create_item(request: ItemRequest) -> dict:
        try:
            item = wearwise_app.add_item(request.model_dump())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _item_payload(item)

    @api.get("/items/{item_id}")
    def get_item(item_id: str) -> dict:
        return _item_payload(_lookup(item_id))

    @api.put("/items/{item_id}")
    def update_item(item_id: str, request: ItemUpdateRequest) -> dict:
        _lookup(item_id)
        try:
            item = wearwise_app.update_item(item_id, request.model_dump(exclude_none=True))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _item_payload(item)

    @api.delete("/items/{item_id}", status_code=204)
    def delete_item(item_id: str) -> None:
        _lookup(item_id)
        wearwise_app.delete_item(item_id)

    @api.post("/items/{item_id}/wear", status_code=201)
    def log_wear(item_id: str, request: WearRequest | None = None) -> dict:
        _lookup(item_id)
        try:
            log = wearwise_app.log_wear(item_id, request.worn_at if request else None)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return asdict(log)

    @api.get("/items/{item_id}/analytics")
    def item_analytics(item_id: str) -> dict:
        _lookup(item_id)
        return asdict(wearwise_app.item_analytics(item_id))

    @api.get("/insights")
    def insights() -> dict:
        return _summary_payload(wearwise_app.insights())

    @api.get("/suggestions")
    def suggestions(lat: float = Query(..., ge=-90, le=90), lon: float = Query(..., ge=-180, le=180)) -> dict:
        result = wearwise_app.daily_suggestions(lat=lat, lon=lon)
        if result.weather is None:
            raise HTTPException(status_code=503, detail=result.weather_error or "Weather unavailable")
        return _suggestions_payload(result)

    return api


_app: FastAPI | None = None


def get_app() -> FastAPI:
    """Expose a lazily built FastAPI instance for ASGI servers."""

    global _app
    if _app is None:
        configure_logging()
        _app = create_app()
    return _app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=8080, reload=False)
