"""Clothing item and wear log data models and helpers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from logic.date_math import parse_timestamp, utc_now_iso
from models.taxonomy import normalise_tags, validate_category


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _clean_strings(values: Iterable[Any]) -> List[str]:
    return [str(value).strip() for value in values if str(value).strip()]


@dataclass
class ClothingItem:
    """Represents a cataloged piece of clothing."""

    item_id: str
    name: str
    category: str
    purchase_price: float
    purchase_date: str
    photo_uri: str = ""
    colors: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    brand: Optional[str] = None
    size: Optional[str] = None
    material: Optional[str] = None
    care_instructions: Optional[str] = None
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    def __post_init__(self) -> None:
        self.category = validate_category(self.category)
        self.purchase_price = float(self.purchase_price)
        if self.purchase_price < 0:
            raise ValueError(f"purchase_price must be non-negative, got {self.purchase_price}")
        self.colors = _clean_strings(_ensure_list(self.colors))
        self.tags = normalise_tags(_ensure_list(self.tags))


@dataclass(frozen=True)
class WearLog:
    """A single wear event for an item. Never mutated once logged."""

    log_id: str
    item_id: str
    wear_date: str


_FIELD_ALIASES = {
    "id": "item_id",
    "itemId": "item_id",
    "purchasePrice": "purchase_price",
    "purchaseDate": "purchase_date",
    "photoUri": "photo_uri",
    "careInstructions": "care_instructions",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def _canonical_keys(metadata: Dict[str, Any]) -> Dict[str, Any]:
    return {_FIELD_ALIASES.get(key, key): value for key, value in metadata.items()}


def from_raw_metadata(metadata: Dict[str, Any], now: datetime | None = None) -> ClothingItem:
    """Factory to build a :class:`ClothingItem` from loose catalog-entry data.

    Accepts camelCase or snake_case keys. A missing id is generated.
    """

    data = _canonical_keys(metadata)
    required_fields = ["name", "category", "purchase_date"]
    missing = [name for name in required_fields if not data.get(name)]
    if data.get("purchase_price") is None:
        missing.append("purchase_price")
    if missing:
        raise ValueError(f"Missing required fields for ClothingItem: {missing}")

    purchased = parse_timestamp(data["purchase_date"])
    if purchased is None:
        raise ValueError(f"Unparseable purchase_date: {data['purchase_date']!r}")
    reference = now or datetime.now(timezone.utc)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)
    if purchased > reference:
        raise ValueError("purchase_date cannot be in the future")

    timestamp = reference.isoformat()
    return ClothingItem(
        item_id=str(data.get("item_id") or uuid.uuid4().hex),
        name=str(data["name"]).strip(),
        category=str(data["category"]),
        purchase_price=float(data["purchase_price"]),
        purchase_date=str(data["purchase_date"]),
        photo_uri=str(data.get("photo_uri") or ""),
        colors=_ensure_list(data.get("colors")),
        tags=_ensure_list(data.get("tags")),
        brand=data.get("brand") or None,
        size=data.get("size") or None,
        material=data.get("material") or None,
        care_instructions=data.get("care_instructions") or None,
        created_at=str(data.get("created_at") or timestamp),
        updated_at=str(data.get("updated_at") or timestamp),
    )


def new_wear_log(item_id: str, worn_at: datetime | str | None = None) -> WearLog:
    """Create a wear log for ``item_id``; defaults to the current UTC time."""

    if worn_at is None:
        wear_date = utc_now_iso()
    elif isinstance(worn_at, datetime):
        wear_date = worn_at.isoformat()
    else:
        wear_date = str(worn_at)
    return WearLog(log_id=uuid.uuid4().hex, item_id=item_id, wear_date=wear_date)


__all__ = ["ClothingItem", "WearLog", "from_raw_metadata", "new_wear_log"]
