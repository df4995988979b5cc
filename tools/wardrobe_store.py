"""Wardrobe storage abstractions and SQLite implementation."""
from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import closing, contextmanager
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from logic.date_math import utc_now_iso
from models.clothing_item import ClothingItem, WearLog, new_wear_log

logger = logging.getLogger(__name__)


class WardrobeStore:
    """Persistence interface for clothing items and their wear logs."""

    def list_items(self) -> List[ClothingItem]:
        raise NotImplementedError

    def get_item(self, item_id: str) -> Optional[ClothingItem]:
        raise NotImplementedError

    def create_item(self, item: ClothingItem) -> ClothingItem:
        raise NotImplementedError

    def update_item(self, item: ClothingItem) -> Optional[ClothingItem]:
        raise NotImplementedError

    def delete_item(self, item_id: str) -> bool:
        """Delete an item together with its wear logs."""
        raise NotImplementedError

    def list_wear_logs(self) -> List[WearLog]:
        raise NotImplementedError

    def list_wear_logs_for_item(self, item_id: str) -> List[WearLog]:
        raise NotImplementedError

    def create_wear_log(self, log: WearLog) -> WearLog:
        raise NotImplementedError

    def delete_wear_log(self, log_id: str) -> bool:
        raise NotImplementedError

    def log_wear(self, item_id: str, worn_at: datetime | str | None = None) -> WearLog:
        return self.create_wear_log(new_wear_log(item_id, worn_at))


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store. Deleting an item cascades to its wear logs."""

    def __init__(self, database_path: str | Path = "data/wearwise.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit (or roll back) one unit of work and always close the connection."""

        with closing(self._connect()) as conn, conn:
            yield conn

    def _ensure_tables(self) -> None:
        with self._transaction() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS clothing_items (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    category TEXT NOT NULL,
                    brand TEXT,
                    size TEXT,
                    colors TEXT,
                    material TEXT,
                    purchase_price REAL NOT NULL,
                    purchase_date TEXT NOT NULL,
                    photo_uri TEXT NOT NULL,
                    care_instructions TEXT,
                    tags TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                CREATE TABLE IF NOT EXISTS wear_logs (
                    id TEXT PRIMARY KEY,
                    item_id TEXT NOT NULL,
                    wear_date TEXT NOT NULL,
                    FOREIGN KEY (item_id) REFERENCES clothing_items(id) ON DELETE CASCADE
                );
                CREATE INDEX IF NOT EXISTS idx_wear_logs_item_id ON wear_logs(item_id);
                CREATE INDEX IF NOT EXISTS idx_wear_logs_wear_date ON wear_logs(wear_date);
                """
            )

    @staticmethod
    def _serialise_list(values: Optional[List[object]]) -> str:
        return json.dumps(values or [])

    @staticmethod
    def _deserialise_list(raw: str) -> List[object]:
        return json.loads(raw) if raw else []

    def _write_item(self, conn: sqlite3.Connection, item: ClothingItem, verb: str) -> None:
        conn.execute(
            f"""
            {verb} INTO clothing_items (
                id, name, category, brand, size, colors, material, purchase_price,
                purchase_date, photo_uri, care_instructions, tags, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                item.item_id,
                item.name,
                item.category,
                item.brand,
                item.size,
                self._serialise_list(item.colors),
                item.material,
                item.purchase_price,
                item.purchase_date,
                item.photo_uri,
                item.care_instructions,
                self._serialise_list(item.tags),
                item.created_at,
                item.updated_at,
            ),
        )

    def _row_to_item(self, row: sqlite3.Row) -> ClothingItem:
        return ClothingItem(
            item_id=row["id"],
            name=row["name"],
            category=row["category"],
            brand=row["brand"],
            size=row["size"],
            colors=self._deserialise_list(row["colors"]),
            material=row["material"],
            purchase_price=row["purchase_price"],
            purchase_date=row["purchase_date"],
            photo_uri=row["photo_uri"],
            care_instructions=row["care_instructions"],
            tags=self._deserialise_list(row["tags"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _row_to_log(row: sqlite3.Row) -> WearLog:
        return WearLog(log_id=row["id"], item_id=row["item_id"], wear_date=row["wear_date"])

    def list_items(self) -> List[ClothingItem]:
        with self._transaction() as conn:
            cursor = conn.execute("SELECT * FROM clothing_items ORDER BY created_at DESC")
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def get_item(self, item_id: str) -> Optional[ClothingItem]:
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM clothing_items WHERE id = ?", (item_id,)).fetchone()
            return self._row_to_item(row) if row else None

    def create_item(self, item: ClothingItem) -> ClothingItem:
        with self._transaction() as conn:
            self._write_item(conn, item, "INSERT")
        logger.info("Created clothing item %s", item.item_id)
        return item

    def update_item(self, item: ClothingItem) -> Optional[ClothingItem]:
        if self.get_item(item.item_id) is None:
            return None
        updated = replace(item, updated_at=utc_now_iso())
        with self._transaction() as conn:
            conn.execute(
                """
                UPDATE clothing_items SET
                    name = ?, category = ?, brand = ?, size = ?, colors = ?, material = ?,
                    purchase_price = ?, purchase_date = ?, photo_uri = ?, care_instructions = ?,
                    tags = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    updated.name,
                    updated.category,
                    updated.brand,
                    updated.size,
                    self._serialise_list(updated.colors),
                    updated.material,
                    updated.purchase_price,
                    updated.purchase_date,
                    updated.photo_uri,
                    updated.care_instructions,
                    self._serialise_list(updated.tags),
                    updated.updated_at,
                    updated.item_id,
                ),
            )
        return updated

    def delete_item(self, item_id: str) -> bool:
        with self._transaction() as conn:
            cursor = conn.execute("DELETE FROM clothing_items WHERE id = ?", (item_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Deleted clothing item %s and its wear logs", item_id)
        return deleted

    def list_wear_logs(self) -> List[WearLog]:
        with self._transaction() as conn:
            cursor = conn.execute("SELECT * FROM wear_logs ORDER BY wear_date DESC")
            return [self._row_to_log(row) for row in cursor.fetchall()]

    def list_wear_logs_for_item(self, item_id: str) -> List[WearLog]:
        with self._transaction() as conn:
            cursor = conn.execute(
                "SELECT * FROM wear_logs WHERE item_id = ? ORDER BY wear_date DESC",
                (item_id,),
            )
            return [self._row_to_log(row) for row in cursor.fetchall()]

    def create_wear_log(self, log: WearLog) -> WearLog:
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO wear_logs (id, item_id, wear_date) VALUES (?, ?, ?)",
                (log.log_id, log.item_id, log.wear_date),
            )
        return log

    def delete_wear_log(self, log_id: str) -> bool:
        with self._transaction() as conn:
            cursor = conn.execute("DELETE FROM wear_logs WHERE id = ?", (log_id,))
            return cursor.rowcount > 0


__all__ = ["WardrobeStore", "SQLiteWardrobeStore"]
