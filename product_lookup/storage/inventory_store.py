# product_lookup/storage/inventory_store.py

"""SQLite-backed local inventory: the shop's own barcode catalog."""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any

from product_lookup.config.settings import Settings
from product_lookup.models.inventory_item import InventoryItem
from product_lookup.models.product import ProductRecord

logger = logging.getLogger("product_lookup.inventory")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS items (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    barcode     TEXT    NOT NULL UNIQUE,
    shop_id     TEXT    NOT NULL,
    name        TEXT    NOT NULL,
    brand       TEXT    NOT NULL DEFAULT '',
    price       REAL,
    category    TEXT    NOT NULL DEFAULT '',
    description TEXT    NOT NULL DEFAULT '',
    image_url   TEXT    NOT NULL DEFAULT '',
    in_stock    INTEGER NOT NULL DEFAULT 1,
    created_at  TEXT    NOT NULL,
    updated_at  TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_items_shop ON items(shop_id);
"""

_COLUMNS = (
    "barcode, shop_id, name, brand, price, category, "
    "description, image_url, in_stock, created_at, updated_at"
)


def _row_to_item(row: tuple[Any, ...]) -> InventoryItem:
    """Build an InventoryItem from a row selected with ``_COLUMNS``."""
    price = row[4]
    return InventoryItem(
        barcode=str(row[0]),
        shop_id=str(row[1]),
        name=str(row[2]),
        brand=str(row[3]),
        price=float(price) if price is not None else None,
        category=str(row[5]),
        description=str(row[6]),
        image_url=str(row[7]),
        in_stock=bool(row[8]),
        created_at=datetime.fromisoformat(str(row[9])),
        updated_at=datetime.fromisoformat(str(row[10])),
    )


class InventoryStore:
    """SQLite store for the shopkeeper's items, one row per barcode."""

    def __init__(
        self, db_path: Path | None = None,
    ) -> None:
        path = db_path or Settings.INVENTORY_DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        # Lookups arrive from asyncio.to_thread workers
        self._conn = sqlite3.connect(
            str(path), check_same_thread=False,
        )
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        logger.debug("InventoryStore opened at %s", path)

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # ── Reads ────────────────────────────────────────────

    def lookup_by_barcode(self, barcode: str) -> InventoryItem | None:
        """Return the local item for ``barcode``, or ``None``."""
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM items WHERE barcode = ?",
            (barcode,),
        ).fetchone()
        if row is None:
            return None
        return _row_to_item(row)

    def list_items(self, shop_id: str | None = None) -> list[InventoryItem]:
        """Return all items, optionally for one shop, newest first."""
        if shop_id is None:
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM items ORDER BY updated_at DESC"
            ).fetchall()
        else:
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM items WHERE shop_id = ? "
                "ORDER BY updated_at DESC",
                (shop_id,),
            ).fetchall()
        return [_row_to_item(r) for r in rows]

    # ── Writes ───────────────────────────────────────────

    def upsert_item(self, item: InventoryItem) -> InventoryItem:
        """Insert ``item`` or update the existing row for its barcode.

        ``created_at`` of an existing row is preserved.
        """
        now = datetime.now()
        self._conn.execute(
            f"INSERT INTO items ({_COLUMNS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?) "
            "ON CONFLICT(barcode) DO UPDATE SET "
            "shop_id=excluded.shop_id, name=excluded.name, "
            "brand=excluded.brand, price=excluded.price, "
            "category=excluded.category, "
            "description=excluded.description, "
            "image_url=excluded.image_url, "
            "in_stock=excluded.in_stock, "
            "updated_at=excluded.updated_at",
            (
                item.barcode,
                item.shop_id,
                item.name,
                item.brand,
                item.price,
                item.category,
                item.description,
                item.image_url,
                int(item.in_stock),
                item.created_at.isoformat(),
                now.isoformat(),
            ),
        )
        self._conn.commit()
        logger.info(
            "Saved item %s (%s) for shop %s",
            item.barcode,
            item.name,
            item.shop_id,
        )
        stored = self.lookup_by_barcode(item.barcode)
        if stored is None:
            raise sqlite3.DatabaseError(
                f"Row for {item.barcode} missing after upsert"
            )
        return stored

    def save_product(
        self,
        barcode: str,
        *,
        name: str = "",
        brand: str = "",
        price: float | None = None,
        category: str = "",
        description: str = "",
        image_url: str = "",
        shop_id: str | None = None,
    ) -> bool:
        """Save a product keyed by barcode so later scans hit locally.

        Blank name and category fall back to ``"Unknown Product"`` and
        ``"other"``.  Returns ``False`` instead of raising when the
        write fails.
        """
        item = InventoryItem(
            barcode=barcode,
            name=name.strip() or Settings.MANUAL_DEFAULT_NAME,
            shop_id=shop_id or Settings.DEFAULT_SHOP_ID,
            brand=brand,
            price=price,
            category=category.strip() or Settings.MANUAL_DEFAULT_CATEGORY,
            description=description,
            image_url=image_url,
            in_stock=True,
        )
        try:
            self.upsert_item(item)
        except sqlite3.Error as exc:
            logger.error(
                "Failed to save product %s: %s",
                barcode,
                exc,
                exc_info=True,
            )
            return False
        return True

    def save_record(
        self,
        barcode: str,
        record: ProductRecord,
        shop_id: str | None = None,
    ) -> bool:
        """Persist a resolved catalog record under ``barcode``."""
        return self.save_product(
            barcode,
            name=record.name,
            brand=record.brand,
            price=record.price,
            category=record.category,
            description=record.description,
            image_url=record.image_url,
            shop_id=shop_id,
        )
