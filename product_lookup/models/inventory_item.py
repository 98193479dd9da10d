# product_lookup/models/inventory_item.py

"""Local inventory row as stored by the shopkeeper."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class InventoryItem:
    """A single item in the shop's own catalog, keyed by barcode."""

    barcode: str
    name: str
    shop_id: str = "default"
    brand: str = ""
    price: float | None = None
    category: str = ""
    description: str = ""
    image_url: str = ""
    in_stock: bool = True
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
