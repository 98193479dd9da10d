# product_lookup/models/product.py

"""Normalized product record returned by every barcode lookup."""

from dataclasses import dataclass
from enum import Enum


class ProductSource(str, Enum):
    """Origin of a resolved product record."""

    LOCAL = "local"
    OPEN_FOOD_FACTS = "openfoodfacts"
    OPEN_BEAUTY_FACTS = "openbeautyfacts"
    OPEN_PRODUCTS_FACTS = "openproductsfacts"
    GOOGLE_BOOKS = "googlebooks"
    OPEN_LIBRARY = "openlibrary"
    MANUAL = "manual"


CATEGORY_FOOD = "food"
CATEGORY_PERSONAL_CARE = "personal care"
CATEGORY_OTHER = "other"
CATEGORY_BOOKS = "books"

CATEGORY_TAXONOMY: tuple[str, ...] = (
    CATEGORY_FOOD,
    CATEGORY_PERSONAL_CARE,
    CATEGORY_OTHER,
    CATEGORY_BOOKS,
)


@dataclass(frozen=True)
class ProductRecord:
    """One product as resolved from local inventory or a catalog.

    ``found=False`` records are the manual-entry sentinel: they carry
    ``source=MANUAL`` and nothing else.
    """

    name: str
    source: ProductSource
    found: bool
    brand: str = ""
    price: float | None = None
    category: str = ""
    description: str = ""
    image_url: str = ""

    def __post_init__(self) -> None:
        if self.price is not None and self.price < 0:
            msg = f"price must be non-negative, got {self.price}"
            raise ValueError(msg)
        if self.found:
            if not self.name.strip():
                msg = "a found record needs a non-empty name"
                raise ValueError(msg)
            if self.source is ProductSource.MANUAL:
                msg = "a found record cannot come from manual entry"
                raise ValueError(msg)
            return
        if self.source is not ProductSource.MANUAL or any(
            (
                self.name,
                self.brand,
                self.category,
                self.description,
                self.image_url,
                self.price is not None,
            )
        ):
            msg = "a not-found record must be the empty manual sentinel"
            raise ValueError(msg)

    @classmethod
    def not_found(cls) -> "ProductRecord":
        """Build the manual-entry sentinel for a total miss."""
        return cls(name="", source=ProductSource.MANUAL, found=False)

    def to_dict(self) -> dict[str, object]:
        """Serialise to the JSON shape consumed by the app."""
        return {
            "name": self.name,
            "brand": self.brand,
            "price": self.price,
            "category": self.category,
            "description": self.description,
            "imageUrl": self.image_url,
            "source": self.source.value,
            "found": self.found,
        }
