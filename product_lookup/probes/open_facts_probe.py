# product_lookup/probes/open_facts_probe.py

"""Probes for the Open Food / Beauty / Products Facts family of catalogs."""

from typing import Any

from product_lookup.models.product import (
    CATEGORY_FOOD,
    CATEGORY_OTHER,
    CATEGORY_PERSONAL_CARE,
    ProductSource,
)
from product_lookup.probes.base_probe import BaseProbe


class OpenFactsProbe(BaseProbe):
    """Shared v2 product API used by all Open*Facts catalogs.

    A hit is ``status == 1`` with a ``product`` object present.  An
    unknown barcode comes back as HTTP 404 with ``{"status": 0}``,
    which is parsed like any other answer.
    """

    ANSWER_STATUSES = frozenset({404})
    HOST: str = ""
    CATEGORY: str = CATEGORY_OTHER
    NAME_KEYS: tuple[str, ...] = ("product_name", "product_name_en")
    DESCRIPTION_KEY: str = "ingredients_text"

    # Compared as text: status arrives as 1 or "1"
    FOUND_STATUS = 1

    def _build_url(self, barcode: str) -> str:
        return f"https://{self.HOST}/api/v2/product/{barcode}.json"

    def _pick_name(self, product: dict[str, Any]) -> str:
        for key in self.NAME_KEYS:
            name = self.text(product.get(key))
            if name:
                return name
        return ""

    def _parse(
        self, payload: Any, barcode: str,
    ) -> dict[str, Any] | None:
        status = payload.get("status")
        product = payload.get("product")
        if str(status) != str(self.FOUND_STATUS) or not product:
            return None

        return {
            "name": self._pick_name(product),
            "brand": self.text(product.get("brands")),
            "category": self.CATEGORY,
            "description": self.text(
                product.get(self.DESCRIPTION_KEY)
            ),
            "image_url": self.text(product.get("image_url")),
        }


class OpenFoodFactsProbe(OpenFactsProbe):
    """Food catalog, highest priority external source."""

    source = ProductSource.OPEN_FOOD_FACTS
    HOST = "world.openfoodfacts.org"
    CATEGORY = CATEGORY_FOOD
    NAME_KEYS = ("product_name", "product_name_en", "generic_name")


class OpenBeautyFactsProbe(OpenFactsProbe):
    """Cosmetics and personal-care catalog."""

    source = ProductSource.OPEN_BEAUTY_FACTS
    HOST = "world.openbeautyfacts.org"
    CATEGORY = CATEGORY_PERSONAL_CARE


class OpenProductsFactsProbe(OpenFactsProbe):
    """General household products catalog."""

    source = ProductSource.OPEN_PRODUCTS_FACTS
    HOST = "world.openproductsfacts.org"
    CATEGORY = CATEGORY_OTHER
    DESCRIPTION_KEY = "description"
