# product_lookup/probes/open_library_probe.py

"""Probe for the Open Library books API."""

import urllib.parse
from typing import Any

from product_lookup.models.product import CATEGORY_BOOKS, ProductSource
from product_lookup.probes.base_probe import BaseProbe


class OpenLibraryProbe(BaseProbe):
    """Book metadata keyed by ``ISBN:<barcode>``.

    The response is an object keyed by bibkey; a missing key is a
    miss.  Covers come in small/medium/large, medium is preferred.
    """

    source = ProductSource.OPEN_LIBRARY
    BOOKS_API = (
        "https://openlibrary.org/api/books"
        "?bibkeys={bibkey}&format=json&jscmd=data"
    )

    @staticmethod
    def bibkey(barcode: str) -> str:
        """Return the Open Library bibkey for an ISBN barcode."""
        return f"ISBN:{barcode}"

    def _build_url(self, barcode: str) -> str:
        return self.BOOKS_API.format(
            bibkey=urllib.parse.quote(self.bibkey(barcode), safe=":")
        )

    def _parse(
        self, payload: Any, barcode: str,
    ) -> dict[str, Any] | None:
        book: dict[str, Any] | None = payload.get(self.bibkey(barcode))
        if not book:
            return None

        authors = book.get("authors") or []
        if not isinstance(authors, list):
            authors = [authors]
        cover: dict[str, Any] = book.get("cover") or {}
        image_url = self.text(cover.get("medium")) or self.text(
            cover.get("large")
        )

        return {
            "name": self.text(book.get("title")),
            "brand": ", ".join(
                self.text(a.get("name") if isinstance(a, dict) else a)
                for a in authors
            ),
            "category": CATEGORY_BOOKS,
            "description": self.text(book.get("subtitle")),
            "image_url": image_url,
        }
