# product_lookup/probes/google_books_probe.py

"""Probe for the Google Books volumes search API."""

import urllib.parse
from typing import Any

from product_lookup.models.product import CATEGORY_BOOKS, ProductSource
from product_lookup.probes.base_probe import BaseProbe


class GoogleBooksProbe(BaseProbe):
    """Book metadata via ``volumes?q=isbn:<barcode>``.

    The barcode is treated as an ISBN.  A hit is a non-empty
    ``items`` list; only the first volume is used.
    """

    source = ProductSource.GOOGLE_BOOKS
    SEARCH_API = "https://www.googleapis.com/books/v1/volumes?q=isbn:{isbn}"

    def _build_url(self, barcode: str) -> str:
        return self.SEARCH_API.format(
            isbn=urllib.parse.quote(barcode, safe="")
        )

    def _parse(
        self, payload: Any, barcode: str,
    ) -> dict[str, Any] | None:
        items: list[dict[str, Any]] = payload.get("items") or []
        if not items:
            return None

        book: dict[str, Any] = items[0].get("volumeInfo") or {}
        authors = book.get("authors") or []
        if not isinstance(authors, list):
            authors = [authors]
        image_links: dict[str, Any] = book.get("imageLinks") or {}

        return {
            "name": self.text(book.get("title")),
            "brand": ", ".join(self.text(a) for a in authors),
            "category": CATEGORY_BOOKS,
            "description": self.text(book.get("description")),
            "image_url": self.text(image_links.get("thumbnail")),
        }
