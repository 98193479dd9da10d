# tests/test_open_library_probe.py

"""Tests for the Open Library probe using mocked HTTP responses."""

import json
import unittest
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

from product_lookup.models.product import ProductSource
from product_lookup.probes.open_library_probe import OpenLibraryProbe

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestOpenLibraryProbe(unittest.TestCase):
    """Tests for the Open Library probe using mocked HTTP responses."""

    def setUp(self) -> None:
        self.probe = OpenLibraryProbe()
        self.probe.session = MagicMock()

    def _respond(self, payload: Any) -> None:
        mock_resp = MagicMock()
        mock_resp.status_code = 200
        mock_resp.text = json.dumps(payload)
        self.probe.session.get.return_value = mock_resp

    def _fixture(self) -> dict[str, Any]:
        with open(FIXTURES_DIR / "openlibrary_matilda.json") as f:
            data: dict[str, Any] = json.load(f)
        return data

    def test_bibkey(self) -> None:
        """The barcode is keyed as an ISBN bibkey."""
        self.assertEqual(
            OpenLibraryProbe.bibkey("9780140328721"),
            "ISBN:9780140328721",
        )

    def test_url(self) -> None:
        """The books API is asked for jscmd=data JSON."""
        self._respond({})
        self.probe.probe("9780140328721")
        self.assertEqual(
            self.probe.session.get.call_args[0][0],
            "https://openlibrary.org/api/books"
            "?bibkeys=ISBN:9780140328721&format=json&jscmd=data",
        )

    def test_matilda(self) -> None:
        """A keyed entry is normalized into a books record."""
        self._respond(self._fixture())
        record = self.probe.probe("9780140328721")
        assert record is not None
        self.assertEqual(record.name, "Matilda")
        self.assertEqual(record.brand, "Roald Dahl, Quentin Blake")
        self.assertEqual(record.category, "books")
        self.assertEqual(record.description, "A Puffin Book")
        self.assertEqual(
            record.image_url,
            "https://covers.openlibrary.org/b/id/8739161-M.jpg",
        )
        self.assertIs(record.source, ProductSource.OPEN_LIBRARY)

    def test_large_cover_fallback(self) -> None:
        """Without a medium cover the large one is used."""
        payload = self._fixture()
        del payload["ISBN:9780140328721"]["cover"]["medium"]
        self._respond(payload)
        record = self.probe.probe("9780140328721")
        assert record is not None
        self.assertEqual(
            record.image_url,
            "https://covers.openlibrary.org/b/id/8739161-L.jpg",
        )

    def test_no_cover(self) -> None:
        """A book without covers has an empty image URL."""
        payload = self._fixture()
        del payload["ISBN:9780140328721"]["cover"]
        self._respond(payload)
        record = self.probe.probe("9780140328721")
        assert record is not None
        self.assertEqual(record.image_url, "")

    def test_author_not_a_list(self) -> None:
        """A lone author object or string is not split apart."""
        payload = self._fixture()
        book = payload["ISBN:9780140328721"]
        book["authors"] = {"name": "Roald Dahl"}
        self._respond(payload)
        record = self.probe.probe("9780140328721")
        assert record is not None
        self.assertEqual(record.brand, "Roald Dahl")

        book["authors"] = "Roald Dahl"
        self._respond(payload)
        record = self.probe.probe("9780140328721")
        assert record is not None
        self.assertEqual(record.brand, "Roald Dahl")

    def test_empty_object_is_miss(self) -> None:
        """The API answers {} for unknown ISBNs."""
        self._respond({})
        self.assertIsNone(self.probe.probe("0000000000000"))

    def test_other_key_is_miss(self) -> None:
        """Only the entry for this barcode's bibkey counts."""
        self._respond(self._fixture())
        self.assertIsNone(self.probe.probe("9780000000000"))


if __name__ == "__main__":
    unittest.main()
