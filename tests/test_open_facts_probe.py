# tests/test_open_facts_probe.py

"""Tests for the Open*Facts probes using mocked HTTP responses."""

import json
import unittest
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

from product_lookup.models.product import ProductSource
from product_lookup.probes.base_probe import SourceUnavailable
from product_lookup.probes.open_facts_probe import (
    OpenBeautyFactsProbe,
    OpenFoodFactsProbe,
    OpenProductsFactsProbe,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _make_mock_response(fixture_name: str) -> MagicMock:
    """Create a mock 200 response from a fixture JSON file."""
    with open(FIXTURES_DIR / fixture_name) as f:
        data = json.load(f)
    mock_resp = MagicMock()
    mock_resp.status_code = 200
    mock_resp.text = json.dumps(data)
    return mock_resp


def _payload_response(payload: dict[str, Any]) -> MagicMock:
    mock_resp = MagicMock()
    mock_resp.status_code = 200
    mock_resp.text = json.dumps(payload)
    return mock_resp


class TestOpenFoodFactsProbe(unittest.TestCase):
    """Food catalog normalization."""

    def setUp(self) -> None:
        self.probe = OpenFoodFactsProbe()
        self.probe.session = MagicMock()

    def test_url(self) -> None:
        """The v2 product endpoint is templated with the barcode."""
        self.probe.session.get.return_value = _make_mock_response(
            "openfacts_not_found.json"
        )
        self.probe.probe("8901719110023")
        self.assertEqual(
            self.probe.session.get.call_args[0][0],
            "https://world.openfoodfacts.org/api/v2/product/"
            "8901719110023.json",
        )

    def test_found_fields(self) -> None:
        """A status-1 product is normalized into a food record."""
        self.probe.session.get.return_value = _make_mock_response(
            "openfoodfacts_marie_gold.json"
        )
        record = self.probe.probe("8901719110023")
        assert record is not None
        # product_name is blank, so product_name_en is used
        self.assertEqual(record.name, "Marie Gold Biscuits")
        self.assertEqual(record.brand, "Britannia")
        self.assertEqual(record.category, "food")
        self.assertIn("Wheat flour", record.description)
        self.assertTrue(record.image_url.endswith("front_en.jpg"))
        self.assertIs(record.source, ProductSource.OPEN_FOOD_FACTS)
        self.assertTrue(record.found)
        self.assertIsNone(record.price)

    def test_generic_name_fallback(self) -> None:
        """Without localized names the generic name is used."""
        self.probe.session.get.return_value = _payload_response(
            {"status": 1, "product": {"generic_name": "Tea biscuits"}}
        )
        record = self.probe.probe("1")
        assert record is not None
        self.assertEqual(record.name, "Tea biscuits")

    def test_string_status(self) -> None:
        """A status sent as the string "1" still counts as found."""
        self.probe.session.get.return_value = _payload_response(
            {"status": "1", "product": {"product_name": "Tea"}}
        )
        self.assertIsNotNone(self.probe.probe("1"))

    def test_status_zero_is_miss(self) -> None:
        """status 0 is a clean miss."""
        self.probe.session.get.return_value = _make_mock_response(
            "openfacts_not_found.json"
        )
        self.assertIsNone(self.probe.probe("0000000000000"))

    def test_found_status_without_product_is_miss(self) -> None:
        """status 1 with no product object is a miss."""
        self.probe.session.get.return_value = _payload_response(
            {"status": 1}
        )
        self.assertIsNone(self.probe.probe("1"))

    def test_found_without_any_name_is_miss(self) -> None:
        """A product with no usable name is a miss."""
        self.probe.session.get.return_value = _payload_response(
            {"status": 1, "product": {"brands": "Acme"}}
        )
        self.assertIsNone(self.probe.probe("1"))

    def test_http_404_not_found_body_is_miss(self) -> None:
        """Unknown barcodes answer 404 with status 0, a clean miss."""
        resp = MagicMock()
        resp.status_code = 404
        resp.text = json.dumps(
            {"status": 0, "status_verbose": "product not found"}
        )
        self.probe.session.get.return_value = resp
        with self.assertNoLogs("product_lookup", "WARNING"):
            self.assertIsNone(self.probe.probe("0000000000000"))

    def test_http_404_without_json_is_unavailable(self) -> None:
        """A 404 that is not the catalog's JSON answer is a failure."""
        resp = MagicMock()
        resp.status_code = 404
        resp.text = "<html>Not Found</html>"
        self.probe.session.get.return_value = resp
        with self.assertRaises(SourceUnavailable):
            self.probe.probe("1")

    def test_http_500_is_unavailable(self) -> None:
        """Other HTTP errors surface as SourceUnavailable."""
        resp = MagicMock()
        resp.status_code = 500
        resp.text = ""
        self.probe.session.get.return_value = resp
        with self.assertRaises(SourceUnavailable):
            self.probe.probe("1")


class TestOpenBeautyFactsProbe(unittest.TestCase):
    """Beauty catalog normalization."""

    def setUp(self) -> None:
        self.probe = OpenBeautyFactsProbe()
        self.probe.session = MagicMock()

    def test_found_fields(self) -> None:
        """Beauty hits get the personal care category."""
        self.probe.session.get.return_value = _make_mock_response(
            "openbeautyfacts_nivea.json"
        )
        record = self.probe.probe("4005808155852")
        assert record is not None
        self.assertEqual(record.name, "Nivea Creme")
        self.assertEqual(record.brand, "Nivea,Beiersdorf")
        self.assertEqual(record.category, "personal care")
        self.assertIs(record.source, ProductSource.OPEN_BEAUTY_FACTS)
        self.assertIn(
            "world.openbeautyfacts.org",
            self.probe.session.get.call_args[0][0],
        )

    def test_generic_name_not_used(self) -> None:
        """Only the food catalog falls back to generic_name."""
        self.probe.session.get.return_value = _payload_response(
            {"status": 1, "product": {"generic_name": "Cream"}}
        )
        self.assertIsNone(self.probe.probe("1"))


class TestOpenProductsFactsProbe(unittest.TestCase):
    """General products catalog normalization."""

    def setUp(self) -> None:
        self.probe = OpenProductsFactsProbe()
        self.probe.session = MagicMock()

    def test_found_fields(self) -> None:
        """General hits use the description field and 'other'."""
        self.probe.session.get.return_value = _make_mock_response(
            "openproductsfacts_bulb.json"
        )
        record = self.probe.probe("8718699673444")
        assert record is not None
        self.assertEqual(record.name, "LED Bulb 9W E27")
        self.assertEqual(record.brand, "Philips")
        self.assertEqual(record.category, "other")
        self.assertEqual(
            record.description, "Warm white LED bulb, 806 lumen"
        )
        self.assertIs(
            record.source, ProductSource.OPEN_PRODUCTS_FACTS
        )


if __name__ == "__main__":
    unittest.main()
