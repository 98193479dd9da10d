# product_lookup/config/settings.py

"""Central configuration for the product_lookup resolver."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the product_lookup resolver."""

    # --- HTTP ---
    # Seconds before a catalog call times out
    REQUEST_TIMEOUT: int = int(os.getenv("LOOKUP_REQUEST_TIMEOUT", "10"))
    SLOW_THRESHOLD_MS: float = 5000.0   # Health check "slow" cutoff

    # --- Lookup policy ---
    LOOKUP_CACHE_TTL: float = 600.0     # External hit cache (secs)
    AUTO_SAVE_EXTERNAL_HITS: bool = (
        os.getenv("LOOKUP_AUTO_SAVE", "false").lower() == "true"
    )
    DEFAULT_SHOP_ID: str = os.getenv("LOOKUP_SHOP_ID", "default")
    MANUAL_DEFAULT_NAME: str = "Unknown Product"
    MANUAL_DEFAULT_CATEGORY: str = "other"

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
    INVENTORY_DB_PATH: Path = Path(
        os.getenv(
            "LOOKUP_INVENTORY_DB",
            str(BASE_DIR / "data" / "inventory.db"),
        )
    )

    # --- Catalog probes, in lookup priority order ---
    AVAILABLE_SOURCES: list[dict[str, str]] = [
        {
            "id": "openfoodfacts",
            "label": "Open Food Facts",
            "probe": "product_lookup.probes.open_facts_probe.OpenFoodFactsProbe",
        },
        {
            "id": "openbeautyfacts",
            "label": "Open Beauty Facts",
            "probe": "product_lookup.probes.open_facts_probe.OpenBeautyFactsProbe",
        },
        {
            "id": "openproductsfacts",
            "label": "Open Products Facts",
            "probe": "product_lookup.probes.open_facts_probe.OpenProductsFactsProbe",
        },
        {
            "id": "googlebooks",
            "label": "Google Books",
            "probe": "product_lookup.probes.google_books_probe.GoogleBooksProbe",
        },
        {
            "id": "openlibrary",
            "label": "Open Library",
            "probe": "product_lookup.probes.open_library_probe.OpenLibraryProbe",
        },
    ]
