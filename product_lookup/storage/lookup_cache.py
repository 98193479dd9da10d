# product_lookup/storage/lookup_cache.py

"""In-memory TTL cache of external catalog hits keyed by barcode."""

import logging
import time
from dataclasses import dataclass

from product_lookup.config.settings import Settings
from product_lookup.models.product import ProductRecord, ProductSource

logger = logging.getLogger("product_lookup.cache")


@dataclass
class CacheEntry:
    """A catalog hit remembered for one barcode."""

    barcode: str
    record: ProductRecord
    timestamp: float


class LookupCache:
    """Remembers which catalog answered for a barcode.

    Only external hits are stored.  Local records are re-read on every
    scan so shopkeeper edits show up immediately, and misses are never
    cached so a catalog that learns a barcode later is asked again.
    """

    def __init__(self, ttl: float | None = None) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._ttl: float = (
            ttl if ttl is not None else Settings.LOOKUP_CACHE_TTL
        )

    def get(self, barcode: str) -> ProductRecord | None:
        """Return the cached record for ``barcode``, or ``None``."""
        self._evict_expired(time.time())
        entry = self._entries.get(barcode)
        if entry is None:
            return None
        logger.info(
            "Cache hit for %s (source=%s)",
            barcode,
            entry.record.source.value,
        )
        return entry.record

    def store(self, barcode: str, record: ProductRecord) -> None:
        """Remember an external hit for ``barcode``."""
        if not record.found or record.source in (
            ProductSource.LOCAL,
            ProductSource.MANUAL,
        ):
            logger.debug(
                "Not caching %s record for %s",
                record.source.value,
                barcode,
            )
            return
        self._entries[barcode] = CacheEntry(
            barcode=barcode,
            record=record,
            timestamp=time.time(),
        )
        logger.debug(
            "Cached %s record for %s", record.source.value, barcode
        )

    def clear(self) -> int:
        """Purge all cached entries.

        Returns the number of entries that were removed.
        """
        count = len(self._entries)
        self._entries.clear()
        logger.info("Cache manually purged (%d entries removed)", count)
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def _evict_expired(self, now: float) -> None:
        """Remove entries older than the TTL threshold."""
        expired = [
            barcode
            for barcode, entry in self._entries.items()
            if now - entry.timestamp >= self._ttl
        ]
        for barcode in expired:
            del self._entries[barcode]
        if expired:
            logger.debug(
                "Evicted %d expired cache entries", len(expired)
            )
