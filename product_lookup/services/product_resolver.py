# product_lookup/services/product_resolver.py

"""Resolves a scanned barcode to one product record.

Sources are consulted strictly in order and the first hit wins:

1. the shop's local inventory (always authoritative),
2. the opt-in :class:`LookupCache` of earlier catalog hits,
3. each catalog probe in the configured priority order.

When nothing matches, the manual-entry sentinel is returned.  A
catalog failure only removes that catalog from the current lookup.
"""

import asyncio
import importlib
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from product_lookup.config.settings import Settings
from product_lookup.models.inventory_item import InventoryItem
from product_lookup.models.product import ProductRecord, ProductSource
from product_lookup.probes.base_probe import BaseProbe, SourceUnavailable
from product_lookup.storage.lookup_cache import LookupCache

logger = logging.getLogger("product_lookup.resolver")

LocalLookup = Callable[
    [str],
    InventoryItem | None | Awaitable[InventoryItem | None],
]
ExternalHitHandler = Callable[[str, ProductRecord], Any]


def load_probe_class(dotted_path: str) -> type[BaseProbe]:
    """Dynamically import a probe class from its dotted module path."""
    module_path, class_name = dotted_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls: type[BaseProbe] = getattr(module, class_name)
    return cls


def build_default_probes(
    sources: Sequence[dict[str, str]] | None = None,
) -> list[BaseProbe]:
    """Instantiate probes from the source registry, keeping its order."""
    registry = (
        sources if sources is not None else Settings.AVAILABLE_SOURCES
    )
    return [load_probe_class(src["probe"])() for src in registry]


def local_item_to_record(item: InventoryItem) -> ProductRecord | None:
    """Convert a local inventory row, or ``None`` if it has no name."""
    if not item.name.strip():
        logger.warning(
            "Local item %s has a blank name, ignoring it", item.barcode
        )
        return None
    price = item.price
    if price is not None and price < 0:
        logger.warning(
            "Local item %s has negative price %s, dropping it",
            item.barcode,
            price,
        )
        price = None
    return ProductRecord(
        name=item.name,
        source=ProductSource.LOCAL,
        found=True,
        brand=item.brand,
        price=price,
        category=item.category,
        description=item.description,
        image_url=item.image_url,
    )


class ProductResolver:
    """Produces exactly one :class:`ProductRecord` per barcode."""

    def __init__(
        self,
        probes: Sequence[BaseProbe],
        cache: LookupCache | None = None,
        on_external_hit: ExternalHitHandler | None = None,
    ) -> None:
        self.probes: tuple[BaseProbe, ...] = tuple(probes)
        self.cache = cache
        self.on_external_hit = on_external_hit
        self._save_tasks: set[asyncio.Task[None]] = set()

    # ── Private helpers ──────────────────────────────────

    async def _check_local(
        self, barcode: str, local_lookup: LocalLookup,
    ) -> ProductRecord | None:
        """Ask the local inventory; failures count as a miss."""
        try:
            if inspect.iscoroutinefunction(local_lookup):
                item = await local_lookup(barcode)
            else:
                item = await asyncio.to_thread(local_lookup, barcode)
                if inspect.isawaitable(item):
                    item = await item
        except Exception as exc:
            logger.error(
                "Local lookup failed for %s: %s",
                barcode,
                exc,
                exc_info=True,
            )
            return None

        if item is None:
            return None
        return local_item_to_record(item)

    async def _try_probes(self, barcode: str) -> ProductRecord | None:
        """Run each probe in order, stopping at the first hit."""
        for probe in self.probes:
            source = probe.source.value
            logger.debug("Trying %s for %s", source, barcode)
            try:
                record = await asyncio.to_thread(probe.probe, barcode)
            except SourceUnavailable as exc:
                # Below the console threshold: only the run log sees it
                logger.info(
                    "Source %s unavailable for %s: %s",
                    source,
                    barcode,
                    exc.reason,
                )
                continue
            if record is not None:
                return record
        return None

    def _hand_back(self, barcode: str, record: ProductRecord) -> None:
        """Offer an external hit to the caller without waiting on it."""
        if self.on_external_hit is None:
            logger.info(
                "Record for %s from %s available for saving "
                "(no save-back handler configured)",
                barcode,
                record.source.value,
            )
            return
        task = asyncio.create_task(
            self._save_back(self.on_external_hit, barcode, record)
        )
        self._save_tasks.add(task)
        task.add_done_callback(self._save_tasks.discard)

    async def _save_back(
        self,
        handler: ExternalHitHandler,
        barcode: str,
        record: ProductRecord,
    ) -> None:
        try:
            if inspect.iscoroutinefunction(handler):
                result = await handler(barcode, record)
            else:
                result = await asyncio.to_thread(handler, barcode, record)
                if inspect.isawaitable(result):
                    result = await result
        except Exception as exc:
            logger.error(
                "Save-back failed for %s: %s",
                barcode,
                exc,
                exc_info=True,
            )
            return
        if result is False:
            logger.warning("Save-back declined for %s", barcode)
        else:
            logger.info(
                "Saved %s record for %s to local inventory",
                record.source.value,
                barcode,
            )

    # ── Public API ───────────────────────────────────────

    async def resolve(
        self, barcode: str, local_lookup: LocalLookup,
    ) -> ProductRecord:
        """Resolve ``barcode`` to a product record.

        Never raises for missing or unreachable sources; a total miss
        returns ``ProductRecord.not_found()``.  Errors other than
        :class:`SourceUnavailable` raised by a probe propagate.
        """
        if not barcode or not barcode.strip():
            msg = "barcode must be a non-empty string"
            raise ValueError(msg)

        logger.info("Resolving barcode %s", barcode)

        local = await self._check_local(barcode, local_lookup)
        if local is not None:
            logger.info("Found %s in local inventory", barcode)
            return local

        if self.cache is not None:
            cached = self.cache.get(barcode)
            if cached is not None:
                return cached

        record = await self._try_probes(barcode)
        if record is not None:
            logger.info(
                "Found %s in %s", barcode, record.source.value
            )
            if self.cache is not None:
                self.cache.store(barcode, record)
            self._hand_back(barcode, record)
            return record

        logger.info("Barcode %s not found in any source", barcode)
        return ProductRecord.not_found()

    async def wait_for_saves(self) -> None:
        """Wait until every pending save-back task has finished."""
        if self._save_tasks:
            await asyncio.gather(*list(self._save_tasks))
