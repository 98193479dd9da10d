# product_lookup/services/health_checker.py

"""Catalog connectivity health checker.

Each catalog is exercised through its own probe with a reference ISBN,
so the check covers the same URL template, status handling and payload
parsing a real scan uses.  A hit or a clean miss both mean the catalog
answered; only :class:`SourceUnavailable` marks it down.
"""

import asyncio
import logging
import time
from dataclasses import dataclass

from product_lookup.config.settings import Settings
from product_lookup.probes.base_probe import SourceUnavailable
from product_lookup.services.product_resolver import load_probe_class

logger = logging.getLogger("product_lookup.health")


@dataclass
class HealthResult:
    """Result of a single catalog health check."""

    source_id: str
    label: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_source(source: dict[str, str]) -> HealthResult:
    """Resolve the probe's reference barcode and time the answer."""
    source_id = source["id"]
    label = source.get("label", source_id)

    try:
        probe = load_probe_class(source["probe"])()
    except Exception as exc:
        return HealthResult(
            source_id=source_id,
            label=label,
            status="down",
            latency_ms=0.0,
            message=f"Failed to load probe: {exc}",
        )

    barcode = probe.HEALTH_BARCODE
    start = time.monotonic()
    try:
        record = probe.probe(barcode)
    except SourceUnavailable as exc:
        return HealthResult(
            source_id=source_id,
            label=label,
            status="down",
            latency_ms=(time.monotonic() - start) * 1000,
            message=exc.reason[:80],
        )
    elapsed_ms = (time.monotonic() - start) * 1000

    found = record.name if record is not None else "no match"
    message = f"{barcode}: {found}"
    status = "slow" if elapsed_ms > Settings.SLOW_THRESHOLD_MS else "ok"
    return HealthResult(
        source_id=source_id,
        label=label,
        status=status,
        latency_ms=elapsed_ms,
        message=message[:80],
    )


class HealthChecker:
    """Runs concurrent health probes against every catalog."""

    def __init__(
        self, sources: list[dict[str, str]] | None = None,
    ) -> None:
        self.sources = (
            sources if sources is not None else Settings.AVAILABLE_SOURCES
        )

    async def check_all(self) -> list[HealthResult]:
        """Check every registered catalog concurrently."""
        tasks = [
            asyncio.to_thread(probe_source, src)
            for src in self.sources
        ]
        results: list[HealthResult] = list(
            await asyncio.gather(*tasks)
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.source_id,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
