# product_lookup/probes/base_probe.py

"""Abstract base class for all external catalog probes."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from curl_cffi import requests as curl_requests

from product_lookup.config.settings import Settings
from product_lookup.models.product import ProductRecord, ProductSource


class SourceUnavailable(Exception):
    """A catalog could not answer: transport, status or payload failure."""

    def __init__(self, source: ProductSource, reason: str) -> None:
        super().__init__(f"{source.value}: {reason}")
        self.source = source
        self.reason = reason


class BaseProbe(ABC):
    """Abstract base class for all external catalog probes.

    A probe answers one question for one catalog: does it know this
    barcode?  ``probe()`` returns a found :class:`ProductRecord` tagged
    with the probe's source, ``None`` on a clean miss, and raises
    :class:`SourceUnavailable` when the catalog cannot be trusted to
    answer.  Each call makes exactly one HTTP request.
    """

    source: ProductSource

    # Non-200 statuses whose JSON body still answers the lookup
    ANSWER_STATUSES: frozenset[int] = frozenset()

    # Barcode the health check resolves through the real lookup path
    HEALTH_BARCODE: str = "9780140328721"

    def __init__(self) -> None:
        self.logger = logging.getLogger(
            f"product_lookup.probes.{self.source.value}"
        )
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _fetch_json(self, url: str) -> Any:
        """GET ``url`` once and decode the JSON body."""
        try:
            resp = self.session.get(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.info(
                "[%s] Request error: %s",
                self.source.value,
                exc,
                exc_info=True,
            )
            raise SourceUnavailable(
                self.source, f"request failed: {exc}"
            ) from exc

        if resp.status_code in self.ANSWER_STATUSES:
            self.logger.debug(
                "[%s] HTTP %d carries an answer body for %s",
                self.source.value,
                resp.status_code,
                url,
            )
        elif resp.status_code != 200:
            self.logger.info(
                "[%s] HTTP %d for %s",
                self.source.value,
                resp.status_code,
                url,
            )
            raise SourceUnavailable(
                self.source, f"HTTP {resp.status_code}"
            )

        try:
            return json.loads(resp.text)
        except ValueError as exc:
            raise SourceUnavailable(
                self.source, f"malformed JSON: {exc}"
            ) from exc

    def probe(self, barcode: str) -> ProductRecord | None:
        """Look ``barcode`` up in this catalog."""
        url = self._build_url(barcode)
        self.logger.debug("[%s] GET %s", self.source.value, url)
        payload = self._fetch_json(url)

        try:
            fields = self._parse(payload, barcode)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise SourceUnavailable(
                self.source, f"unexpected payload shape: {exc!r}"
            ) from exc

        if fields is None:
            self.logger.debug(
                "[%s] No match for %s", self.source.value, barcode
            )
            return None

        if not fields["name"].strip():
            self.logger.info(
                "[%s] Match for %s has no name, treating as miss",
                self.source.value,
                barcode,
            )
            return None

        return ProductRecord(source=self.source, found=True, **fields)

    @staticmethod
    def text(value: Any) -> str:
        """Coerce an optional JSON scalar to a stripped string."""
        if value is None:
            return ""
        return str(value).strip()

    @abstractmethod
    def _build_url(self, barcode: str) -> str:
        """Return the catalog URL for ``barcode``."""
        ...

    @abstractmethod
    def _parse(
        self, payload: Any, barcode: str,
    ) -> dict[str, Any] | None:
        """Map a decoded payload to ProductRecord fields, or None on a miss."""
        ...
