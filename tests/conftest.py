# tests/conftest.py

"""Shared pytest fixtures for all probe and resolver tests."""

from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def offline_session() -> Generator[MagicMock, None, None]:
    """Replace the curl_cffi session so no test reaches the network.

    Tests that exercise HTTP handling assign their own mock to
    ``probe.session`` after construction.
    """
    with patch(
        "product_lookup.probes.base_probe.curl_requests.Session"
    ) as mock_session_cls:
        yield mock_session_cls
