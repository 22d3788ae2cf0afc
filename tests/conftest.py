# tests/conftest.py

"""Shared pytest fixtures for all storefront tests."""

from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def mock_session() -> Generator[MagicMock, None, None]:
    """Patch the curl_cffi Session so no test opens a real connection."""
    with patch(
        "src.api.store_client.curl_requests.Session"
    ) as session_cls:
        yield session_cls
