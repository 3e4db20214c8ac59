"""Shared test fixtures for Purchases-Helper."""

import pytest

from purchases_helper.common.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep host PURCHASES_HELPER_* variables and cached settings out of tests."""
    for var in (
        "PURCHASES_HELPER_ENVIRONMENT",
        "PURCHASES_HELPER_SANDBOX",
        "PURCHASES_HELPER_SANDBOX_VERSION_OVERRIDE",
        "PURCHASES_HELPER_SANDBOX_PURCHASE_DATE_OVERRIDE",
        "PURCHASES_HELPER_APPLE_APP_ID",
        "PURCHASES_HELPER_DEBUG_LOGS_ENABLED",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
