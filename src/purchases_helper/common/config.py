"""Purchases-Helper configuration via pydantic-settings."""

import warnings
from datetime import datetime
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class PurchasesHelperSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PURCHASES_HELPER_")

    environment: str = "production"

    # Sandbox: original application version / purchase date are fixed
    # placeholders there, so pre-release builds can override them.
    sandbox: bool = False
    sandbox_version_override: Optional[str] = None
    sandbox_purchase_date_override: Optional[datetime] = None

    # Logging
    debug_logs_enabled: bool = True
    log_level: str = "INFO"

    # RevenueCat REST
    revenuecat_api_key: str = ""
    revenuecat_base_url: str = "https://api.revenuecat.com"
    request_timeout: float = 10.0

    # App review
    apple_app_id: Optional[str] = None
    app_version: str = "0"
    app_review_lookup_url: str = "https://itunes.apple.com/lookup"

    @property
    def has_sandbox_overrides(self) -> bool:
        return (
            self.sandbox_version_override is not None
            or self.sandbox_purchase_date_override is not None
        )

    def validate_for_production(self) -> None:
        """Raise if sandbox overrides leak into a production environment."""
        if not self.has_sandbox_overrides:
            return

        if self.environment == "production":
            raise RuntimeError(
                "Sandbox overrides are configured in the 'production' environment. "
                "Unset PURCHASES_HELPER_SANDBOX_VERSION_OVERRIDE and "
                "PURCHASES_HELPER_SANDBOX_PURCHASE_DATE_OVERRIDE before shipping."
            )

        if not self.sandbox:
            warnings.warn(
                "Sandbox overrides are set but PURCHASES_HELPER_SANDBOX is false; "
                "they will be ignored",
                UserWarning,
                stacklevel=2,
            )


@lru_cache
def get_settings() -> PurchasesHelperSettings:
    settings = PurchasesHelperSettings()
    settings.validate_for_production()
    return settings
