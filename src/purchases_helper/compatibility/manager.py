"""Entitlement access with backwards-compatibility grandfathering.

A live grant from the purchasing backend always wins. When the backend says
the entitlement is inactive, registered rules can still grant access to
customers whose original application version or original purchase date
predates the move to subscriptions.
"""

from datetime import datetime
from typing import Optional

from purchases_helper.common.config import PurchasesHelperSettings, get_settings
from purchases_helper.common.environment import EnvironmentProbe, SettingsEnvironmentProbe
from purchases_helper.common.exceptions import PurchasesError
from purchases_helper.common.logging import get_logger
from purchases_helper.compatibility.models import (
    BackwardsCompatibilityEntitlement,
    CustomerInfo,
)
from purchases_helper.compatibility.registry import EntitlementRegistry
from purchases_helper.sdk.provider import PurchasesProvider

logger = get_logger("compatibility")


class CompatibilityAccessManager:
    """Resolves entitlement access; owns its registry of compatibility rules."""

    def __init__(
        self,
        provider: Optional[PurchasesProvider] = None,
        environment: Optional[EnvironmentProbe] = None,
        settings: Optional[PurchasesHelperSettings] = None,
        registry: Optional[EntitlementRegistry] = None,
        debug_logs_enabled: Optional[bool] = None,
    ):
        self.settings = settings or get_settings()
        self.provider = provider
        self.environment = environment or SettingsEnvironmentProbe(self.settings)
        self.registry = registry if registry is not None else EntitlementRegistry()
        if debug_logs_enabled is None:
            debug_logs_enabled = self.settings.debug_logs_enabled
        self.debug_logs_enabled = debug_logs_enabled

    def _log(self, message: str, *args) -> None:
        if self.debug_logs_enabled:
            logger.info(message, *args)

    # ── Overrides ──

    @property
    def version_override(self) -> Optional[str]:
        """Sandbox original-version override, or None outside the sandbox."""
        if self.environment.is_sandbox():
            return self.settings.sandbox_version_override
        return None

    @property
    def purchase_date_override(self) -> Optional[datetime]:
        """Sandbox original-purchase-date override, or None outside the sandbox."""
        if self.environment.is_sandbox():
            return self.settings.sandbox_purchase_date_override
        return None

    def effective_original_version(self, info: Optional[CustomerInfo]) -> Optional[str]:
        override = self.version_override
        if override is not None:
            return override
        return info.original_application_version if info is not None else None

    def effective_original_purchase_date(self, info: Optional[CustomerInfo]) -> Optional[datetime]:
        override = self.purchase_date_override
        if override is not None:
            return override
        return info.original_purchase_date if info is not None else None

    # ── Resolution ──

    def resolve(
        self,
        customer_info: CustomerInfo,
        entitlement: str,
        check_registered_compatibility: bool = True,
    ) -> bool:
        """Return whether ``entitlement`` should be treated as active for this customer."""
        if customer_info.is_entitlement_active(entitlement):
            self._log("Entitlement '%s' active in RevenueCat.", entitlement)
            return True

        if not check_registered_compatibility:
            self._log("Entitlement '%s' not active.", entitlement)
            return False

        return self._is_registered_compatible(
            entitlement,
            self.effective_original_version(customer_info),
            self.effective_original_purchase_date(customer_info),
        )

    def _is_registered_compatible(
        self,
        entitlement: str,
        original_version: Optional[str],
        original_purchase_date: Optional[datetime],
    ) -> bool:
        entries = self.registry.snapshot()
        if not entries:
            self._log("No registered compatibility entitlements, '%s' not active.", entitlement)
            return False

        if original_version is not None:
            for entry in entries:
                if entry.entitlement == entitlement and entry.matches_version(original_version):
                    self._log(
                        "Version %s found in registered backwards compatibility versions for entitlement '%s'.",
                        original_version,
                        entitlement,
                    )
                    return True

        if original_purchase_date is not None:
            for entry in entries:
                if entry.entitlement == entitlement and entry.matches_purchase_date(original_purchase_date):
                    self._log(
                        "Original purchase date %s is before %s for entitlement '%s'.",
                        original_purchase_date.isoformat(),
                        entry.purchased_before.isoformat(),
                        entitlement,
                    )
                    return True

        self._log("Entitlement '%s' not active.", entitlement)
        return False

    async def resolve_with_fallback_fetch(
        self, entitlement: str
    ) -> tuple[bool, Optional[CustomerInfo]]:
        """Fetch customer info once and resolve ``entitlement`` against it.

        Without customer info the answer is ``False``, except in the sandbox
        with a version override configured, where the overrides are checked
        against the registered rules directly.
        """
        self._log("Checking access to entitlement '%s'", entitlement)

        info: Optional[CustomerInfo] = None
        if self.provider is None:
            self._log("No purchases provider configured.")
        else:
            try:
                info = await self.provider.get_customer_info()
            except PurchasesError as exc:
                logger.warning(
                    "Failed to fetch customer info: %s",
                    exc.message,
                    extra={"code": exc.code, "entitlement": entitlement},
                )

        if info is not None:
            return self.resolve(info, entitlement), info

        override = self.version_override
        if override is not None:
            self._log("CustomerInfo not available, checking sandbox override version %s.", override)
            return (
                self._is_registered_compatible(entitlement, override, self.purchase_date_override),
                None,
            )

        self._log("CustomerInfo not available, entitlement '%s' not active.", entitlement)
        return False, None

    # ── Registration ──

    def register(self, entitlement: BackwardsCompatibilityEntitlement) -> None:
        if self.registry.register(entitlement):
            self._log(
                "Registered entitlement '%s' for versions %s.",
                entitlement.entitlement,
                ", ".join(sorted(entitlement.versions)),
            )
        else:
            existing = self.registry.get(entitlement.entitlement)
            self._log(
                "Entitlement '%s' already registered for versions %s.",
                entitlement.entitlement,
                ", ".join(sorted(existing.versions)) if existing is not None else "",
            )

    def unregister(self, entitlement: str) -> None:
        self.registry.unregister(entitlement)
        self._log("Unregistered entitlement '%s'.", entitlement)

    @property
    def registered_entitlements(self) -> tuple[BackwardsCompatibilityEntitlement, ...]:
        return self.registry.snapshot()
