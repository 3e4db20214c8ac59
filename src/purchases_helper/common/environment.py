"""Sandbox environment detection."""

from typing import Protocol

from purchases_helper.common.config import PurchasesHelperSettings


class EnvironmentProbe(Protocol):
    """Reports whether the app runs against the store sandbox."""

    def is_sandbox(self) -> bool:
        ...


class StaticEnvironmentProbe:
    """Fixed answer, for tests and hosts that already know their environment."""

    def __init__(self, sandbox: bool = False):
        self.sandbox = sandbox

    def is_sandbox(self) -> bool:
        return self.sandbox


class SettingsEnvironmentProbe:
    """Reads the sandbox flag from settings."""

    def __init__(self, settings: PurchasesHelperSettings):
        self.settings = settings

    def is_sandbox(self) -> bool:
        return self.settings.sandbox
