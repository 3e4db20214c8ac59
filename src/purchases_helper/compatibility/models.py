"""Backwards-compatibility rules and the customer info view they are checked against."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so purchase instants always compare."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class BackwardsCompatibilityEntitlement:
    """
    Grandfathering rule for one entitlement.

    A customer qualifies when their original application version is in
    ``versions``, or their original purchase happened before
    ``purchased_before``. Registration identity is by name: two rules for the
    same entitlement compare equal even when their versions differ.
    """

    __slots__ = ("entitlement", "versions", "purchased_before")

    def __init__(
        self,
        entitlement: str,
        versions: Iterable[str] = (),
        purchased_before: Optional[datetime] = None,
    ):
        self.entitlement = entitlement
        # A bare build number is one version, not a set of characters.
        if isinstance(versions, str):
            versions = (versions,)
        self.versions = frozenset(versions)
        self.purchased_before = as_utc(purchased_before)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BackwardsCompatibilityEntitlement):
            return NotImplemented
        return self.entitlement == other.entitlement

    def __hash__(self) -> int:
        return hash(self.entitlement)

    def __repr__(self) -> str:
        return (
            f"BackwardsCompatibilityEntitlement(entitlement={self.entitlement!r}, "
            f"versions={sorted(self.versions)!r}, purchased_before={self.purchased_before!r})"
        )

    def matches_version(self, version: str) -> bool:
        return version in self.versions

    def matches_purchase_date(self, purchase_date: datetime) -> bool:
        # Strict: a purchase at the cutoff instant does not qualify.
        if self.purchased_before is None:
            return False
        return self.purchased_before > as_utc(purchase_date)


@dataclass
class CustomerInfo:
    """Read-only view of the purchasing backend's customer record."""

    entitlements: Mapping[str, bool] = field(default_factory=dict)
    original_application_version: Optional[str] = None
    original_purchase_date: Optional[datetime] = None

    def is_entitlement_active(self, entitlement: str) -> bool:
        return self.entitlements.get(entitlement) is True

    @property
    def active_entitlements(self) -> list[str]:
        return [name for name, active in self.entitlements.items() if active]
