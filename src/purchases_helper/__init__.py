"""Purchases-Helper: entitlement grandfathering and package terms on top of RevenueCat."""

from purchases_helper.compatibility.manager import CompatibilityAccessManager
from purchases_helper.compatibility.models import BackwardsCompatibilityEntitlement, CustomerInfo
from purchases_helper.packages.models import (
    IntroductoryOffer,
    Package,
    PackageType,
    PaymentMode,
    PeriodUnit,
    SubscriptionPeriod,
)
from purchases_helper.packages.sorting import SortedPackageType, sorted_packages
from purchases_helper.packages.terms import (
    PackageTermsFormatOptions,
    display_title,
    display_title_recurring,
    package_terms,
)

__all__ = [
    "CompatibilityAccessManager",
    "BackwardsCompatibilityEntitlement",
    "CustomerInfo",
    "IntroductoryOffer",
    "Package",
    "PackageType",
    "PaymentMode",
    "PeriodUnit",
    "SubscriptionPeriod",
    "SortedPackageType",
    "sorted_packages",
    "PackageTermsFormatOptions",
    "display_title",
    "display_title_recurring",
    "package_terms",
]
__version__ = "0.1.0"
