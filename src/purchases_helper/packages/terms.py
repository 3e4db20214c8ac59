"""
Customer-facing payment terms for a package. Not localized.

Examples:
    $24.99/year
    $24.99 for 1 year
    1 week free trial, then $24.99/year
    $4.99 up front for 3 months, then $24.99/year
    $1.99/month for 6 months, then $24.99/year
"""

from dataclasses import dataclass
from typing import Optional

from purchases_helper.packages.models import (
    Package,
    PackageType,
    PaymentMode,
    PeriodUnit,
)


@dataclass(frozen=True)
class PackageTermsFormatOptions:
    """
    is_recurring: ``$99/year`` when true, ``$99 for 1 year`` when false.
    include_intro_terms: pass false once a customer has redeemed their trial.
    """

    is_recurring: bool = True
    include_intro_terms: bool = True


_PER_TITLES = {
    PackageType.LIFETIME: "lifetime",
    PackageType.ANNUAL: "year",
    PackageType.SIX_MONTH: "6 months",
    PackageType.THREE_MONTH: "3 months",
    PackageType.TWO_MONTH: "2 months",
    PackageType.MONTHLY: "month",
    PackageType.WEEKLY: "week",
    PackageType.UNKNOWN: "unknown",
}

_DISPLAY_TITLES = {
    PackageType.LIFETIME: "Lifetime",
    PackageType.ANNUAL: "1 Year",
    PackageType.SIX_MONTH: "6 Months",
    PackageType.THREE_MONTH: "3 Months",
    PackageType.TWO_MONTH: "2 Months",
    PackageType.MONTHLY: "1 Month",
    PackageType.WEEKLY: "1 Week",
    PackageType.UNKNOWN: "Unknown",
}

_DISPLAY_TITLES_RECURRING = {
    PackageType.LIFETIME: "Lifetime",
    PackageType.ANNUAL: "Yearly",
    PackageType.SIX_MONTH: "6 Months Recurring",
    PackageType.THREE_MONTH: "3 Months Recurring",
    PackageType.TWO_MONTH: "2 Months Recurring",
    PackageType.MONTHLY: "Monthly",
    PackageType.WEEKLY: "Weekly",
    PackageType.UNKNOWN: "Unknown",
}


def unit_title(unit: PeriodUnit) -> str:
    if unit in (PeriodUnit.DAY, PeriodUnit.WEEK, PeriodUnit.MONTH, PeriodUnit.YEAR):
        return unit.value
    return "unknown"


def period_length_title(value: int, unit: PeriodUnit) -> str:
    """``1 week``, ``3 days``."""
    suffix = "" if value == 1 else "s"
    return f"{value} {unit_title(unit)}{suffix}"


def per_title(package: Package) -> str:
    return _PER_TITLES.get(package.package_type, package.identifier)


def display_title(package: Package) -> str:
    return _DISPLAY_TITLES.get(package.package_type, package.identifier)


def display_title_recurring(package: Package) -> str:
    return _DISPLAY_TITLES_RECURRING.get(package.package_type, package.identifier)


def package_terms(package: Package, options: Optional[PackageTermsFormatOptions] = None) -> str:
    """Build the terms string for ``package``, e.g. ``1 week free trial, then $24.99/year``."""
    options = options or PackageTermsFormatOptions()
    normal_price = package.price_string

    # One-time purchase: no recurrence or trial to describe.
    if package.package_type == PackageType.LIFETIME:
        return normal_price

    if options.is_recurring:
        suffix = f"/{per_title(package)}".lower()
    else:
        suffix = f" for {display_title(package)}".lower()

    intro = package.introductory_offer
    if not options.include_intro_terms or intro is None:
        return f"{normal_price}{suffix}"

    intro_length = period_length_title(intro.period.value, intro.period.unit)

    if intro.payment_mode == PaymentMode.FREE_TRIAL:
        return f"{intro_length} free trial, then {normal_price}{suffix}"

    if intro.payment_mode == PaymentMode.PAY_UP_FRONT:
        return f"{intro.price_string} up front for {intro_length}, then {normal_price}{suffix}"

    if intro.payment_mode == PaymentMode.PAY_AS_YOU_GO:
        cycles = period_length_title(intro.number_of_periods, intro.period.unit)
        return (
            f"{intro.price_string}/{unit_title(intro.period.unit)} for {cycles}, "
            f"then {normal_price}{suffix}"
        )

    # Unrecognized offer shape: the store's purchase sheet shows the full terms.
    return intro.price_string
