"""Deterministic package ordering for paywalls."""

from enum import Enum
from typing import Iterable

from purchases_helper.packages.models import Package


class SortedPackageType(str, Enum):
    TIME_ASCENDING = "time_ascending"
    TIME_DESCENDING = "time_descending"
    HAS_INTRODUCTORY_PRICE = "has_introductory_price"


def sorted_packages(
    packages: Iterable[Package],
    by: SortedPackageType = SortedPackageType.TIME_ASCENDING,
) -> list[Package]:
    """Return a new, stably sorted list; the input is left untouched.

    time_ascending: weekly -> monthly -> ... -> annual -> lifetime
    (custom and unknown packages follow lifetime).
    time_descending: the exact reverse of time_ascending.
    has_introductory_price: packages with an intro offer first, input order kept.
    """
    items = list(packages)
    by = SortedPackageType(by)

    if by == SortedPackageType.HAS_INTRODUCTORY_PRICE:
        return sorted(items, key=lambda p: not p.has_introductory_offer)

    ascending = sorted(items, key=lambda p: p.package_type, reverse=True)
    if by == SortedPackageType.TIME_DESCENDING:
        ascending.reverse()
    return ascending
