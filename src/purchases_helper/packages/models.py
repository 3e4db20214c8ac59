"""Package, period and introductory-offer models."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional


def _normalize(raw: str) -> str:
    return raw.strip().lower().replace("$rc_", "").replace("_", "").replace("-", "")


class PackageType(IntEnum):
    """Package duration tag. Raw values follow the purchasing SDK; higher is shorter."""

    UNKNOWN = -2
    CUSTOM = -1
    LIFETIME = 0
    ANNUAL = 1
    SIX_MONTH = 2
    THREE_MONTH = 3
    TWO_MONTH = 4
    MONTHLY = 5
    WEEKLY = 6

    @classmethod
    def parse(cls, raw: "str | int | PackageType") -> "PackageType":
        """Map SDK spellings (``$rc_annual``, ``SIX_MONTH``, ``sixMonth``) to a type.

        Unrecognized identifiers are custom packages; unrecognized raw values
        are unknown.
        """
        if isinstance(raw, PackageType):
            return raw
        if isinstance(raw, int):
            try:
                return cls(raw)
            except ValueError:
                return cls.UNKNOWN
        return _PACKAGE_TYPE_ALIASES.get(_normalize(raw), cls.CUSTOM)


_PACKAGE_TYPE_ALIASES = {
    "unknown": PackageType.UNKNOWN,
    "custom": PackageType.CUSTOM,
    "lifetime": PackageType.LIFETIME,
    "annual": PackageType.ANNUAL,
    "sixmonth": PackageType.SIX_MONTH,
    "threemonth": PackageType.THREE_MONTH,
    "twomonth": PackageType.TWO_MONTH,
    "monthly": PackageType.MONTHLY,
    "weekly": PackageType.WEEKLY,
}


class PeriodUnit(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: "str | PeriodUnit") -> "PeriodUnit":
        if isinstance(raw, PeriodUnit):
            return raw
        value = raw.strip().lower().rstrip("s")
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class PaymentMode(str, Enum):
    FREE_TRIAL = "free_trial"
    PAY_UP_FRONT = "pay_up_front"
    PAY_AS_YOU_GO = "pay_as_you_go"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: "str | PaymentMode") -> "PaymentMode":
        if isinstance(raw, PaymentMode):
            return raw
        return _PAYMENT_MODE_ALIASES.get(_normalize(raw), cls.UNKNOWN)


_PAYMENT_MODE_ALIASES = {
    "freetrial": PaymentMode.FREE_TRIAL,
    "payupfront": PaymentMode.PAY_UP_FRONT,
    "payasyougo": PaymentMode.PAY_AS_YOU_GO,
}


@dataclass(frozen=True)
class SubscriptionPeriod:
    value: int
    unit: PeriodUnit

    @classmethod
    def parse(cls, raw: str) -> "SubscriptionPeriod":
        """Parse ``"3:day"`` or ``"3 days"``."""
        sep = ":" if ":" in raw else None
        count, unit = raw.strip().split(sep, 1)
        return cls(int(count), PeriodUnit.parse(unit))


@dataclass(frozen=True)
class IntroductoryOffer:
    """
    Trial or discounted introductory terms.

    ``number_of_periods`` is how many billing cycles a pay-as-you-go price
    applies for.
    """

    payment_mode: PaymentMode
    price_string: str
    period: SubscriptionPeriod
    number_of_periods: int = 1


@dataclass(frozen=True)
class Package:
    identifier: str
    package_type: PackageType
    price_string: str
    introductory_offer: Optional[IntroductoryOffer] = None

    @property
    def has_introductory_offer(self) -> bool:
        return self.introductory_offer is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Package":
        """Build a package from a plain mapping, e.g. parsed JSON.

        Expected keys: identifier, package_type, price_string and an optional
        introductory_offer with payment_mode, price_string, period
        (``{"value": 3, "unit": "day"}``) and number_of_periods. Missing or
        null fields fall back to unknown values instead of raising.
        """
        intro = None
        intro_data = data.get("introductory_offer")
        if intro_data:
            period = intro_data.get("period") or {}
            intro = IntroductoryOffer(
                payment_mode=PaymentMode.parse(intro_data.get("payment_mode") or "unknown"),
                price_string=intro_data.get("price_string") or "",
                period=SubscriptionPeriod(
                    int(period["value"]) if period.get("value") is not None else 1,
                    PeriodUnit.parse(period.get("unit") or "unknown"),
                ),
                number_of_periods=int(intro_data.get("number_of_periods") or 1),
            )

        identifier = data.get("identifier") or ""
        package_type = data.get("package_type")
        return cls(
            identifier=identifier,
            package_type=PackageType.parse(identifier if package_type is None else package_type),
            price_string=data.get("price_string") or "",
            introductory_offer=intro,
        )
