"""Tests for package terms and display titles."""

import pytest

from purchases_helper.packages.models import (
    IntroductoryOffer,
    Package,
    PackageType,
    PaymentMode,
    PeriodUnit,
    SubscriptionPeriod,
)
from purchases_helper.packages.terms import (
    PackageTermsFormatOptions,
    display_title,
    display_title_recurring,
    package_terms,
    per_title,
    period_length_title,
)


def _package(package_type=PackageType.ANNUAL, price="$24.99", intro=None, identifier="pkg") -> Package:
    return Package(identifier=identifier, package_type=package_type, price_string=price, introductory_offer=intro)


def _offer(mode, value=1, unit=PeriodUnit.WEEK, price="$0.00", periods=1) -> IntroductoryOffer:
    return IntroductoryOffer(
        payment_mode=mode,
        price_string=price,
        period=SubscriptionPeriod(value, unit),
        number_of_periods=periods,
    )


NON_RECURRING = PackageTermsFormatOptions(is_recurring=False)
NO_INTRO = PackageTermsFormatOptions(include_intro_terms=False)


class TestLifetime:
    def test_returns_price_only(self):
        pkg = _package(PackageType.LIFETIME, "$99.99")
        assert package_terms(pkg) == "$99.99"

    def test_ignores_options(self):
        pkg = _package(PackageType.LIFETIME, "$99.99", intro=_offer(PaymentMode.FREE_TRIAL))
        assert package_terms(pkg, NON_RECURRING) == "$99.99"
        assert package_terms(pkg, PackageTermsFormatOptions(False, False)) == "$99.99"


class TestNormalTerms:
    def test_annual_recurring(self):
        assert package_terms(_package()) == "$24.99/year"

    def test_annual_non_recurring(self):
        assert package_terms(_package(), NON_RECURRING) == "$24.99 for 1 year"

    @pytest.mark.parametrize(
        "package_type,expected",
        [
            (PackageType.WEEKLY, "$4.99/week"),
            (PackageType.MONTHLY, "$4.99/month"),
            (PackageType.TWO_MONTH, "$4.99/2 months"),
            (PackageType.THREE_MONTH, "$4.99/3 months"),
            (PackageType.SIX_MONTH, "$4.99/6 months"),
            (PackageType.UNKNOWN, "$4.99/unknown"),
        ],
    )
    def test_per_titles(self, package_type, expected):
        assert package_terms(_package(package_type, "$4.99")) == expected

    def test_six_month_non_recurring(self):
        assert package_terms(_package(PackageType.SIX_MONTH, "$12.99"), NON_RECURRING) == "$12.99 for 6 months"

    def test_custom_package_uses_identifier(self):
        pkg = _package(PackageType.CUSTOM, "$9.99", identifier="Quarterly_Plus")
        assert package_terms(pkg) == "$9.99/quarterly_plus"

    def test_intro_excluded(self):
        pkg = _package(intro=_offer(PaymentMode.FREE_TRIAL, 3, PeriodUnit.DAY))
        assert package_terms(pkg, NO_INTRO) == "$24.99/year"


class TestIntroTerms:
    def test_free_trial_plural(self):
        pkg = _package(intro=_offer(PaymentMode.FREE_TRIAL, 3, PeriodUnit.DAY))
        assert package_terms(pkg) == "3 days free trial, then $24.99/year"

    def test_free_trial_singular(self):
        pkg = _package(intro=_offer(PaymentMode.FREE_TRIAL, 1, PeriodUnit.WEEK))
        assert package_terms(pkg) == "1 week free trial, then $24.99/year"

    def test_free_trial_non_recurring(self):
        pkg = _package(intro=_offer(PaymentMode.FREE_TRIAL, 1, PeriodUnit.WEEK))
        assert package_terms(pkg, NON_RECURRING) == "1 week free trial, then $24.99 for 1 year"

    def test_pay_up_front(self):
        pkg = _package(intro=_offer(PaymentMode.PAY_UP_FRONT, 3, PeriodUnit.MONTH, "$4.99"))
        assert package_terms(pkg) == "$4.99 up front for 3 months, then $24.99/year"

    def test_pay_as_you_go(self):
        pkg = _package(intro=_offer(PaymentMode.PAY_AS_YOU_GO, 1, PeriodUnit.MONTH, "$1.99", periods=6))
        assert package_terms(pkg) == "$1.99/month for 6 months, then $24.99/year"

    def test_pay_as_you_go_single_cycle(self):
        pkg = _package(intro=_offer(PaymentMode.PAY_AS_YOU_GO, 1, PeriodUnit.MONTH, "$1.99", periods=1))
        assert package_terms(pkg) == "$1.99/month for 1 month, then $24.99/year"

    def test_unknown_mode_returns_intro_price(self):
        pkg = _package(intro=_offer(PaymentMode.UNKNOWN, 1, PeriodUnit.MONTH, "$0.99"))
        assert package_terms(pkg) == "$0.99"

    def test_unknown_unit(self):
        pkg = _package(intro=_offer(PaymentMode.FREE_TRIAL, 2, PeriodUnit.UNKNOWN))
        assert package_terms(pkg) == "2 unknowns free trial, then $24.99/year"


class TestTitles:
    def test_period_length_title(self):
        assert period_length_title(1, PeriodUnit.YEAR) == "1 year"
        assert period_length_title(0, PeriodUnit.DAY) == "0 days"

    @pytest.mark.parametrize(
        "package_type,title,recurring",
        [
            (PackageType.LIFETIME, "Lifetime", "Lifetime"),
            (PackageType.ANNUAL, "1 Year", "Yearly"),
            (PackageType.SIX_MONTH, "6 Months", "6 Months Recurring"),
            (PackageType.THREE_MONTH, "3 Months", "3 Months Recurring"),
            (PackageType.TWO_MONTH, "2 Months", "2 Months Recurring"),
            (PackageType.MONTHLY, "1 Month", "Monthly"),
            (PackageType.WEEKLY, "1 Week", "Weekly"),
            (PackageType.UNKNOWN, "Unknown", "Unknown"),
        ],
    )
    def test_display_titles(self, package_type, title, recurring):
        pkg = _package(package_type)
        assert display_title(pkg) == title
        assert display_title_recurring(pkg) == recurring

    def test_custom_titles_echo_identifier(self):
        pkg = _package(PackageType.CUSTOM, identifier="Family")
        assert display_title(pkg) == "Family"
        assert display_title_recurring(pkg) == "Family"
        assert per_title(pkg) == "Family"
