"""Tests for the Typer CLI."""

import json
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from purchases_helper.cli import app
from purchases_helper.compatibility.models import CustomerInfo

runner = CliRunner()


class TestTermsCommand:
    def test_plain(self):
        result = runner.invoke(app, ["terms", "--price", "$24.99"])
        assert result.exit_code == 0
        assert "$24.99/year" in result.stdout

    def test_free_trial(self):
        result = runner.invoke(
            app,
            ["terms", "--price", "$24.99", "--intro-mode", "free_trial", "--intro-period", "3:day"],
        )
        assert result.exit_code == 0
        assert "3 days free trial, then $24.99/year" in result.stdout

    def test_non_recurring_monthly(self):
        result = runner.invoke(app, ["terms", "--type", "$rc_monthly", "--price", "$4.99", "--no-recurring"])
        assert result.exit_code == 0
        assert "$4.99 for 1 month" in result.stdout

    def test_invalid_period(self):
        result = runner.invoke(app, ["terms", "--price", "$1", "--intro-mode", "free_trial", "--intro-period", "x"])
        assert result.exit_code == 1

    def test_requires_price_or_json(self):
        result = runner.invoke(app, ["terms"])
        assert result.exit_code == 1
        assert "Pass --price or --json" in result.stdout


class TestTermsFromJson:
    PACKAGES = [
        {"identifier": "$rc_annual", "price_string": "$24.99"},
        {"identifier": "$rc_lifetime", "price_string": "$59.99"},
        {"identifier": "$rc_monthly", "price_string": "$4.99"},
    ]

    def test_single_package(self, tmp_path):
        path = tmp_path / "annual.json"
        path.write_text(json.dumps({
            "identifier": "$rc_annual",
            "price_string": "$24.99",
            "introductory_offer": {"payment_mode": "free_trial", "period": {"value": 3, "unit": "day"}},
        }))
        result = runner.invoke(app, ["terms", "--json", str(path)])
        assert result.exit_code == 0
        assert "3 days free trial, then $24.99/year" in result.stdout

    def test_list_sorted_time_ascending(self, tmp_path):
        path = tmp_path / "packages.json"
        path.write_text(json.dumps(self.PACKAGES))
        result = runner.invoke(app, ["terms", "--json", str(path)])
        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert lines == [
            "$rc_monthly: $4.99/month",
            "$rc_annual: $24.99/year",
            "$rc_lifetime: $59.99",
        ]

    def test_list_sorted_time_descending(self, tmp_path):
        path = tmp_path / "packages.json"
        path.write_text(json.dumps(self.PACKAGES))
        result = runner.invoke(app, ["terms", "--json", str(path), "--sort", "time_descending"])
        assert result.exit_code == 0
        identifiers = [line.split(":")[0] for line in result.stdout.strip().splitlines()]
        assert identifiers == ["$rc_lifetime", "$rc_annual", "$rc_monthly"]

    def test_null_fields_do_not_crash(self, tmp_path):
        path = tmp_path / "packages.json"
        path.write_text(json.dumps([{"identifier": "odd", "package_type": 7, "price_string": "$1", "introductory_offer": {"period": None}}]))
        result = runner.invoke(app, ["terms", "--json", str(path)])
        assert result.exit_code == 0
        assert result.stdout.startswith("odd:")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        result = runner.invoke(app, ["terms", "--json", str(path)])
        assert result.exit_code == 1
        assert "Cannot read" in result.stdout

    def test_unknown_sort(self, tmp_path):
        path = tmp_path / "packages.json"
        path.write_text(json.dumps(self.PACKAGES))
        result = runner.invoke(app, ["terms", "--json", str(path), "--sort", "cheapest"])
        assert result.exit_code == 1
        assert "Unknown sort order" in result.stdout

    def test_scalar_payload_rejected(self, tmp_path):
        path = tmp_path / "scalar.json"
        path.write_text("42")
        result = runner.invoke(app, ["terms", "--json", str(path)])
        assert result.exit_code == 1
        assert "Expected a package object or list" in result.stdout


class TestTitlesCommand:
    def test_lists_types(self):
        result = runner.invoke(app, ["titles"])
        assert result.exit_code == 0
        assert "ANNUAL" in result.stdout
        assert "Yearly" in result.stdout


class TestCheckCommand:
    def test_active_via_version(self, monkeypatch):
        monkeypatch.setenv("PURCHASES_HELPER_ENVIRONMENT", "development")
        info = CustomerInfo(entitlements={}, original_application_version="50")
        with patch("purchases_helper.sdk.revenuecat.RevenueCatClient.get_customer_info", new=AsyncMock(return_value=info)), \
                patch("purchases_helper.common.logging.setup_logging"):
            result = runner.invoke(app, ["check", "premium", "--user", "u1", "--version", "50"])
        assert result.exit_code == 0
        assert "ACTIVE" in result.stdout

    def test_inactive_exits_nonzero(self, monkeypatch):
        monkeypatch.setenv("PURCHASES_HELPER_ENVIRONMENT", "development")
        info = CustomerInfo(entitlements={"premium": False})
        with patch("purchases_helper.sdk.revenuecat.RevenueCatClient.get_customer_info", new=AsyncMock(return_value=info)), \
                patch("purchases_helper.common.logging.setup_logging"):
            result = runner.invoke(app, ["check", "premium", "--user", "u1"])
        assert result.exit_code == 1
        assert "INACTIVE" in result.stdout


class TestInReviewCommand:
    def test_not_configured(self):
        result = runner.invoke(app, ["in-review"])
        assert result.exit_code == 1
        assert "APP_REVIEW_NOT_CONFIGURED" in result.stdout

    def test_in_review(self):
        with patch("purchases_helper.app_review.checker.AppReviewChecker.refresh", new=AsyncMock(return_value="1.0")):
            result = runner.invoke(app, ["in-review", "--app-id", "1", "--current-version", "2.0"])
        assert result.exit_code == 0
        assert "IN REVIEW" in result.stdout
