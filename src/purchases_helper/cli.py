"""Typer CLI for Purchases-Helper."""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(name="purchases-helper", help="Purchases-Helper: entitlement and package terms tools")
console = Console()


@app.command()
def terms(
    package_type: str = typer.Option("annual", "--type", help="Package type (annual, monthly, $rc_weekly, ...)"),
    price: Optional[str] = typer.Option(None, help="Localized price string, e.g. $24.99"),
    identifier: str = typer.Option("", help="Package identifier (shown for custom packages)"),
    intro_mode: Optional[str] = typer.Option(None, help="free_trial, pay_up_front or pay_as_you_go"),
    intro_price: str = typer.Option("", help="Localized introductory price"),
    intro_period: str = typer.Option("1:week", help="Introductory period as COUNT:UNIT"),
    cycles: int = typer.Option(1, help="Billing cycles for pay-as-you-go offers"),
    recurring: bool = typer.Option(True, "--recurring/--no-recurring", help="'/year' vs 'for 1 year'"),
    intro: bool = typer.Option(True, "--intro/--no-intro", help="Include introductory terms"),
    package_file: Optional[Path] = typer.Option(
        None, "--json", help="JSON file holding one package or a list of packages"
    ),
    sort: str = typer.Option("time_ascending", help="Order for a list of packages"),
):
    """Print the customer-facing terms for a package, or for every package in a JSON file."""
    from purchases_helper.packages.models import (
        IntroductoryOffer,
        Package,
        PackageType,
        PaymentMode,
        SubscriptionPeriod,
    )
    from purchases_helper.packages.sorting import SortedPackageType, sorted_packages
    from purchases_helper.packages.terms import PackageTermsFormatOptions, package_terms

    options = PackageTermsFormatOptions(is_recurring=recurring, include_intro_terms=intro)

    if package_file is not None:
        try:
            data = json.loads(package_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            console.print(f"[bold red]Cannot read {package_file}:[/bold red] {e}")
            raise typer.Exit(1)
        try:
            by = SortedPackageType(sort)
        except ValueError:
            console.print(f"[bold red]Unknown sort order:[/bold red] {sort}")
            raise typer.Exit(1)

        if isinstance(data, dict):
            console.print(package_terms(Package.from_dict(data), options), markup=False)
            return
        if not isinstance(data, list):
            console.print(f"[bold red]Expected a package object or list in {package_file}[/bold red]")
            raise typer.Exit(1)
        packages = [Package.from_dict(item) for item in data if isinstance(item, dict)]
        for package in sorted_packages(packages, by):
            console.print(f"{package.identifier}: {package_terms(package, options)}", markup=False)
        return

    if price is None:
        console.print("[bold red]Pass --price or --json[/bold red]")
        raise typer.Exit(1)

    offer = None
    if intro_mode:
        try:
            period = SubscriptionPeriod.parse(intro_period)
        except ValueError:
            console.print(f"[bold red]Invalid intro period:[/bold red] {intro_period}")
            raise typer.Exit(1)
        offer = IntroductoryOffer(
            payment_mode=PaymentMode.parse(intro_mode),
            price_string=intro_price,
            period=period,
            number_of_periods=cycles,
        )

    package = Package(
        identifier=identifier or package_type,
        package_type=PackageType.parse(package_type),
        price_string=price,
        introductory_offer=offer,
    )
    console.print(package_terms(package, options), markup=False)


@app.command()
def titles():
    """Show display titles for every package type."""
    from purchases_helper.packages.models import Package, PackageType
    from purchases_helper.packages.terms import display_title, display_title_recurring, per_title

    table = Table(title="Package titles")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Recurring")
    table.add_column("Per")
    for package_type in PackageType:
        package = Package(identifier=package_type.name.lower(), package_type=package_type, price_string="")
        table.add_row(
            package_type.name,
            display_title(package),
            display_title_recurring(package),
            per_title(package),
        )
    console.print(table)


@app.command()
def check(
    entitlement: str = typer.Argument(..., help="Entitlement identifier"),
    user: str = typer.Option(..., help="RevenueCat app user id"),
    version: list[str] = typer.Option([], "--version", help="Grandfathered build number (repeatable)"),
    before: Optional[datetime] = typer.Option(None, help="Grandfather purchases before this instant"),
):
    """Fetch customer info from RevenueCat and resolve an entitlement."""
    from purchases_helper.common.config import get_settings
    from purchases_helper.common.logging import setup_logging
    from purchases_helper.compatibility.manager import CompatibilityAccessManager
    from purchases_helper.compatibility.models import BackwardsCompatibilityEntitlement
    from purchases_helper.sdk.revenuecat import RevenueCatClient

    settings = get_settings()
    setup_logging(settings.log_level)
    manager = CompatibilityAccessManager(
        provider=RevenueCatClient.from_settings(settings, user),
        settings=settings,
    )
    if version or before is not None:
        manager.register(BackwardsCompatibilityEntitlement(entitlement, version, purchased_before=before))

    active, info = asyncio.run(manager.resolve_with_fallback_fetch(entitlement))

    if info is None:
        console.print("[yellow]Customer info unavailable[/yellow]")
    if active:
        console.print(f"[bold green]ACTIVE[/bold green] — {entitlement}")
    else:
        console.print(f"[bold red]INACTIVE[/bold red] — {entitlement}")
        raise typer.Exit(1)


@app.command("in-review")
def in_review(
    app_id: Optional[str] = typer.Option(None, help="Apple app id (defaults to settings)"),
    current_version: Optional[str] = typer.Option(None, help="Running app version (defaults to settings)"),
):
    """Check whether the given version is newer than the live App Store version."""
    from purchases_helper.app_review.checker import AppReviewChecker
    from purchases_helper.common.config import get_settings
    from purchases_helper.common.exceptions import AppReviewNotConfiguredError

    checker = AppReviewChecker.from_settings(get_settings())
    if app_id:
        checker.apple_app_id = app_id
    if current_version:
        checker.current_version = current_version

    try:
        result = asyncio.run(checker.is_app_in_review())
    except AppReviewNotConfiguredError as e:
        console.print(f"[bold red]{e.code}[/bold red] — {e.message}")
        raise typer.Exit(1)

    live = checker.live_version
    if result:
        console.print(f"[bold yellow]IN REVIEW[/bold yellow] — {checker.current_version} > live {live}")
    else:
        console.print(f"[bold green]SHIPPING[/bold green] — live version {live}")


if __name__ == "__main__":
    app()
