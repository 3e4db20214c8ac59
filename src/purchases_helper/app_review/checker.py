"""
Heuristic for "is this build currently in App Review".

A build whose version is newer than the live App Store version can only be
running on a reviewer's device (or a developer's). The live version comes
from Apple's public lookup endpoint and is cached after the first fetch.
"""

import re
from enum import Enum
from typing import Optional

import httpx

from purchases_helper.common.config import PurchasesHelperSettings
from purchases_helper.common.exceptions import AppReviewNotConfiguredError
from purchases_helper.common.logging import get_logger

logger = get_logger("app_review")

UNKNOWN_LIVE_VERSION = "0"
_NUMBER = re.compile(r"\d+")


class TestingStatus(str, Enum):
    FORCE_IN_REVIEW = "force_in_review"
    SHIPPING_APP = "shipping_app"


def _components(version: str) -> list[int]:
    parts = []
    for piece in version.strip().split("."):
        match = _NUMBER.match(piece)
        parts.append(int(match.group()) if match else 0)
    return parts


def compare_versions(left: str, right: str) -> int:
    """Numeric comparison of dotted versions: -1, 0 or 1. ``1.10`` > ``1.9``."""
    a, b = _components(left), _components(right)
    width = max(len(a), len(b))
    a += [0] * (width - len(a))
    b += [0] * (width - len(b))
    return (a > b) - (a < b)


class AppReviewChecker:
    """Compares the running version to the live App Store version."""

    def __init__(
        self,
        apple_app_id: Optional[str],
        current_version: str,
        testing_status: TestingStatus = TestingStatus.SHIPPING_APP,
        lookup_url: str = "https://itunes.apple.com/lookup",
        timeout: float = 10.0,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.apple_app_id = apple_app_id
        self.current_version = current_version
        self.testing_status = testing_status
        self.lookup_url = lookup_url
        self.timeout = timeout
        self._http = http
        self.live_version: Optional[str] = None

    @classmethod
    def from_settings(
        cls,
        settings: PurchasesHelperSettings,
        testing_status: TestingStatus = TestingStatus.SHIPPING_APP,
    ) -> "AppReviewChecker":
        return cls(
            apple_app_id=settings.apple_app_id,
            current_version=settings.app_version,
            testing_status=testing_status,
            lookup_url=settings.app_review_lookup_url,
            timeout=settings.request_timeout,
        )

    async def is_app_in_review(self) -> bool:
        if not self.apple_app_id:
            raise AppReviewNotConfiguredError()

        if self.testing_status == TestingStatus.FORCE_IN_REVIEW:
            return True

        live = self.live_version
        if live is None:
            live = await self.refresh()

        return compare_versions(self.current_version, live) > 0

    async def refresh(self) -> str:
        """Fetch and cache the live App Store version."""
        if not self.apple_app_id:
            raise AppReviewNotConfiguredError()

        logger.info("Fetching current app version..")
        self.live_version = await self._fetch_live_version()
        return self.live_version

    async def _fetch_live_version(self) -> str:
        try:
            if self._http is not None:
                resp = await self._http.get(
                    self.lookup_url, params={"id": self.apple_app_id}, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    resp = await client.get(
                        self.lookup_url, params={"id": self.apple_app_id}, timeout=self.timeout
                    )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as exc:
            logger.warning("Failed to fetch data: %s.", exc)
            return self._default_unknown()
        except ValueError as exc:
            logger.warning("Failed to decode API response: %s.", exc)
            return self._default_unknown()

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            logger.warning("Invalid data from Apple's API.")
            return self._default_unknown()

        first = results[0] if results else None
        if not isinstance(first, dict) or not isinstance(first.get("version"), str):
            logger.warning("Unable to find app based on the Apple ID: %s", self.apple_app_id)
            return self._default_unknown()

        version = first["version"]
        logger.info("Found current live version of: %s", version)
        return version

    @staticmethod
    def _default_unknown() -> str:
        logger.info("Defaulting to current live version of `0.0.0`")
        return UNKNOWN_LIVE_VERSION
