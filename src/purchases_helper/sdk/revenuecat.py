"""Async RevenueCat REST client used as the purchases provider."""

from datetime import datetime
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from purchases_helper.common.config import PurchasesHelperSettings
from purchases_helper.common.exceptions import PurchasesNetworkError, PurchasesResponseError
from purchases_helper.common.logging import get_logger
from purchases_helper.compatibility.models import CustomerInfo
from purchases_helper.sdk.schemas import SubscriberResponse

logger = get_logger("sdk.revenuecat")


class RevenueCatClient:
    """
    Fetches a subscriber from ``GET /v1/subscribers/{app_user_id}``.

    One request per call, no retry. Pass ``http`` to share a client (or a
    mock transport in tests); otherwise a client is opened per request.
    """

    def __init__(
        self,
        api_key: str,
        app_user_id: str,
        base_url: str = "https://api.revenuecat.com",
        timeout: float = 10.0,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.app_user_id = app_user_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http

    @classmethod
    def from_settings(
        cls, settings: PurchasesHelperSettings, app_user_id: str
    ) -> "RevenueCatClient":
        return cls(
            api_key=settings.revenuecat_api_key,
            app_user_id=app_user_id,
            base_url=settings.revenuecat_base_url,
            timeout=settings.request_timeout,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    @property
    def subscriber_url(self) -> str:
        return f"{self.base_url}/v1/subscribers/{quote(self.app_user_id, safe='')}"

    async def _get(self, client: httpx.AsyncClient) -> httpx.Response:
        try:
            return await client.get(self.subscriber_url, headers=self._headers(), timeout=self.timeout)
        except httpx.HTTPError as exc:
            raise PurchasesNetworkError(f"RevenueCat request failed: {exc}") from exc

    async def fetch_subscriber(self) -> SubscriberResponse:
        if self._http is not None:
            resp = await self._get(self._http)
        else:
            async with httpx.AsyncClient() as client:
                resp = await self._get(client)

        if resp.status_code >= 400:
            raise PurchasesResponseError(
                f"RevenueCat returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            return SubscriberResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise PurchasesResponseError(
                f"Malformed subscriber payload: {exc}", status_code=resp.status_code
            ) from exc

    async def get_customer_info(self, now: Optional[datetime] = None) -> CustomerInfo:
        payload = await self.fetch_subscriber()
        info = payload.subscriber.to_customer_info(now)
        logger.debug(
            "Fetched customer info for %s: %d active entitlements",
            self.app_user_id,
            len(info.active_entitlements),
        )
        return info
