"""Pydantic schemas for RevenueCat's subscriber REST payload."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from purchases_helper.compatibility.models import CustomerInfo, as_utc


class EntitlementPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    expires_date: Optional[datetime] = None
    purchase_date: Optional[datetime] = None
    product_identifier: str = ""

    def is_active(self, now: datetime) -> bool:
        # No expiry means a lifetime grant.
        if self.expires_date is None:
            return True
        return as_utc(self.expires_date) > now


class SubscriberPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    original_app_user_id: str = ""
    original_application_version: Optional[str] = None
    original_purchase_date: Optional[datetime] = None
    entitlements: dict[str, EntitlementPayload] = Field(default_factory=dict)

    def to_customer_info(self, now: Optional[datetime] = None) -> CustomerInfo:
        now = now or datetime.now(timezone.utc)
        return CustomerInfo(
            entitlements={
                name: ent.is_active(now) for name, ent in self.entitlements.items()
            },
            original_application_version=self.original_application_version,
            original_purchase_date=as_utc(self.original_purchase_date),
        )


class SubscriberResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    subscriber: SubscriberPayload
