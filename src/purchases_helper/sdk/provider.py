"""Interface to the purchasing backend that owns customer records."""

from typing import Optional, Protocol

from purchases_helper.compatibility.models import CustomerInfo


class PurchasesProvider(Protocol):
    """
    Source of the current customer's info.

    Implementations own caching and retry policy. Failures are raised as
    ``PurchasesError``; ``None`` means the backend had no record.
    """

    async def get_customer_info(self) -> Optional[CustomerInfo]:
        ...
