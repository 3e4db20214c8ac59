"""Purchases-Helper exception hierarchy.

Resolution and formatting never raise; these cover the purchasing backend
boundary and misconfiguration only.
"""


class PurchasesHelperError(Exception):
    """Base exception for all Purchases-Helper errors."""

    def __init__(self, message: str = "", code: str = "PURCHASES_HELPER_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class PurchasesError(PurchasesHelperError):
    """Raised when customer info cannot be obtained from the purchasing backend."""

    def __init__(self, message: str = "Customer info unavailable", code: str = "CUSTOMER_INFO_UNAVAILABLE"):
        super().__init__(message, code=code)


class PurchasesNetworkError(PurchasesError):
    """Raised when the purchasing backend cannot be reached."""

    def __init__(self, message: str = "Purchasing backend unreachable"):
        super().__init__(message, code="NETWORK_ERROR")


class PurchasesResponseError(PurchasesError):
    """Raised when the purchasing backend answers with an error or malformed body."""

    def __init__(self, message: str = "Invalid response from purchasing backend", status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message, code="INVALID_RESPONSE")


class AppReviewNotConfiguredError(PurchasesHelperError):
    """Raised when the app review check runs without an Apple app id."""

    def __init__(self, message: str = "Call configure() with an Apple app id before checking app review"):
        super().__init__(message, code="APP_REVIEW_NOT_CONFIGURED")
