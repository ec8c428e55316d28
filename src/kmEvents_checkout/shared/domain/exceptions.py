"""Domain exceptions for the checkout client."""


class CheckoutError(Exception):
    """Base exception for checkout errors."""

    @property
    def user_message(self) -> str:
        """Message suitable for showing to the payer."""
        return str(self)


class CheckoutValidationError(CheckoutError):
    """Raised when a request fails client-side validation, before any network call."""


class ApiError(CheckoutError):
    """Raised when the backend answers with an error status or `success: false`."""

    def __init__(
        self,
        status_code: int | None,
        message: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.detail = detail
        super().__init__(message or detail or f"Request failed with status {status_code}")

    @property
    def user_message(self) -> str:
        """Compose `"{message}: {detail}"` when the backend sent both."""
        if self.detail:
            return f"{self.message or 'Payment failed'}: {self.detail}"
        return self.message or str(self)


class ApiTransportError(CheckoutError):
    """Raised when a request never received a response."""


class GatewayLoadError(CheckoutError):
    """Raised when the payment gateway script is not available."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__("Failed to load payment gateway. Please try again.")


class GatewayOpenError(CheckoutError):
    """Raised when the checkout widget could not be constructed or opened."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__("Failed to open payment gateway")


class PaymentVerificationError(CheckoutError):
    """Raised when the backend does not confirm a vendor payment response."""

    def __init__(self, message: str = "Payment verification failed") -> None:
        super().__init__(message)


class CheckoutInProgressError(CheckoutError):
    """Raised when a second checkout is started while one is still in flight."""

    def __init__(self) -> None:
        super().__init__("A payment is already in progress")


class CheckoutSessionNotFoundError(CheckoutError):
    """Raised when a hosted checkout session does not exist."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Checkout session '{session_id}' not found")


class PlanCatalogError(CheckoutError):
    """Raised when the subscription plan catalog cannot be read."""


class EventRequestError(CheckoutError):
    """Raised when the backend rejects an event-creation request."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.code = code
        super().__init__(message)
