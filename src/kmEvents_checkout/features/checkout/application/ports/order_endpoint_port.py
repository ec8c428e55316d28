"""Order endpoint port - one backend order/verify pair."""

from abc import ABC, abstractmethod
from typing import Any

from kmEvents_checkout.features.checkout.domain import (
    CheckoutRequest,
    Order,
    VendorError,
    VendorResponse,
    VerificationResult,
)


class OrderEndpointPort(ABC):
    """
    Backend endpoint pair that mints orders and verifies widget responses.

    Implementations:
    - BookingOrderEndpoint (`/payments/order`, `/payments/verify`)
    - PaymentOrderEndpoint (`/payments/create-order`, `/payments/verify`)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    def server_priced(self) -> bool:
        """True when the backend decides the amount, so requests carry none."""
        return False

    @abstractmethod
    def description(self, request: CheckoutRequest) -> str:
        """Line shown under the merchant name in the widget."""
        pass

    @abstractmethod
    def notes(self, request: CheckoutRequest, order: Order) -> dict[str, Any]:
        """Free-form notes attached to the vendor order."""
        pass

    @abstractmethod
    async def create_order(self, request: CheckoutRequest) -> Order:
        """
        Mint a fresh vendor order.

        Raises:
            ApiError, ApiTransportError: if the backend refuses or is unreachable.
        """
        pass

    @abstractmethod
    async def verify(
        self, request: CheckoutRequest, order: Order, response: VendorResponse
    ) -> VerificationResult:
        """Ask the backend to check the signed widget response."""
        pass

    @abstractmethod
    async def report_failure(self, order: Order, error: VendorError) -> None:
        """Best-effort failure report. Never raises."""
        pass
