"""Payment gateway ports (interfaces) - Adapter Pattern."""

from abc import ABC, abstractmethod
from typing import Any, Callable

EventHandler = Callable[[dict[str, Any]], None]


class CheckoutWidgetPort(ABC):
    """
    One vendor checkout widget, built from an options dict.

    The options carry `handler` (authorized payload) and `modal.ondismiss`;
    failures arrive through `on("payment.failed", ...)`.

    Implementations:
    - HostedCheckoutWidget
    - MockCheckoutWidget (for tests and local runs)
    """

    @abstractmethod
    def on(self, event: str, handler: EventHandler) -> None:
        """Subscribe to a widget event."""
        pass

    @abstractmethod
    def open(self) -> None:
        """Show the widget to the payer."""
        pass


WidgetFactory = Callable[[dict[str, Any]], CheckoutWidgetPort]


class ScriptInjectorPort(ABC):
    """Makes the vendor's checkout script available and hands back its widget factory."""

    @abstractmethod
    async def inject(self, script_url: str) -> WidgetFactory:
        """
        Load the script.

        Raises:
            GatewayLoadError: if the script cannot be loaded.
        """
        pass

    @abstractmethod
    def remove(self) -> None:
        """Unload the script. Must tolerate an already-removed script."""
        pass
