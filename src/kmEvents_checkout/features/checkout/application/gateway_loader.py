"""Reference-counted loader for the vendor checkout script."""

import asyncio
import logging

from kmEvents_checkout.features.checkout.application.ports import (
    ScriptInjectorPort,
    WidgetFactory,
)
from kmEvents_checkout.shared.domain.exceptions import GatewayLoadError

logger = logging.getLogger(__name__)


class GatewayLoader:
    """
    Loads the checkout script at most once while anyone holds it.

    Every `acquire()` that returns True must be paired with one `release()`.
    The script is removed when the last holder releases; a failed load leaves
    nothing behind so the next `acquire()` tries again.
    """

    def __init__(self, injector: ScriptInjectorPort, script_url: str) -> None:
        self._injector = injector
        self._script_url = script_url
        self._factory: WidgetFactory | None = None
        self._ref_count = 0
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._factory is not None

    @property
    def ref_count(self) -> int:
        return self._ref_count

    @property
    def widget_factory(self) -> WidgetFactory:
        if self._factory is None:
            raise GatewayLoadError("checkout script is not loaded")
        return self._factory

    async def acquire(self) -> bool:
        """Make the script available. Returns False if it could not be loaded."""
        async with self._lock:
            if self._factory is None:
                try:
                    self._factory = await self._injector.inject(self._script_url)
                except GatewayLoadError as e:
                    logger.warning("Checkout script failed to load: %s", e.reason)
                    return False
                logger.debug("Checkout script loaded from %s", self._script_url)
            self._ref_count += 1
            return True

    def release(self) -> None:
        if self._ref_count == 0:
            return
        self._ref_count -= 1
        if self._ref_count == 0 and self._factory is not None:
            self._factory = None
            self._injector.remove()
            logger.debug("Checkout script removed")
