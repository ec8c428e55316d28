import asyncio

import httpx
import pytest

from kmEvents_checkout.features.checkout.application.gateway_loader import GatewayLoader
from kmEvents_checkout.features.checkout.infrastructure.adapters import (
    HostedCheckoutWidget,
    HostedScriptInjector,
    MockScriptInjector,
)
from kmEvents_checkout.shared.domain.exceptions import GatewayLoadError

from tests.conftest import SCRIPT_URL


async def test_script_loads_once_for_concurrent_holders(loader, injector):
    results = await asyncio.gather(loader.acquire(), loader.acquire(), loader.acquire())

    assert results == [True, True, True]
    assert injector.inject_count == 1
    assert loader.ref_count == 3


async def test_script_removed_after_last_release(loader, injector):
    await loader.acquire()
    await loader.acquire()

    loader.release()
    assert loader.loaded
    assert injector.remove_count == 0

    loader.release()
    assert not loader.loaded
    assert injector.remove_count == 1


async def test_release_without_holders_is_harmless(loader, injector):
    loader.release()
    await loader.acquire()
    loader.release()
    loader.release()

    assert loader.ref_count == 0
    assert injector.remove_count == 1


async def test_failed_load_is_retried_on_next_acquire():
    injector = MockScriptInjector(fail=True)
    loader = GatewayLoader(injector, SCRIPT_URL)

    assert await loader.acquire() is False
    assert loader.ref_count == 0

    injector.fail = False
    assert await loader.acquire() is True
    assert injector.inject_count == 2


def test_widget_factory_requires_loaded_script(loader):
    with pytest.raises(GatewayLoadError):
        loader.widget_factory


async def test_hosted_injector_probes_script_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, str(request.url)))
        return httpx.Response(200)

    injector = HostedScriptInjector(transport=httpx.MockTransport(handler))

    factory = await injector.inject(SCRIPT_URL)

    assert factory is HostedCheckoutWidget
    assert seen == [("HEAD", SCRIPT_URL)]


async def test_hosted_injector_fails_on_error_status():
    injector = HostedScriptInjector(transport=httpx.MockTransport(lambda r: httpx.Response(503)))

    with pytest.raises(GatewayLoadError):
        await injector.inject(SCRIPT_URL)


async def test_hosted_injector_fails_when_unreachable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    injector = HostedScriptInjector(transport=httpx.MockTransport(handler))

    with pytest.raises(GatewayLoadError):
        await injector.inject(SCRIPT_URL)


def test_hosted_widget_page_options_drop_callables():
    widget = HostedCheckoutWidget(
        {
            "key": "rzp_test_key",
            "amount": 50000,
            "handler": lambda payload: None,
            "modal": {"ondismiss": lambda: None},
        }
    )

    assert widget.page_options() == {"key": "rzp_test_key", "amount": 50000, "modal": {}}
