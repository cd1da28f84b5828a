import httpx
import pytest

from hue_bridge.bridge import Bridge
from hue_bridge.config import ClientConfig


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        bridge_host=None,
        username=None,
        discovery_url="http://discovery.test/api/nupnp",
        devicetype="hue-bridge-client#pytest",
        settle_delay_ms=0,
        timeout_seconds=1.0,
        connect_timeout_seconds=1.0,
    )


@pytest.fixture
def make_bridge(config):
    created: list[Bridge] = []

    def _make(handler, **kwargs) -> Bridge:
        kwargs.setdefault("config", config)
        bridge = Bridge(transport=httpx.MockTransport(handler), **kwargs)
        created.append(bridge)
        return bridge

    yield _make
    for bridge in created:
        bridge.close()
