from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import os


DEFAULT_DISCOVERY_URL = "http://www.meethue.com/api/nupnp"
DEFAULT_DEVICETYPE = "hue-bridge-client"


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class ClientConfig:
    bridge_host: Optional[str] = None
    username: Optional[str] = None
    discovery_url: str = DEFAULT_DISCOVERY_URL
    devicetype: str = DEFAULT_DEVICETYPE
    settle_delay_ms: int = 100
    timeout_seconds: float = 10.0
    connect_timeout_seconds: float = 3.0

    @staticmethod
    def from_env() -> "ClientConfig":
        return ClientConfig(
            bridge_host=_optional(os.getenv("HUE_BRIDGE_HOST")),
            username=_optional(os.getenv("HUE_USERNAME")),
            discovery_url=os.getenv("HUE_DISCOVERY_URL", DEFAULT_DISCOVERY_URL),
            devicetype=os.getenv("HUE_DEVICETYPE", DEFAULT_DEVICETYPE),
            settle_delay_ms=int(os.getenv("HUE_SETTLE_DELAY_MS", "100")),
            timeout_seconds=float(os.getenv("HUE_TIMEOUT_SECONDS", "10.0")),
            connect_timeout_seconds=float(os.getenv("HUE_CONNECT_TIMEOUT_SECONDS", "3.0")),
        )
