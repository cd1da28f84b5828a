from __future__ import annotations

import json
import logging

from pydantic import TypeAdapter, ValidationError

from hue_bridge.errors import AmbiguousDiscovery, DiscoveryUnavailable
from hue_bridge.hue_client import HueClient, HueTransportError
from hue_bridge.schemas import DiscoveredBridge


logger = logging.getLogger("hue_bridge")

_BRIDGE_LIST: TypeAdapter[list[DiscoveredBridge]] = TypeAdapter(list[DiscoveredBridge])


def discover_bridges(hue: HueClient, url: str) -> list[DiscoveredBridge]:
    """
    Queries the N-UPnP cloud endpoint for bridges registered from this network.
    """
    try:
        result = hue.get(url)
    except HueTransportError as exc:
        raise DiscoveryUnavailable(f"could not get {url}: {exc}") from exc

    if result.status_code >= 400:
        raise DiscoveryUnavailable(
            f"discovery endpoint returned HTTP {result.status_code}",
            details={"status": result.status_code, "body": result.text},
        )

    try:
        return _BRIDGE_LIST.validate_python(json.loads(result.text))
    except (ValueError, ValidationError) as exc:
        raise DiscoveryUnavailable(
            "could not decode discovery response",
            details={"body": result.text},
        ) from exc


def resolve_host(hue: HueClient, url: str, current: str | None) -> str:
    if current:
        return current

    bridges = discover_bridges(hue, url)
    # Multi-bridge networks would need a selection policy; refuse to guess.
    if len(bridges) != 1:
        raise AmbiguousDiscovery(len(bridges))

    bridge = bridges[0]
    logger.info("Discovered bridge %s at %s", bridge.id or "?", bridge.internalipaddress)
    return bridge.internalipaddress
