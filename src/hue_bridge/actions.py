from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel

from hue_bridge.errors import EncodingError, TransportError
from hue_bridge.hue_client import HueClient, HueTransportError


logger = logging.getLogger("hue_bridge")


@dataclass(frozen=True)
class CommandResult:
    address: str
    status_code: int | None = None
    error: TransportError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def light_state_address(light_id: str) -> str:
    return f"/lights/{light_id}/state"


def group_action_address(group_id: str) -> str:
    return f"/groups/{group_id}/action"


def encode_payload(value: Any) -> bytes:
    try:
        if isinstance(value, BaseModel):
            return value.model_dump_json(exclude_none=True).encode("utf-8")
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"could not encode payload: {exc}") from exc


def dispatch_command(
    hue: HueClient,
    *,
    host: str,
    username: str,
    address: str,
    value: Any,
    settle_delay_s: float,
    sleep: Callable[[float], None] = time.sleep,
) -> CommandResult:
    """PUTs `value` to `address` under the user's API root.

    The bridge needs time to process each command; the settle delay is slept
    after every write attempt, failed or not. The response body is not read
    for per-command errors.
    """
    content = encode_payload(value)
    url = f"http://{host}/api/{username}{address}"
    try:
        result = hue.put(url, content=content)
    except HueTransportError as exc:
        logger.warning("Write to %s failed: %s", address, exc)
        error = TransportError(f"write to {address} failed: {exc}")
        error.__cause__ = exc
        return CommandResult(address=address, error=error)
    finally:
        sleep(settle_delay_s)

    logger.debug("PUT %s -> %s", address, result.status_code)
    return CommandResult(address=address, status_code=result.status_code)
