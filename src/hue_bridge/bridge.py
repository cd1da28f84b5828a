from __future__ import annotations

import logging
import time
from typing import Any, Callable

import httpx

from hue_bridge.actions import CommandResult, dispatch_command, group_action_address, light_state_address
from hue_bridge.config import ClientConfig
from hue_bridge.decoder import Malformed, Rejected
from hue_bridge.discovery import resolve_host
from hue_bridge.errors import MalformedResponse, NotAuthorized, Unauthenticated
from hue_bridge.hue_client import HueClient
from hue_bridge.hue_sync import fetch_datastore, fetch_group_zero, is_auth_failure, with_group_zero
from hue_bridge.pairing import register_user
from hue_bridge.schemas import BridgeErrorEntry, Datastore


logger = logging.getLogger("hue_bridge")


class Bridge:
    """Client state for one Hue bridge: address, user, datastore and last errors.

    All calls are blocking and sequential. Instances hold no locks; share one
    between threads only with external synchronization.
    """

    def __init__(
        self,
        *,
        host: str | None = None,
        username: str | None = None,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or ClientConfig()
        self._host = host or self.config.bridge_host
        self._username = username or self.config.username
        self._hue = HueClient(
            timeout_seconds=self.config.timeout_seconds,
            connect_timeout_seconds=self.config.connect_timeout_seconds,
            transport=transport,
        )
        self._sleep = sleep
        self._datastore = Datastore()
        self._errors: list[BridgeErrorEntry] = []

    @classmethod
    def from_config(cls, config: ClientConfig, *, transport: httpx.BaseTransport | None = None) -> "Bridge":
        return cls(config=config, transport=transport)

    def __enter__(self) -> "Bridge":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._hue.close()

    @property
    def host(self) -> str | None:
        return self._host

    @property
    def username(self) -> str | None:
        return self._username

    @property
    def datastore(self) -> Datastore:
        return self._datastore

    @property
    def errors(self) -> list[BridgeErrorEntry]:
        return list(self._errors)

    def forget_host(self) -> None:
        self._host = None

    def get_host(self) -> str:
        self._host = resolve_host(self._hue, self.config.discovery_url, self._host)
        return self._host

    def create_user(self, username: str | None = None, devicetype: str | None = None) -> str:
        host = self.get_host()
        try:
            token = register_user(
                hue=self._hue,
                host=host,
                username=username,
                devicetype=devicetype or self.config.devicetype,
            )
        except NotAuthorized as exc:
            self._errors = list(exc.errors)
            raise
        self._username = token
        self._errors = []
        return token

    def _require_user(self) -> str:
        if not self._username:
            raise Unauthenticated("no user; call create_user() first")
        return self._username

    def get_state(self) -> Datastore:
        username = self._require_user()
        host = self.get_host()

        outcome = fetch_datastore(self._hue, host=host, username=username)
        self._errors = []
        if isinstance(outcome, Malformed):
            raise MalformedResponse("could not decode datastore", body=outcome.raw)
        if isinstance(outcome, Rejected):
            self._errors = list(outcome.errors)
            if is_auth_failure(outcome.errors):
                raise NotAuthorized(outcome.errors[0].error.description or "unauthorized user", errors=outcome.errors)
            logger.warning(
                "Could not decode datastore; bridge reported %d error(s), keeping previous snapshot",
                len(outcome.errors),
            )
            candidate = self._datastore
        else:
            candidate = outcome.datastore

        group_zero = fetch_group_zero(self._hue, host=host, username=username)
        self._datastore = with_group_zero(candidate, group_zero)
        logger.debug(
            "Synced %d lights and %d groups",
            len(self._datastore.lights),
            len(self._datastore.groups),
        )
        return self._datastore

    def set(self, address: str, value: Any) -> CommandResult:
        username = self._require_user()
        host = self.get_host()
        return dispatch_command(
            self._hue,
            host=host,
            username=username,
            address=address,
            value=value,
            settle_delay_s=self.config.settle_delay_ms / 1000.0,
            sleep=self._sleep,
        )

    def set_light_state(self, light_id: str, value: Any) -> CommandResult:
        return self.set(light_state_address(light_id), value)

    def set_group_action(self, group_id: str, value: Any) -> CommandResult:
        return self.set(group_action_address(group_id), value)
