from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import time
from typing import Callable

from hue_bridge.bridge import Bridge
from hue_bridge.config import ClientConfig
from hue_bridge.errors import HueError, NotAuthorized
from hue_bridge.pairing import LINK_BUTTON_NOT_PRESSED, mask_token


def _link_button_pending(exc: NotAuthorized) -> bool:
    return any(entry.error.type == LINK_BUTTON_NOT_PRESSED for entry in exc.errors)


def pair_until_pressed(
    bridge: Bridge,
    *,
    devicetype: str,
    timeout_seconds: float,
    interval_ms: int,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.time,
) -> str | None:
    deadline = clock() + timeout_seconds
    attempt = 0
    while clock() < deadline:
        attempt += 1
        try:
            return bridge.create_user(devicetype=devicetype)
        except NotAuthorized as exc:
            if not _link_button_pending(exc):
                raise
        remaining = int(deadline - clock())
        print(f"[{attempt}] Button not pressed yet. Retrying… ({remaining}s left)")
        sleep(max(0.1, interval_ms / 1000.0))
    return None


def _print_summary(bridge: Bridge) -> None:
    datastore = bridge.datastore
    print(f"Lights ({len(datastore.lights)}):")
    for light_id, light in sorted(datastore.lights.items()):
        state = "on" if light.state.on else "off"
        reachable = "" if light.state.reachable else " (unreachable)"
        print(f"  {light_id}: {light.name} [{state}, bri={light.state.bri}]{reachable}")
    print(f"Groups ({len(datastore.groups)}):")
    for group_id, group in sorted(datastore.groups.items()):
        print(f"  {group_id}: {group.name} lights={','.join(group.lights) or '-'}")


def main(argv: list[str] | None = None, *, bridge: Bridge | None = None) -> None:
    env = ClientConfig.from_env()
    parser = argparse.ArgumentParser(prog="hue-bridge-pair")
    parser.add_argument("--bridge-host", default=env.bridge_host)
    parser.add_argument("--devicetype", default=env.devicetype)
    parser.add_argument("--timeout-seconds", type=int, default=60)
    parser.add_argument("--interval-ms", type=int, default=1500)
    parser.add_argument("--print-key", action="store_true", help="Print the bridge username (sensitive).")
    parser.add_argument("--verify", action="store_true", help="Fetch the datastore and list lights and groups.")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if bridge is None:
        config = dataclasses.replace(env, bridge_host=args.bridge_host, devicetype=args.devicetype)
        bridge = Bridge.from_config(config)

    with bridge:
        try:
            host = bridge.get_host()
        except HueError as exc:
            print(f"Could not resolve bridge address: {exc}", file=sys.stderr)
            raise SystemExit(1)
        print(f"Using bridge at {host}")

        if bridge.username:
            print("Using existing username from HUE_USERNAME.")
        else:
            print("Pairing requires the physical Hue Bridge button.")
            print("Press the bridge button now. Pairing attempts will run until success or timeout.")
            try:
                token = pair_until_pressed(
                    bridge,
                    devicetype=args.devicetype,
                    timeout_seconds=args.timeout_seconds,
                    interval_ms=args.interval_ms,
                )
            except HueError as exc:
                print(f"Pairing failed: {exc.code}: {exc}", file=sys.stderr)
                raise SystemExit(1)
            if token is None:
                print("Pairing timed out.", file=sys.stderr)
                raise SystemExit(1)
            print("Paired successfully.")
            if args.print_key:
                print(f"Username: {token}")
            else:
                print(f"Username (masked): {mask_token(token)}")

        if args.verify:
            try:
                bridge.get_state()
            except HueError as exc:
                print(f"Verify failed: {exc.code}: {exc}", file=sys.stderr)
                raise SystemExit(1)
            _print_summary(bridge)

    raise SystemExit(0)


if __name__ == "__main__":
    main()
