import httpx
import pytest

from hue_bridge.errors import NotAuthorized
from hue_bridge.pair_tool import main, pair_until_pressed


def _press_after(n_attempts: int):
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api" and request.method == "POST":
            calls["n"] += 1
            if calls["n"] <= n_attempts:
                return httpx.Response(
                    200, json=[{"error": {"type": 101, "address": "", "description": "link button not pressed"}}]
                )
            return httpx.Response(200, json=[{"success": {"username": "0123456789abcdef"}}])
        if request.url.path.endswith("/groups/0"):
            return httpx.Response(200, json={"name": "Group 0", "lights": ["1"], "action": {"on": False}})
        return httpx.Response(
            200,
            json={"lights": {"1": {"name": "Desk", "state": {"on": True, "bri": 254, "reachable": True}}}, "groups": {}},
        )

    return handler, calls


def test_pair_until_pressed_polls_until_button(make_bridge, capsys):
    handler, calls = _press_after(2)
    bridge = make_bridge(handler, host="bridge.test")
    slept = []

    token = pair_until_pressed(
        bridge, devicetype="x#y", timeout_seconds=60, interval_ms=1500, sleep=slept.append
    )

    assert token == "0123456789abcdef"
    assert calls["n"] == 3
    assert slept == [1.5, 1.5]
    assert "Button not pressed yet" in capsys.readouterr().out


def test_pair_until_pressed_times_out(make_bridge):
    handler, _ = _press_after(1000)
    bridge = make_bridge(handler, host="bridge.test")
    now = {"t": 0.0}

    def fake_sleep(seconds: float) -> None:
        now["t"] += seconds

    token = pair_until_pressed(
        bridge,
        devicetype="x#y",
        timeout_seconds=3,
        interval_ms=1000,
        sleep=fake_sleep,
        clock=lambda: now["t"],
    )
    assert token is None


def test_pair_until_pressed_reraises_other_bridge_errors(make_bridge):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"error": {"type": 7, "address": "/username", "description": "invalid value"}}])

    bridge = make_bridge(handler, host="bridge.test")
    with pytest.raises(NotAuthorized):
        pair_until_pressed(bridge, devicetype="x#y", timeout_seconds=5, interval_ms=1)


def test_main_pairs_and_verifies(make_bridge, capsys):
    handler, _ = _press_after(0)
    bridge = make_bridge(handler, host="bridge.test")

    with pytest.raises(SystemExit) as exc:
        main(["--verify"], bridge=bridge)

    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "Paired successfully." in out
    assert "Username (masked): 012345…cdef" in out
    assert "1: Desk [on, bri=254]" in out
    assert "0: Group 0 lights=1" in out


def test_main_exits_nonzero_when_discovery_is_ambiguous(make_bridge, capsys):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    bridge = make_bridge(handler)
    with pytest.raises(SystemExit) as exc:
        main([], bridge=bridge)

    assert exc.value.code == 1
    assert "Could not resolve bridge address" in capsys.readouterr().err
