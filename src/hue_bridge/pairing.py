from __future__ import annotations

import logging

from hue_bridge.decoder import EmptySuccess, Malformed, Rejected, TokenIssued, decode_registration
from hue_bridge.errors import NotAuthorized, TransportError, UnexpectedResponse
from hue_bridge.hue_client import HueClient, HueTransportError
from hue_bridge.schemas import RegistrationRequest


logger = logging.getLogger("hue_bridge")

LINK_BUTTON_NOT_PRESSED = 101


def mask_token(token: str) -> str:
    if len(token) <= 10:
        return "…"
    return f"{token[:6]}…{token[-4:]}"


def register_user(*, hue: HueClient, host: str, username: str | None, devicetype: str | None) -> str:
    """Runs the registration handshake and returns the bridge-issued username.

    The link button on the bridge must have been pressed shortly before the
    call; otherwise the bridge answers with error type 101 and this raises
    `NotAuthorized` carrying that entry.
    """
    body = RegistrationRequest(devicetype=devicetype or None, username=username or None)
    content = body.model_dump_json(exclude_none=True).encode("utf-8")

    try:
        result = hue.post(f"http://{host}/api", content=content)
    except HueTransportError as exc:
        raise TransportError(f"registration request failed: {exc}") from exc

    outcome = decode_registration(result.text)
    if isinstance(outcome, TokenIssued):
        logger.info("Registered user %s on bridge %s", mask_token(outcome.username), host)
        return outcome.username
    if isinstance(outcome, Rejected):
        raise NotAuthorized("user not authorized", errors=outcome.errors)
    if isinstance(outcome, EmptySuccess):
        raise UnexpectedResponse("user not authorized?", body=outcome.raw)

    assert isinstance(outcome, Malformed)
    logger.warning("Unexpected registration response body: %s", outcome.raw)
    raise UnexpectedResponse("unexpected response", body=outcome.raw)
