from __future__ import annotations

from hue_bridge.decoder import DatastoreOutcome, decode_datastore, decode_group
from hue_bridge.errors import GroupZeroFetchFailed, MalformedResponse, TransportError
from hue_bridge.hue_client import HueClient, HueTransportError
from hue_bridge.schemas import BridgeErrorEntry, Datastore, Group


UNAUTHORIZED_USER = 1
GROUP_ZERO = "0"


def user_url(host: str, username: str) -> str:
    return f"http://{host}/api/{username}"


def fetch_datastore(hue: HueClient, *, host: str, username: str) -> DatastoreOutcome:
    try:
        result = hue.get(user_url(host, username))
    except HueTransportError as exc:
        raise TransportError(f"datastore request failed: {exc}") from exc
    return decode_datastore(result.text)


def fetch_group_zero(hue: HueClient, *, host: str, username: str) -> Group:
    """
    Group 0 ("all lights") is never part of the bulk datastore dump.
    """
    try:
        result = hue.get(f"{user_url(host, username)}/groups/{GROUP_ZERO}")
    except HueTransportError as exc:
        raise GroupZeroFetchFailed(f"could not get group 0: {exc}") from exc
    try:
        return decode_group(result.text)
    except MalformedResponse as exc:
        raise GroupZeroFetchFailed(
            f"could not decode group 0: {exc}",
            details={"body": result.text},
        ) from exc


def is_auth_failure(errors: list[BridgeErrorEntry]) -> bool:
    return len(errors) == 1 and errors[0].error.type == UNAUTHORIZED_USER


def with_group_zero(datastore: Datastore, group: Group) -> Datastore:
    groups = dict(datastore.groups)
    groups[GROUP_ZERO] = group
    return datastore.model_copy(update={"groups": groups})
