from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

from pydantic import TypeAdapter, ValidationError

from hue_bridge.errors import MalformedResponse
from hue_bridge.schemas import BridgeErrorEntry, Datastore, Group


# example: [{"success": {"username": "1234567890"}}]
_SUCCESS_SHAPE: TypeAdapter[list[dict[str, dict[str, str]]]] = TypeAdapter(list[dict[str, dict[str, str]]])
# example: [{"error": {"type": 101, "address": "", "description": "link button not pressed"}}]
_ERROR_SHAPE: TypeAdapter[list[BridgeErrorEntry]] = TypeAdapter(list[BridgeErrorEntry])

_NOT_JSON = object()


@dataclass(frozen=True)
class TokenIssued:
    username: str


@dataclass(frozen=True)
class EmptySuccess:
    raw: str


@dataclass(frozen=True)
class Rejected:
    errors: list[BridgeErrorEntry]


@dataclass(frozen=True)
class Malformed:
    raw: str


@dataclass(frozen=True)
class DatastoreDecoded:
    datastore: Datastore


RegistrationOutcome = Union[TokenIssued, EmptySuccess, Rejected, Malformed]
DatastoreOutcome = Union[DatastoreDecoded, Rejected, Malformed]


def _load(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return _NOT_JSON


def _as_errors(payload: Any) -> list[BridgeErrorEntry] | None:
    try:
        return _ERROR_SHAPE.validate_python(payload)
    except ValidationError:
        return None


def decode_registration(raw: str) -> RegistrationOutcome:
    payload = _load(raw)
    if payload is _NOT_JSON:
        return Malformed(raw=raw)

    try:
        entries = _SUCCESS_SHAPE.validate_python(payload)
    except ValidationError:
        entries = None

    if entries is not None:
        if entries and "success" in entries[0]:
            username = entries[0]["success"].get("username")
            if username:
                return TokenIssued(username=username)
        return EmptySuccess(raw=raw)

    errors = _as_errors(payload)
    if errors is not None:
        return Rejected(errors=errors)
    return Malformed(raw=raw)


def decode_datastore(raw: str) -> DatastoreOutcome:
    payload = _load(raw)
    if payload is _NOT_JSON:
        return Malformed(raw=raw)

    try:
        return DatastoreDecoded(datastore=Datastore.model_validate(payload))
    except ValidationError:
        pass

    errors = _as_errors(payload)
    if errors is not None:
        return Rejected(errors=errors)
    return Malformed(raw=raw)


def decode_group(raw: str) -> Group:
    payload = _load(raw)
    if payload is _NOT_JSON:
        raise MalformedResponse("group body is not JSON", body=raw)
    try:
        return Group.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponse(f"could not decode group: {exc.error_count()} errors", body=raw) from exc
