from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from hue_bridge.schemas import BridgeErrorEntry


Retryable = Literal[True, False, "maybe"]


@dataclass(frozen=True)
class ErrorRegistryEntry:
    code: str
    retryable: Retryable


ERROR_CODE_REGISTRY: tuple[ErrorRegistryEntry, ...] = (
    ErrorRegistryEntry(code="discovery_unavailable", retryable=True),
    ErrorRegistryEntry(code="ambiguous_discovery", retryable=False),
    ErrorRegistryEntry(code="bridge_rejected", retryable="maybe"),
    ErrorRegistryEntry(code="not_authorized", retryable="maybe"),
    ErrorRegistryEntry(code="unexpected_response", retryable="maybe"),
    ErrorRegistryEntry(code="malformed_response", retryable="maybe"),
    ErrorRegistryEntry(code="unauthenticated", retryable=False),
    ErrorRegistryEntry(code="transport_error", retryable=True),
    ErrorRegistryEntry(code="encoding_error", retryable=False),
    ErrorRegistryEntry(code="group_zero_fetch_failed", retryable=True),
)


class HueError(Exception):
    code = "hue_error"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def retryable(self) -> Retryable:
        for entry in ERROR_CODE_REGISTRY:
            if entry.code == self.code:
                return entry.retryable
        return "maybe"


class DiscoveryUnavailable(HueError):
    code = "discovery_unavailable"


class AmbiguousDiscovery(HueError):
    code = "ambiguous_discovery"

    def __init__(self, count: int) -> None:
        super().__init__(
            f"discovery returned {count} bridges, expected exactly one",
            details={"count": count},
        )
        self.count = count


class BridgeRejected(HueError):
    code = "bridge_rejected"

    def __init__(self, message: str, *, errors: list["BridgeErrorEntry"]) -> None:
        super().__init__(
            message,
            details={"errors": [entry.error.model_dump() for entry in errors]},
        )
        self.errors = errors


class NotAuthorized(BridgeRejected):
    code = "not_authorized"


class _BodyCarryingError(HueError):
    def __init__(self, message: str, *, body: str) -> None:
        super().__init__(message, details={"body": body})
        self.body = body


class UnexpectedResponse(_BodyCarryingError):
    code = "unexpected_response"


class MalformedResponse(_BodyCarryingError):
    code = "malformed_response"


class Unauthenticated(HueError):
    code = "unauthenticated"


class TransportError(HueError):
    code = "transport_error"


class EncodingError(HueError):
    code = "encoding_error"


class GroupZeroFetchFailed(HueError):
    code = "group_zero_fetch_failed"
