from hue_bridge import errors
from hue_bridge.schemas import BridgeErrorDetail, BridgeErrorEntry


def test_every_error_class_has_a_registered_code():
    registered = {entry.code for entry in errors.ERROR_CODE_REGISTRY}
    classes = [
        errors.DiscoveryUnavailable,
        errors.AmbiguousDiscovery,
        errors.BridgeRejected,
        errors.NotAuthorized,
        errors.UnexpectedResponse,
        errors.MalformedResponse,
        errors.Unauthenticated,
        errors.TransportError,
        errors.EncodingError,
        errors.GroupZeroFetchFailed,
    ]
    assert {cls.code for cls in classes} == registered


def test_not_authorized_is_a_bridge_rejection_with_details():
    entry = BridgeErrorEntry(error=BridgeErrorDetail(type=1, address="/", description="unauthorized user"))
    err = errors.NotAuthorized("unauthorized user", errors=[entry])
    assert isinstance(err, errors.BridgeRejected)
    assert err.details == {"errors": [{"type": 1, "address": "/", "description": "unauthorized user"}]}
    assert err.retryable == "maybe"


def test_retryable_flags():
    assert errors.TransportError("down").retryable is True
    assert errors.Unauthenticated("no user").retryable is False
    assert errors.AmbiguousDiscovery(2).details == {"count": 2}
