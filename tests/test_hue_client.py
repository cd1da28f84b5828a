import httpx
import pytest

from hue_bridge.hue_client import HueClient, HueTransportError


def test_hue_client_returns_raw_body_and_status():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.host == "bridge.test"
        return httpx.Response(200, content=b'{"lights":{}}')

    with HueClient(transport=httpx.MockTransport(handler)) as client:
        result = client.get("http://bridge.test/api/user")
        assert result.status_code == 200
        assert result.text == '{"lights":{}}'


def test_hue_client_does_not_raise_on_error_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="not found")

    with HueClient(transport=httpx.MockTransport(handler)) as client:
        result = client.get("http://bridge.test/api/nope")
        assert result.status_code == 404
        assert result.text == "not found"


def test_hue_client_sends_json_content_type_with_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["content_type"] = request.headers.get("content-type")
        seen["body"] = request.content
        return httpx.Response(200, json=[])

    with HueClient(transport=httpx.MockTransport(handler)) as client:
        client.put("http://bridge.test/api/user/lights/1/state", content=b'{"on":true}')

    assert seen == {"method": "PUT", "content_type": "application/json", "body": b'{"on":true}'}


def test_hue_client_raises_transport_error_on_connect_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    client = HueClient(transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(HueTransportError) as exc:
            client.get("http://bridge.test/api")
        assert isinstance(exc.value.__cause__, httpx.ConnectError)
    finally:
        client.close()
