from __future__ import annotations

from dataclasses import dataclass

import httpx


class HueTransportError(Exception):
    pass


@dataclass(frozen=True)
class HueRawResult:
    status_code: int
    text: str


class HueClient:
    """Thin synchronous wrapper over httpx.

    Bodies are returned as text because the v1 API reuses one endpoint shape
    for success and error payloads; classification happens in the decoder.
    Status codes are reported but never raised on.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 10.0,
        connect_timeout_seconds: float = 3.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = httpx.Timeout(timeout_seconds, connect=connect_timeout_seconds)
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> "HueClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def _get_client(self) -> httpx.Client:
        if self._client:
            return self._client
        self._client = httpx.Client(timeout=self._timeout, transport=self._transport)
        return self._client

    def request(self, *, method: str, url: str, content: bytes | None = None) -> HueRawResult:
        client = self._get_client()
        headers = {"Content-Type": "application/json"} if content is not None else None
        try:
            resp = client.request(method, url, content=content, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise HueTransportError(str(exc) or exc.__class__.__name__) from exc
        return HueRawResult(status_code=resp.status_code, text=resp.text)

    def get(self, url: str) -> HueRawResult:
        return self.request(method="GET", url=url)

    def post(self, url: str, *, content: bytes) -> HueRawResult:
        return self.request(method="POST", url=url, content=content)

    def put(self, url: str, *, content: bytes) -> HueRawResult:
        return self.request(method="PUT", url=url, content=content)
