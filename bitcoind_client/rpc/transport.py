"""HTTP transport for the node's JSON-RPC endpoint."""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from loguru import logger

from bitcoind_client.utils.exceptions import TransportError, classify_exception, sanitize_error_message

DEFAULT_HEADERS = {"Content-Type": "application/json"}

_ERROR_LABELS = {
    "TIMEOUT": "timeout",
    "CONNECTION_ERROR": "connection error",
    "NETWORK_ERROR": "network error",
    "INVALID_URL": "invalid url",
}


@dataclass(slots=True)
class TransportReply:
    """Raw HTTP reply; status codes are interpreted by the dispatcher."""

    status_code: int
    body: bytes
    url: str


class HttpTransport:
    """POSTs request bodies to ``base_url + path`` over a shared connection pool."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str):
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    def url_for(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    async def send(self, path: str, body: bytes, *, timeout: float | None = None) -> TransportReply:
        url = self.url_for(path)
        if self.http_client.is_closed:
            raise TransportError(f"client is closed, cannot call {url}", code="CLIENT_CLOSED")
        try:
            resp = await self.http_client.post(
                url,
                content=body,
                headers=DEFAULT_HEADERS,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            code, _, retryable = classify_exception(exc)
            label = _ERROR_LABELS.get(code, "http error")
            raise TransportError(
                f"{label} calling {url}: {sanitize_error_message(str(exc))}",
                code=code,
                retryable=retryable,
            ) from exc

        logger.trace("POST {} -> {} ({} bytes)", url, resp.status_code, len(resp.content))
        return TransportReply(status_code=int(resp.status_code), body=resp.content, url=url)

    async def aclose(self) -> None:
        await self.http_client.aclose()
