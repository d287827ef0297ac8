"""Pytest hooks and fixtures."""

import json
import os
from typing import Any, Callable

import httpx
import pytest

from bitcoind_client import BitcoindClient
from bitcoind_client.rpc.retry import RetryPolicy

Reply = Callable[[Any], httpx.Response]


def ok(result: Any) -> Reply:
    """Reply echoing the request id with a success payload."""
    return lambda payload: httpx.Response(200, json={"result": result, "error": None, "id": payload["id"]})


def rpc_error(code: int, message: str, status: int = 500) -> Reply:
    """Reply the way Bitcoin Core reports a JSON-RPC 1.0 error."""
    return lambda payload: httpx.Response(
        status, json={"result": None, "error": {"code": code, "message": message}, "id": payload["id"]}
    )


def status(code: int, text: str = "") -> Reply:
    return lambda payload: httpx.Response(code, text=text)


class FakeNode:
    """
    ``httpx.MockTransport`` handler standing in for bitcoind.

    Queued replies are consumed first; after that each method answers with
    ``results[method]``. Every request is recorded.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.replies: list[Reply | Exception] = []
        self.results: dict[str, Any] = {}

    def queue(self, *replies: Reply | Exception) -> None:
        self.replies.extend(replies)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payload = json.loads(request.content)
        if self.replies:
            reply = self.replies.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return reply(payload)
        return ok(self.results.get(payload["method"]))(payload)

    @property
    def payloads(self) -> list[Any]:
        return [json.loads(r.content) for r in self.requests]

    @property
    def calls(self) -> list[tuple[str, list[Any], str]]:
        """(method, params, url path) of every single-call request."""
        out = []
        for request, payload in zip(self.requests, self.payloads):
            if isinstance(payload, dict):
                out.append((payload["method"], payload["params"], request.url.path))
        return out


@pytest.fixture
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture
def make_client(node: FakeNode):
    """Build clients wired to the fake node with zero backoff."""

    def _make(**kwargs: Any) -> BitcoindClient:
        kwargs.setdefault("retry", RetryPolicy(max_attempts=3, base_delay_seconds=0.0))
        return BitcoindClient(
            kwargs.pop("url", "http://127.0.0.1:18443"),
            kwargs.pop("username", "alice"),
            kwargs.pop("password", "s3cret"),
            http_transport=httpx.MockTransport(node),
            **kwargs,
        )

    return _make


@pytest.fixture
def client(make_client) -> BitcoindClient:
    return make_client()


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "requires_node: talks to a running bitcoind (skipped unless BITCOIND_URL is set)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip requires_node tests when no node is configured."""
    if os.environ.get("BITCOIND_URL"):
        return
    skip = pytest.mark.skip(reason="Requires a running bitcoind (set BITCOIND_URL)")
    for item in items:
        if "requires_node" in item.keywords:
            item.add_marker(skip)
