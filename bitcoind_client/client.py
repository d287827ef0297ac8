"""Client facade: one connection pool, typed methods, wallet views."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlsplit, urlunsplit

import httpx
from loguru import logger

from bitcoind_client.config.loader import read_cookie_file
from bitcoind_client.config.schema import ClientConfig, RetryConfig
from bitcoind_client.methods import BroadcasterMethods, ReaderMethods, SignerMethods, WalletMethods
from bitcoind_client.rpc.dispatch import BatchItem, BatchOutcome, Dispatcher
from bitcoind_client.rpc.protocol import JSONRPC_VERSIONS
from bitcoind_client.rpc.retry import RetryPolicy
from bitcoind_client.rpc.transport import HttpTransport
from bitcoind_client.utils.exceptions import ParamError

DEFAULT_TIMEOUT_SECONDS = 30.0


def split_userinfo(url: str) -> tuple[str, str | None, str | None]:
    """Strip ``user:password@`` from ``url``; returns (clean url, user, password)."""
    parts = urlsplit(url)
    userinfo, sep, hostport = parts.netloc.rpartition("@")
    if not sep:
        return url, None, None
    user, _, password = userinfo.partition(":")
    clean = urlunsplit((parts.scheme, hostport, parts.path, parts.query, parts.fragment))
    return clean, unquote(user) or None, unquote(password) or None


def _check_url(url: str) -> None:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ParamError(f"invalid node url {url!r}: {exc}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ParamError(f"node url must be http:// or https:// with a host, got {url!r}")


def _resolve_policy(retry: RetryPolicy | RetryConfig | None) -> RetryPolicy:
    if retry is None:
        return RetryPolicy()
    if isinstance(retry, RetryConfig):
        return retry.to_policy()
    return retry


class BitcoindClient(ReaderMethods, BroadcasterMethods, WalletMethods, SignerMethods):
    """
    Async client for a Bitcoin Core node.

    Credentials come from ``username``/``password``, then from userinfo in
    ``url``, then from ``cookie_file``. Every call and every view returned by
    ``for_wallet`` share one ``httpx.AsyncClient``; only the facade that
    created the pool closes it.

    Usage::

        async with BitcoindClient("http://127.0.0.1:18443", "user", "pass") as client:
            height = await client.get_block_count()
            funded = await client.for_wallet("alice").wallet_create_funded_psbt([], outputs)
    """

    def __init__(
        self,
        url: str,
        username: str | None = None,
        password: str | None = None,
        *,
        cookie_file: Path | str | None = None,
        wallet: str | None = None,
        timeout: float | None = None,
        retry: RetryPolicy | RetryConfig | None = None,
        jsonrpc_version: str | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        jsonrpc_version = jsonrpc_version or "1.0"
        if jsonrpc_version not in JSONRPC_VERSIONS:
            raise ParamError(f"unsupported jsonrpc version: {jsonrpc_version}")
        url, url_user, url_password = split_userinfo(url)
        _check_url(url)
        if username is None and password is None:
            username, password = url_user, url_password

        auth: httpx.Auth | None = None
        if username is not None and password is not None:
            auth = httpx.BasicAuth(username, password)
        elif cookie_file is not None:
            auth = httpx.BasicAuth(*read_cookie_file(cookie_file))
        else:
            logger.debug("No RPC credentials configured for {}", url)

        timeout = DEFAULT_TIMEOUT_SECONDS if timeout is None else timeout
        http = httpx.AsyncClient(auth=auth, timeout=timeout, transport=http_transport)
        transport = HttpTransport(http, url)
        dispatcher = Dispatcher(
            transport,
            _resolve_policy(retry),
            jsonrpc_version=jsonrpc_version,
            timeout=timeout,
        )
        self._setup(url, wallet, dispatcher, owns_pool=True)

    def _setup(self, url: str, wallet: str | None, dispatcher: Dispatcher, *, owns_pool: bool) -> None:
        self.url = url
        self.wallet = wallet
        self._dispatcher = dispatcher
        self._owns_pool = owns_pool
        self._closed = False

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> BitcoindClient:
        auth = config.auth()
        username, password = auth if auth is not None else (None, None)
        return cls(
            config.url,
            username,
            password,
            wallet=config.wallet,
            timeout=config.timeout_seconds,
            retry=config.retry,
            jsonrpc_version=config.jsonrpc_version,
            http_transport=http_transport,
        )

    def for_wallet(self, name: str) -> BitcoindClient:
        """A view of this client whose wallet-scoped calls go to ``/wallet/<name>``."""
        if not isinstance(name, str):
            raise ParamError("wallet name must be a string")
        view = object.__new__(type(self))
        view._setup(self.url, name, self._dispatcher, owns_pool=False)
        return view

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._dispatcher.policy

    async def call(self, method: str, *params: Any, result_type: Any = Any, wallet: bool = False) -> Any:
        """Call any RPC by name; ``wallet=True`` routes it to the configured wallet."""
        return await self._call(method, list(params), result_type, wallet_scoped=wallet)

    async def call_batch(
        self,
        items: Sequence[BatchItem],
        *,
        wallet: bool = False,
        partial: bool = True,
    ) -> list[BatchOutcome]:
        """
        Send several calls in one HTTP request.

        Items are ``RpcRequest`` objects or ``(method, params[, result_type])``
        tuples. Outcomes come back in item order, each holding a value or an error.
        """
        path = self._wallet_path() if wallet else "/"
        return await self._dispatcher.call_batch(items, path=path, partial=partial)

    async def aclose(self) -> None:
        if not self._owns_pool or self._closed:
            return
        self._closed = True
        await self._dispatcher.transport.aclose()

    async def __aenter__(self) -> BitcoindClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"BitcoindClient(url={self.url!r}, wallet={self.wallet!r})"
