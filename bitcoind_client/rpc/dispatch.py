"""Dispatch core: one logical RPC call end-to-end, with retry and error classification."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from loguru import logger

from bitcoind_client.rpc.protocol import RpcRequest, RpcResponse
from bitcoind_client.rpc.retry import RetryPolicy, RetryRun
from bitcoind_client.rpc.serialization import (
    BatchSlot,
    decode_batch,
    decode_response,
    decode_result,
    encode_batch,
    encode_request,
    new_request_id,
    to_client_error,
)
from bitcoind_client.rpc.transport import HttpTransport, TransportReply
from bitcoind_client.utils.exceptions import (
    BitcoindClientError,
    DecodeError,
    TransportError,
    sanitize_error_message,
)

T = TypeVar("T")

BatchItem = RpcRequest | tuple[str, Sequence[Any]] | tuple[str, Sequence[Any], Any]


@dataclass(slots=True)
class BatchOutcome:
    """Result of one batch entry: either ``value`` or ``error`` is meaningful."""

    request: RpcRequest
    value: Any = None
    error: BitcoindClientError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


def _as_request(item: BatchItem) -> RpcRequest:
    if isinstance(item, RpcRequest):
        return item
    if isinstance(item, tuple) and len(item) in (2, 3):
        method, params = item[0], item[1]
        result_type = item[2] if len(item) == 3 else Any
        return RpcRequest(id=new_request_id(), method=method, params=list(params), result_type=result_type)
    raise TypeError(f"unsupported batch item: {item!r}")


class Dispatcher:
    """
    Executes RPC calls over a shared transport.

    Holds only immutable settings; every call gets its own ``RetryRun``.
    """

    def __init__(
        self,
        transport: HttpTransport,
        policy: RetryPolicy | None = None,
        *,
        jsonrpc_version: str = "1.0",
        timeout: float | None = None,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ):
        self.transport = transport
        self.policy = policy or RetryPolicy()
        self.jsonrpc_version = jsonrpc_version
        self.timeout = timeout
        self._sleep = sleep or asyncio.sleep

    async def call(
        self,
        method: str,
        params: Sequence[Any] | None = None,
        result_type: Any = Any,
        *,
        path: str = "/",
    ) -> Any:
        """Run one RPC and decode its result into ``result_type``."""
        request = RpcRequest(id=new_request_id(), method=method, params=list(params or []))
        body = encode_request(request, self.jsonrpc_version)
        logger.debug("RPC {} ({} params) -> {}", method, len(request.params), path)
        response = await self._run(lambda: self._attempt(request, body, path), label=method)
        return decode_result(response.result, result_type, method=method)

    async def call_batch(
        self,
        items: Sequence[BatchItem],
        *,
        path: str = "/",
        partial: bool = True,
    ) -> list[BatchOutcome]:
        """
        Run a batch as one HTTP request. Transport failures retry the whole
        batch; per-entry RPC errors never abort decoding of the others.
        """
        requests = [_as_request(item) for item in items]
        body = encode_batch(requests, self.jsonrpc_version)
        label = f"batch[{len(requests)}]"
        logger.debug("RPC {} -> {}", label, path)
        slots = await self._run(lambda: self._attempt_batch(requests, body, path, partial), label=label)

        outcomes: list[BatchOutcome] = []
        for request, slot in zip(requests, slots):
            if isinstance(slot, DecodeError):
                outcomes.append(BatchOutcome(request=request, error=slot))
                continue
            if not slot.ok:
                outcomes.append(BatchOutcome(request=request, error=to_client_error(slot, method=request.method)))
                continue
            try:
                value = decode_result(slot.result, request.result_type, method=request.method)
            except DecodeError as exc:
                outcomes.append(BatchOutcome(request=request, error=exc))
                continue
            outcomes.append(BatchOutcome(request=request, value=value))
        return outcomes

    async def _run(self, attempt: Callable[[], Awaitable[T]], *, label: str) -> T:
        run = RetryRun(self.policy)
        while True:
            n = run.begin_attempt()
            try:
                result = await attempt()
            except BitcoindClientError as exc:
                delay = run.fail(exc)
                if delay is None:
                    if n > 1:
                        logger.warning(
                            "RPC {} gave up after {} attempt(s): {}", label, n, sanitize_error_message(str(exc))
                        )
                    raise
                logger.warning(
                    "RPC {} attempt {}/{} failed with {}, retrying in {:.2f}s",
                    label,
                    n,
                    self.policy.max_attempts,
                    exc.code,
                    delay,
                )
                await self._sleep(delay)
                continue
            run.succeed()
            logger.debug("RPC {} ok after {} attempt(s)", label, n)
            return result

    async def _attempt(self, request: RpcRequest, body: bytes, path: str) -> RpcResponse:
        reply = await self.transport.send(path, body, timeout=self.timeout)
        if 200 <= reply.status_code < 300:
            response = decode_response(reply.body, method=request.method)
        else:
            response = self._error_reply(reply, request.method)
        if response.id is not None and response.id != request.id:
            raise DecodeError(
                f"response id {response.id!r} does not match request id {request.id!r}",
                method=request.method,
            )
        if not response.ok:
            raise to_client_error(response, method=request.method, retryable_codes=self.policy.retryable_rpc_codes)
        return response

    async def _attempt_batch(
        self,
        requests: list[RpcRequest],
        body: bytes,
        path: str,
        partial: bool,
    ) -> list[BatchSlot]:
        reply = await self.transport.send(path, body, timeout=self.timeout)
        if not 200 <= reply.status_code < 300:
            response = self._error_reply(reply, "batch")
            raise to_client_error(response, method="batch", retryable_codes=self.policy.retryable_rpc_codes)
        return decode_batch(reply.body, requests, partial=partial)

    def _error_reply(self, reply: TransportReply, method: str) -> RpcResponse:
        """
        Non-2xx reply. Bitcoin Core reports legacy JSON-RPC errors with HTTP
        500/404 and a JSON body; only a bare status is a transport failure.
        """
        try:
            response = decode_response(reply.body, method=method)
        except DecodeError:
            response = None
        if response is not None and not response.ok:
            return response
        hint = ""
        if reply.status_code == 401:
            hint = " (check rpc credentials)"
        elif reply.status_code == 403:
            hint = " (check rpcallowip)"
        raise TransportError(
            f"HTTP {reply.status_code} from {reply.url}{hint}",
            code="HTTP_STATUS",
            status_code=reply.status_code,
            retryable=self.policy.is_retryable_status(reply.status_code),
        )


__all__ = ["BatchItem", "BatchOutcome", "Dispatcher"]
