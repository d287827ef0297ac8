"""Wire codec for JSON-RPC request and response frames."""

from __future__ import annotations

import json
import uuid
from collections.abc import Sequence
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any

from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from bitcoind_client.rpc.protocol import JSONRPC_VERSIONS, RpcError, RpcRequest, RpcResponse
from bitcoind_client.utils.exceptions import DecodeError, NodeRpcError, ParamError

BatchSlot = RpcResponse | DecodeError


def safe_dict(value: Any) -> dict[str, Any]:
    """Return the value when dict-like, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def new_request_id() -> str:
    return uuid.uuid4().hex[:16]


def to_jsonable(value: Any) -> Any:
    """Convert params to plain JSON values: models by alias without None fields, enums by value."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return [to_jsonable(item) for item in value]
    return value


def _frame(request: RpcRequest, jsonrpc: str) -> dict[str, Any]:
    if not isinstance(request.method, str) or not request.method.strip():
        raise ParamError("method name must be a non-empty string", method=str(request.method))
    if jsonrpc not in JSONRPC_VERSIONS:
        raise ParamError(f"unsupported jsonrpc version: {jsonrpc}", method=request.method)
    return {
        "jsonrpc": jsonrpc,
        "id": request.id,
        "method": request.method,
        "params": to_jsonable(list(request.params)),
    }


def _dumps(payload: Any, method: str | None) -> bytes:
    try:
        return json.dumps(payload, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise ParamError(f"params are not JSON serializable: {exc}", method=method) from exc


def encode_request(request: RpcRequest, jsonrpc: str = "1.0") -> bytes:
    """Encode one request frame."""
    return _dumps(_frame(request, jsonrpc), request.method)


def encode_batch(requests: Sequence[RpcRequest], jsonrpc: str = "1.0") -> bytes:
    """Encode a batch as one JSON array; ids must be unique within the batch."""
    if not requests:
        raise ParamError("batch must contain at least one request")
    seen: set[str | int] = set()
    frames = []
    for request in requests:
        if request.id in seen:
            raise ParamError(f"duplicate request id in batch: {request.id!r}", method=request.method)
        seen.add(request.id)
        frames.append(_frame(request, jsonrpc))
    return _dumps(frames, None)


def _loads(body: bytes | str, method: str | None) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"response is not valid JSON: {exc}", method=method, body=body) from exc


def normalize_rpc_error(error: Any, *, method: str | None = None) -> RpcError:
    """Validate a node error object; anything without an integer code is a decode failure."""
    row = safe_dict(error)
    code = row.get("code")
    if not row or not isinstance(code, int) or isinstance(code, bool):
        raise DecodeError(f"malformed error object: {error!r}", method=method)
    message = row.get("message")
    return RpcError(code=code, message=str(message) if message is not None else "", data=row.get("data"))


def decode_response_payload(payload: Any, *, method: str | None = None) -> RpcResponse:
    """Decode an already-parsed response object. A non-null ``error`` wins over ``result``."""
    if not isinstance(payload, dict):
        raise DecodeError(f"response is not a JSON object: {type(payload).__name__}", method=method)
    error = payload.get("error")
    if error is not None:
        return RpcResponse(id=payload.get("id"), error=normalize_rpc_error(error, method=method))
    if "result" not in payload:
        raise DecodeError("response carries neither result nor error", method=method)
    return RpcResponse(id=payload.get("id"), result=payload["result"])


def decode_response(body: bytes | str, *, method: str | None = None) -> RpcResponse:
    """Decode one response body."""
    return decode_response_payload(_loads(body, method), method=method)


def decode_batch(
    body: bytes | str,
    requests: Sequence[RpcRequest],
    *,
    partial: bool = False,
) -> list[BatchSlot]:
    """
    Decode a batch reply and restore request order by matching ids.

    Any malformed, duplicated, unknown or missing entry fails the whole decode
    unless ``partial`` is set, in which case the affected slots hold a
    ``DecodeError`` and the well-formed entries are still returned.
    """
    payload = _loads(body, None)
    if isinstance(payload, dict):
        # The node rejected the batch as a whole.
        if payload.get("error") is not None:
            err = normalize_rpc_error(payload["error"])
            raise NodeRpcError(err.code, err.message, method="batch", data=err.data)
        raise DecodeError("batch response is not a JSON array", body=body)
    if not isinstance(payload, list):
        raise DecodeError("batch response is not a JSON array", body=body)

    index_by_id = {request.id: i for i, request in enumerate(requests)}
    slots: list[BatchSlot | None] = [None] * len(requests)
    problems: list[str] = []

    for entry in payload:
        entry_id = safe_dict(entry).get("id")
        position = index_by_id.get(entry_id) if isinstance(entry_id, (str, int)) else None
        if position is None:
            problems.append(f"unexpected response id {entry_id!r}")
            logger.warning("Dropping batch entry with unknown id {}", entry_id)
            continue
        method = requests[position].method
        if slots[position] is not None:
            problems.append(f"duplicate response id {entry_id!r}")
            slots[position] = DecodeError(f"duplicate response id {entry_id!r}", method=method)
            continue
        try:
            slots[position] = decode_response_payload(entry, method=method)
        except DecodeError as exc:
            problems.append(f"entry {position}: {exc.message}")
            slots[position] = exc

    for i, slot in enumerate(slots):
        if slot is None:
            problems.append(f"no response for id {requests[i].id!r}")
            slots[i] = DecodeError(f"no response for id {requests[i].id!r}", method=requests[i].method)

    if problems and not partial:
        raise DecodeError("malformed batch response: " + "; ".join(problems), body=body)
    return [slot for slot in slots if slot is not None]


@lru_cache(maxsize=256)
def _cached_adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def _adapter(result_type: Any) -> TypeAdapter:
    try:
        return _cached_adapter(result_type)
    except TypeError:
        # unhashable type expressions
        return TypeAdapter(result_type)


def decode_result(payload: Any, result_type: Any = Any, *, method: str | None = None) -> Any:
    """Interpret a success payload as ``result_type``; a shape mismatch is a ``DecodeError``."""
    if result_type is Any:
        return payload
    try:
        return _adapter(result_type).validate_python(payload)
    except ValidationError as exc:
        raise DecodeError(
            f"result does not match {getattr(result_type, '__name__', result_type)}: "
            f"{exc.error_count()} validation error(s); first: {exc.errors()[0]['msg']}",
            method=method,
        ) from exc


def to_client_error(response: RpcResponse, *, method: str, retryable_codes: frozenset[int] = frozenset()) -> NodeRpcError:
    """Convert an error response to ``NodeRpcError``."""
    err = response.error or RpcError(code=-1, message=f"{method} failed")
    return NodeRpcError(err.code, err.message, method=method, data=err.data, retryable=err.code in retryable_codes)
