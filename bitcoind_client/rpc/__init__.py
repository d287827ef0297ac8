"""JSON-RPC wire codec, transport, retry and dispatch."""

from .dispatch import BatchItem, BatchOutcome, Dispatcher
from .protocol import RpcError, RpcErrorCode, RpcRequest, RpcResponse, rpc_code_name
from .retry import RetryPolicy, RetryRun, RetryState
from .serialization import (
    decode_batch,
    decode_response,
    decode_result,
    encode_batch,
    encode_request,
    normalize_rpc_error,
    safe_dict,
    to_jsonable,
)
from .transport import HttpTransport, TransportReply

__all__ = [
    "BatchItem",
    "BatchOutcome",
    "Dispatcher",
    "HttpTransport",
    "TransportReply",
    "RetryPolicy",
    "RetryRun",
    "RetryState",
    "RpcError",
    "RpcErrorCode",
    "RpcRequest",
    "RpcResponse",
    "rpc_code_name",
    "safe_dict",
    "to_jsonable",
    "encode_request",
    "encode_batch",
    "decode_response",
    "decode_batch",
    "decode_result",
    "normalize_rpc_error",
]
