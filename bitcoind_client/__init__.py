"""
bitcoind_client - async JSON-RPC client for Bitcoin Core.
"""

__version__ = "0.1.0"

from bitcoind_client.client import BitcoindClient
from bitcoind_client.config import ClientConfig, RetryConfig, load_config
from bitcoind_client.rpc import BatchOutcome, RetryPolicy, RpcErrorCode, RpcRequest
from bitcoind_client.utils.exceptions import (
    BitcoindClientError,
    DecodeError,
    ErrorKind,
    NodeRpcError,
    ParamError,
    TransportError,
)

__all__ = [
    "__version__",
    "BitcoindClient",
    "ClientConfig",
    "RetryConfig",
    "load_config",
    "BatchOutcome",
    "RetryPolicy",
    "RpcErrorCode",
    "RpcRequest",
    "BitcoindClientError",
    "DecodeError",
    "ErrorKind",
    "NodeRpcError",
    "ParamError",
    "TransportError",
]
