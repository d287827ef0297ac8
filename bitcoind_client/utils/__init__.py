"""Utility functions for bitcoind_client."""

from bitcoind_client.utils.exceptions import (
    BitcoindClientError,
    TransportError,
    NodeRpcError,
    DecodeError,
    ParamError,
    ErrorKind,
    classify_exception,
    sanitize_error_message,
)

__all__ = [
    "BitcoindClientError",
    "TransportError",
    "NodeRpcError",
    "DecodeError",
    "ParamError",
    "ErrorKind",
    "classify_exception",
    "sanitize_error_message",
]
