"""
Exception hierarchy and error handling utilities for bitcoind_client.

Provides:
- One client error base class with a kind tag (transport, rpc, decode, param)
- Transport, node RPC, decode and parameter errors carrying diagnosis details
- Safe error message formatting (no credential leak)
- Exception classification used by the transport to tag retryable failures
"""

from __future__ import annotations

import asyncio
import json
import re
from enum import Enum
from typing import Any

import httpx


class ErrorKind(Enum):
    """Which stage of a call produced the error."""
    TRANSPORT = "transport"
    RPC = "rpc"
    DECODE = "decode"
    PARAM = "param"


class BitcoindClientError(Exception):
    """Base exception for every failure surfaced by the client."""

    def __init__(
        self,
        message: str,
        code: str = "CLIENT_ERROR",
        kind: ErrorKind = ErrorKind.TRANSPORT,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.details = details or {}
        self.retryable = retryable

    @property
    def attempts(self) -> int | None:
        """Number of transport invocations made before this error was raised."""
        value = self.details.get("attempts")
        return int(value) if value is not None else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "kind": self.kind.value,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class TransportError(BitcoindClientError):
    """Connection, timeout, TLS or DNS failure, or a bare non-2xx HTTP status."""

    def __init__(
        self,
        message: str,
        code: str = "TRANSPORT_ERROR",
        status_code: int | None = None,
        retryable: bool = False,
        details: dict[str, Any] | None = None,
    ):
        merged = dict(details or {})
        if status_code is not None:
            merged["status_code"] = status_code
        super().__init__(message, code=code, kind=ErrorKind.TRANSPORT, details=merged, retryable=retryable)
        self.status_code = status_code


class NodeRpcError(BitcoindClientError):
    """The node answered with a structured JSON-RPC ``error`` object."""

    def __init__(
        self,
        rpc_code: int,
        rpc_message: str,
        method: str | None = None,
        data: Any = None,
        retryable: bool = False,
    ):
        from bitcoind_client.rpc.protocol import rpc_code_name

        details: dict[str, Any] = {"rpc_code": rpc_code, "method": method}
        if data is not None:
            details["data"] = data
        prefix = f"{method}: " if method else ""
        super().__init__(
            f"{prefix}{rpc_message} (code {rpc_code})",
            code=rpc_code_name(rpc_code) or "RPC_ERROR",
            kind=ErrorKind.RPC,
            details=details,
            retryable=retryable,
        )
        self.rpc_code = rpc_code
        self.rpc_message = rpc_message
        self.method = method
        self.data = data


class DecodeError(BitcoindClientError):
    """The response body or the ``result`` payload did not have the expected shape."""

    def __init__(self, message: str, method: str | None = None, body: str | bytes | None = None):
        details: dict[str, Any] = {"method": method}
        if body is not None:
            text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
            details["body"] = text[:200]
        super().__init__(message, code="DECODE_ERROR", kind=ErrorKind.DECODE, details=details)
        self.method = method


class ParamError(BitcoindClientError):
    """Request parameters were rejected before anything was sent."""

    def __init__(self, message: str, method: str | None = None):
        super().__init__(message, code="INVALID_PARAMS", kind=ErrorKind.PARAM, details={"method": method})
        self.method = method


_SENSITIVE_PATTERNS = [
    re.compile(r"(rpc[_-]?password|password|cookie|auth|token|secret)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"basic\s+[a-zA-Z0-9+/]+=*", re.IGNORECASE),
    re.compile(r"(?<=://)[^/@\s:]+:[^/@\s]+(?=@)"),
    re.compile(r"__cookie__:[a-f0-9]+", re.IGNORECASE),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove credentials (URL userinfo, basic auth headers, cookie secrets) from text."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: BaseException) -> tuple[str, ErrorKind, bool]:
    """
    Classify an exception and return (error_code, kind, should_retry).

    Client errors keep their own classification; raw httpx/asyncio errors are
    mapped the same way the transport maps them.
    """
    if isinstance(exc, BitcoindClientError):
        return exc.code, exc.kind, exc.retryable

    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return "TIMEOUT", ErrorKind.TRANSPORT, True

    if isinstance(exc, httpx.ConnectError):
        return "CONNECTION_ERROR", ErrorKind.TRANSPORT, True

    if isinstance(exc, (httpx.NetworkError, httpx.RemoteProtocolError)):
        return "NETWORK_ERROR", ErrorKind.TRANSPORT, True

    if isinstance(exc, ConnectionError):
        return "CONNECTION_ERROR", ErrorKind.TRANSPORT, True

    if isinstance(exc, httpx.HTTPError):
        return "HTTP_ERROR", ErrorKind.TRANSPORT, False

    if isinstance(exc, httpx.InvalidURL):
        return "INVALID_URL", ErrorKind.TRANSPORT, False

    if isinstance(exc, (json.JSONDecodeError, UnicodeDecodeError)):
        return "DECODE_ERROR", ErrorKind.DECODE, False

    if isinstance(exc, (TypeError, ValueError)):
        return "INVALID_PARAMS", ErrorKind.PARAM, False

    return "CLIENT_ERROR", ErrorKind.TRANSPORT, False
