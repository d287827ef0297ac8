"""Retry policy and the per-call retry state machine."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from bitcoind_client.rpc.protocol import RpcErrorCode
from bitcoind_client.utils.exceptions import BitcoindClientError, ErrorKind

DEFAULT_RETRYABLE_RPC_CODES = frozenset(
    {RpcErrorCode.RPC_IN_WARMUP.value, RpcErrorCode.RPC_CLIENT_IN_INITIAL_DOWNLOAD.value}
)
DEFAULT_RETRYABLE_STATUS_CODES = frozenset({408, 429})


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Bounded fixed or exponential backoff."""

    max_attempts: int = 3
    backoff: Literal["fixed", "exponential"] = "exponential"
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 10.0
    max_elapsed_seconds: float | None = None
    retryable_rpc_codes: frozenset[int] = DEFAULT_RETRYABLE_RPC_CODES
    retryable_status_codes: frozenset[int] = DEFAULT_RETRYABLE_STATUS_CODES

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay_seconds < 0 or self.max_delay_seconds < 0:
            raise ValueError("backoff delays must be >= 0")

    def delay_for(self, attempt: int) -> float:
        """Delay before attempt ``attempt + 1``; ``attempt`` counts from 1."""
        if self.backoff == "fixed":
            delay = self.base_delay_seconds
        else:
            delay = self.base_delay_seconds * (2 ** (attempt - 1))
        return min(self.max_delay_seconds, delay)

    def is_retryable_status(self, status_code: int) -> bool:
        return status_code >= 500 or status_code in self.retryable_status_codes


class RetryState(Enum):
    ATTEMPTING = "attempting"
    BACKOFF = "backoff"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass(slots=True)
class RetryRun:
    """
    Retry bookkeeping for one call.

    ATTEMPTING -> SUCCEEDED on success, -> BACKOFF when the failure is
    transient and the budget allows another attempt, -> EXHAUSTED otherwise.
    BACKOFF -> ATTEMPTING once the delay has elapsed.
    """

    policy: RetryPolicy
    state: RetryState = RetryState.ATTEMPTING
    attempts: int = 0
    started_at: float = field(default_factory=time.monotonic)
    last_error: BitcoindClientError | None = None

    def begin_attempt(self) -> int:
        if self.state not in (RetryState.ATTEMPTING, RetryState.BACKOFF):
            raise RuntimeError(f"cannot attempt from state {self.state.value}")
        self.state = RetryState.ATTEMPTING
        self.attempts += 1
        return self.attempts

    def succeed(self) -> None:
        self.state = RetryState.SUCCEEDED

    def elapsed(self) -> float:
        return time.monotonic() - self.started_at

    def fail(self, error: BitcoindClientError) -> float | None:
        """
        Record a failed attempt. Returns the backoff delay when another attempt
        is allowed, or None when the run is exhausted.
        """
        self.last_error = error
        error.details["attempts"] = self.attempts
        if not self._is_transient(error) or self.attempts >= self.policy.max_attempts:
            self.state = RetryState.EXHAUSTED
            return None
        delay = self.policy.delay_for(self.attempts)
        ceiling = self.policy.max_elapsed_seconds
        if ceiling is not None and self.elapsed() + delay > ceiling:
            self.state = RetryState.EXHAUSTED
            return None
        self.state = RetryState.BACKOFF
        return delay

    def _is_transient(self, error: BitcoindClientError) -> bool:
        if error.kind in (ErrorKind.DECODE, ErrorKind.PARAM):
            return False
        return error.retryable
