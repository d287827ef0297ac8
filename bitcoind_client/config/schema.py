"""Configuration schema using Pydantic.

Persisted as camelCase JSON at ~/.bitcoind_client/config.json; every field can
also come from ``BITCOIND_*`` environment variables.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bitcoind_client.rpc.retry import DEFAULT_RETRYABLE_RPC_CODES, DEFAULT_RETRYABLE_STATUS_CODES, RetryPolicy


class RetryConfig(BaseModel):
    """Retry budget applied to every call."""
    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, ge=1)
    backoff: Literal["fixed", "exponential"] = "exponential"
    base_delay_seconds: float = Field(default=1.0, ge=0)
    max_delay_seconds: float = Field(default=10.0, ge=0)
    max_elapsed_seconds: float | None = Field(default=None, gt=0)  # overall ceiling across attempts
    retryable_rpc_codes: list[int] = Field(default_factory=lambda: sorted(DEFAULT_RETRYABLE_RPC_CODES))
    retryable_status_codes: list[int] = Field(default_factory=lambda: sorted(DEFAULT_RETRYABLE_STATUS_CODES))

    def to_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_attempts,
            backoff=self.backoff,
            base_delay_seconds=self.base_delay_seconds,
            max_delay_seconds=self.max_delay_seconds,
            max_elapsed_seconds=self.max_elapsed_seconds,
            retryable_rpc_codes=frozenset(self.retryable_rpc_codes),
            retryable_status_codes=frozenset(self.retryable_status_codes),
        )


class ClientConfig(BaseSettings):
    """Endpoint, credentials and call behavior for one node."""
    url: str = "http://127.0.0.1:8332"
    username: str | None = None
    password: SecretStr | None = None
    cookie_file: Path | None = None  # Bitcoin Core .cookie, used when no username/password
    wallet: str | None = None  # default wallet for wallet-scoped RPCs
    timeout_seconds: float | None = Field(default=30.0, gt=0)  # per attempt
    jsonrpc_version: Literal["1.0", "2.0"] = "1.0"
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"url must start with http:// or https://, got {value!r}")
        return value.rstrip("/")

    def auth(self) -> tuple[str, str] | None:
        """Resolve credentials: explicit username/password first, then the cookie file."""
        if self.username is not None and self.password is not None:
            return self.username, self.password.get_secret_value()
        if self.cookie_file is not None:
            from bitcoind_client.config.loader import read_cookie_file

            return read_cookie_file(self.cookie_file)
        return None

    model_config = SettingsConfigDict(
        env_prefix="BITCOIND_",
        env_nested_delimiter="__",
        frozen=True,
    )
