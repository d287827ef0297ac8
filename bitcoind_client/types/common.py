"""Shared building blocks for RPC result and parameter models."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

SATS_PER_BTC = 100_000_000

Txid = Annotated[str, StringConstraints(pattern=r"^[0-9a-fA-F]{64}$")]
BlockHash = Annotated[str, StringConstraints(pattern=r"^[0-9a-fA-F]{64}$")]
HexStr = Annotated[str, StringConstraints(pattern=r"^(?:[0-9a-fA-F]{2})*$")]


class RpcModel(BaseModel):
    """Base for node payloads: unknown fields are ignored, wire names are aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class RpcParams(BaseModel):
    """Base for structured parameters; serialized by alias with unset fields dropped."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


def btc_to_sats(amount: float | Decimal | str) -> int:
    """Convert a BTC amount as returned by the node into satoshis."""
    value = Decimal(str(amount)) * SATS_PER_BTC
    return int(value.to_integral_value(rounding=ROUND_DOWN))

