"""
PSBT shapes.

PSBTs are passed around as base64 strings. ``Psbt`` only checks that a string
decodes and starts with the ``psbt\\xff`` magic; the library never parses
the contents.
"""

from __future__ import annotations

import base64
import binascii
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, Field

from bitcoind_client.types.common import HexStr, RpcModel, RpcParams

PSBT_MAGIC = b"psbt\xff"


def validate_psbt(value: str) -> str:
    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"PSBT is not valid base64: {exc}") from exc
    if not raw.startswith(PSBT_MAGIC):
        raise ValueError("PSBT does not start with the psbt magic bytes")
    return value


Psbt = Annotated[str, AfterValidator(validate_psbt)]


class SighashType(str, Enum):
    DEFAULT = "DEFAULT"
    ALL = "ALL"
    NONE = "NONE"
    SINGLE = "SINGLE"
    ALL_ANYONECANPAY = "ALL|ANYONECANPAY"
    NONE_ANYONECANPAY = "NONE|ANYONECANPAY"
    SINGLE_ANYONECANPAY = "SINGLE|ANYONECANPAY"


class WalletCreateFundedPsbtOptions(RpcParams):
    fee_rate: float | None = None
    lock_unspents: bool | None = Field(default=None, alias="lockUnspents")
    conf_target: int | None = None
    replaceable: bool | None = None
    change_address: str | None = Field(default=None, alias="changeAddress")
    subtract_fee_from_outputs: list[int] | None = Field(default=None, alias="subtractFeeFromOutputs")


class WalletCreateFundedPsbt(RpcModel):
    psbt: Psbt
    fee: float
    change_pos: int = Field(alias="changepos")


class WalletProcessPsbtResult(RpcModel):
    """Result of ``walletprocesspsbt``; ``hex`` is set once the PSBT is complete."""
    psbt: Psbt | None = None
    complete: bool
    hex: HexStr | None = None


class FinalizePsbt(RpcModel):
    psbt: Psbt | None = None
    hex: HexStr | None = None
    complete: bool


class PsbtBumpFeeOptions(RpcParams):
    conf_target: int | None = None
    fee_rate: float | None = None
    replaceable: bool | None = None
    estimate_mode: str | None = None
    outputs: list[dict] | None = None
    original_change_index: int | None = None


class PsbtBumpFee(RpcModel):
    psbt: Psbt
    origfee: float
    fee: float
    errors: list[str] = Field(default_factory=list)


__all__ = [
    "PSBT_MAGIC",
    "Psbt",
    "validate_psbt",
    "SighashType",
    "WalletCreateFundedPsbtOptions",
    "WalletCreateFundedPsbt",
    "WalletProcessPsbtResult",
    "FinalizePsbt",
    "PsbtBumpFeeOptions",
    "PsbtBumpFee",
]
