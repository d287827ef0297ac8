"""Parameter and result shapes for raw-transaction RPCs."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_serializer

from bitcoind_client.types.common import HexStr, RpcModel, RpcParams, Txid


class CreateRawTransactionInput(RpcParams):
    """One element of the ``inputs`` array of ``createrawtransaction`` and friends."""
    txid: Txid
    vout: int = Field(ge=0)
    sequence: int | None = None


class AddressAmountOutput(RpcParams):
    """Pay ``amount`` BTC to ``address``; serialized as ``{address: amount}``."""
    address: str
    amount: float

    @model_serializer
    def _as_wire(self) -> dict[str, Any]:
        return {self.address: self.amount}


class DataOutput(RpcParams):
    """An ``OP_RETURN`` payload; serialized as ``{"data": hex}``."""
    data: HexStr

    @model_serializer
    def _as_wire(self) -> dict[str, Any]:
        return {"data": self.data}


CreateRawTransactionOutput = AddressAmountOutput | DataOutput


class TestMempoolAcceptFees(RpcModel):
    base: float
    effective_feerate: float | None = Field(default=None, alias="effective-feerate")
    effective_includes: list[str] | None = Field(default=None, alias="effective-includes")


class TestMempoolAccept(RpcModel):
    """One element of the ``testmempoolaccept`` result."""
    __test__ = False

    txid: Txid
    wtxid: str | None = None
    package_error: str | None = Field(default=None, alias="package-error")
    allowed: bool | None = None
    vsize: int | None = None
    fees: TestMempoolAcceptFees | None = None
    reject_reason: str | None = Field(default=None, alias="reject-reason")


class SubmitPackageTxResultFees(RpcModel):
    base_fee: float = Field(alias="base")
    effective_fee_rate: float | None = Field(default=None, alias="effective-feerate")
    effective_includes: list[str] | None = Field(default=None, alias="effective-includes")


class SubmitPackageTxResult(RpcModel):
    txid: Txid
    other_wtxid: str | None = Field(default=None, alias="other-wtxid")
    vsize: int | None = None
    fees: SubmitPackageTxResultFees | None = None
    error: str | None = None


class SubmitPackage(RpcModel):
    """Result of ``submitpackage``; ``tx_results`` is keyed by wtxid."""
    package_msg: str
    tx_results: dict[str, SubmitPackageTxResult] = Field(alias="tx-results")
    replaced_transactions: list[Txid] = Field(default_factory=list, alias="replaced-transactions")


class PreviousTransactionOutput(RpcParams):
    """Previous output the node may not know yet, passed to ``signrawtransactionwithwallet``."""
    txid: Txid
    vout: int = Field(ge=0)
    script_pubkey: HexStr = Field(alias="scriptPubKey")
    redeem_script: HexStr | None = Field(default=None, alias="redeemScript")
    witness_script: HexStr | None = Field(default=None, alias="witnessScript")
    amount: float | None = None


class SignRawTransactionError(RpcModel):
    txid: Txid
    vout: int
    script_sig: str = Field(alias="scriptSig")
    sequence: int
    error: str
    witness: list[str] = Field(default_factory=list)


class SignRawTransactionWithWallet(RpcModel):
    """Result of ``signrawtransactionwithwallet``."""
    hex: HexStr
    complete: bool
    errors: list[SignRawTransactionError] | None = None


class DecodeRawTransaction(RpcModel):
    """Subset of ``decoderawtransaction`` used to recover a txid."""
    txid: Txid
    hash: str
    size: int
    vsize: int
    version: int
    locktime: int
