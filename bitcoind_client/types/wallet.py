"""Parameter and result shapes for wallet RPCs."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from bitcoind_client.types.common import BlockHash, HexStr, RpcModel, RpcParams, Txid


class TransactionCategory(str, Enum):
    SEND = "send"
    RECEIVE = "receive"
    GENERATE = "generate"
    IMMATURE = "immature"
    ORPHAN = "orphan"


class GetTransactionDetail(RpcModel):
    address: str | None = None
    category: TransactionCategory
    amount: float
    label: str | None = None
    vout: int
    fee: float | None = None
    abandoned: bool | None = None


class GetTransaction(RpcModel):
    """Result of ``gettransaction``; ``hex`` is the raw serialized transaction."""
    amount: float
    fee: float | None = None
    confirmations: int
    generated: bool | None = None
    trusted: bool | None = None
    blockhash: BlockHash | None = None
    blockheight: int | None = None
    blockindex: int | None = None
    blocktime: int | None = None
    txid: Txid
    wtxid: str | None = None
    walletconflicts: list[Txid] = Field(default_factory=list)
    replaced_by_txid: Txid | None = None
    replaces_txid: Txid | None = None
    comment: str | None = None
    to: str | None = None
    time: int
    timereceived: int
    bip125_replaceable: str | None = Field(default=None, alias="bip125-replaceable")
    details: list[GetTransactionDetail] = Field(default_factory=list)
    hex: HexStr


class ListTransactions(RpcModel):
    """One element of ``listtransactions``."""
    address: str | None = None
    category: TransactionCategory
    amount: float
    label: str | None = None
    confirmations: int
    trusted: bool | None = None
    generated: bool | None = None
    blockhash: BlockHash | None = None
    blockheight: int | None = None
    blockindex: int | None = None
    blocktime: int | None = None
    txid: Txid


class ListUnspent(RpcModel):
    """One element of ``listunspent``."""
    txid: Txid
    vout: int
    address: str | None = None
    label: str | None = None
    script_pubkey: HexStr = Field(alias="scriptPubKey")
    amount: float
    confirmations: int
    spendable: bool
    solvable: bool
    safe: bool


class ListUnspentQueryOptions(RpcParams):
    """``query_options`` argument of ``listunspent``; the node expects camelCase keys."""
    minimum_amount: float | None = Field(default=None, alias="minimumAmount")
    maximum_amount: float | None = Field(default=None, alias="maximumAmount")
    maximum_count: int | None = Field(default=None, alias="maximumCount")
    minimum_sum_amount: float | None = Field(default=None, alias="minimumSumAmount")


class GetAddressInfo(RpcModel):
    address: str
    ismine: bool | None = None
    iswatchonly: bool | None = None
    solvable: bool | None = None
    desc: str | None = None
    labels: list[str] = Field(default_factory=list)


class CreateWallet(RpcModel):
    """Result of ``createwallet`` and ``loadwallet``."""
    name: str
    warnings: list[str] | str | None = None


class ImportDescriptor(RpcParams):
    """One request element of ``importdescriptors``."""
    desc: str
    active: bool | None = None
    timestamp: int | str = "now"
    internal: bool | None = None
    label: str | None = None
    range: int | list[int] | None = None


class ImportDescriptorResult(RpcModel):
    success: bool
    warnings: list[str] = Field(default_factory=list)
    error: dict | None = None


class ListDescriptorsEntry(RpcModel):
    desc: str
    timestamp: int | None = None
    active: bool | None = None
    internal: bool | None = None
    range: list[int] | None = None
    next_index: int | None = None


class ListDescriptors(RpcModel):
    """Result of ``listdescriptors``."""
    wallet_name: str | None = None
    descriptors: list[ListDescriptorsEntry]
