"""Result shapes for blockchain and mempool RPCs."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from bitcoind_client.types.common import BlockHash, HexStr, RpcModel, Txid


class Network(str, Enum):
    """Chain names as reported by ``getblockchaininfo``."""
    MAIN = "main"
    TEST = "test"
    TESTNET4 = "testnet4"
    SIGNET = "signet"
    REGTEST = "regtest"


class GetBlockchainInfo(RpcModel):
    """Result of ``getblockchaininfo``."""
    chain: str
    blocks: int
    headers: int
    best_block_hash: BlockHash = Field(alias="bestblockhash")
    difficulty: float
    time: int | None = None
    median_time: int = Field(alias="mediantime")
    verification_progress: float = Field(alias="verificationprogress")
    initial_block_download: bool = Field(alias="initialblockdownload")
    chain_work: str = Field(alias="chainwork")
    size_on_disk: int
    pruned: bool
    prune_height: int | None = Field(default=None, alias="pruneheight")
    automatic_pruning: bool | None = None
    prune_target_size: int | None = None
    warnings: str | list[str] = Field(default_factory=list)


class GetBlockHeaderVerbose(RpcModel):
    """Result of ``getblockheader <hash> true``."""
    hash: BlockHash
    confirmations: int
    height: int
    version: int
    version_hex: str = Field(alias="versionHex")
    merkle_root: str = Field(alias="merkleroot")
    time: int
    median_time: int | None = Field(default=None, alias="mediantime")
    nonce: int
    bits: str
    difficulty: float
    chain_work: str = Field(alias="chainwork")
    n_tx: int = Field(alias="nTx")
    previous_block_hash: BlockHash | None = Field(default=None, alias="previousblockhash")
    next_block_hash: BlockHash | None = Field(default=None, alias="nextblockhash")


class GetBlockVerbosityOne(GetBlockHeaderVerbose):
    """Result of ``getblock <hash> 1``: the header fields plus size data and txids."""
    size: int
    stripped_size: int | None = Field(default=None, alias="strippedsize")
    weight: int
    tx: list[Txid]


class MempoolEntryFees(RpcModel):
    base: float
    modified: float
    ancestor: float
    descendant: float


class MempoolEntry(RpcModel):
    """One value of ``getrawmempool true``."""
    vsize: int
    weight: int
    time: int
    height: int
    descendant_count: int = Field(alias="descendantcount")
    descendant_size: int = Field(alias="descendantsize")
    ancestor_count: int = Field(alias="ancestorcount")
    ancestor_size: int = Field(alias="ancestorsize")
    wtxid: str
    fees: MempoolEntryFees
    depends: list[Txid] = Field(default_factory=list)
    spent_by: list[Txid] = Field(default_factory=list, alias="spentby")
    bip125_replaceable: bool | None = Field(default=None, alias="bip125-replaceable")
    unbroadcast: bool | None = None


GetRawMempoolVerbose = dict[str, MempoolEntry]


class GetMempoolInfo(RpcModel):
    """Result of ``getmempoolinfo``."""
    loaded: bool
    size: int
    bytes: int
    usage: int
    total_fee: float | None = None
    maxmempool: int
    mempoolminfee: float
    minrelaytxfee: float
    incrementalrelayfee: float | None = None
    unbroadcastcount: int
    fullrbf: bool | None = None


class ScriptPubkey(RpcModel):
    asm: str
    hex: HexStr
    req_sigs: int | None = Field(default=None, alias="reqSigs")
    script_type: str = Field(alias="type")
    address: str | None = None


class GetTxOut(RpcModel):
    """Result of ``gettxout``; the node returns null for spent outputs."""
    best_block: BlockHash = Field(alias="bestblock")
    confirmations: int
    value: float
    script_pubkey: ScriptPubkey | None = Field(default=None, alias="scriptPubKey")
    coinbase: bool


class GetRawTransactionVerbosityOne(RpcModel):
    """
    Result of ``getrawtransaction <txid> 1``.

    The serialized transaction stays a hex string; inputs and outputs are kept
    as the node's JSON objects.
    """
    in_active_chain: bool | None = None
    hex: HexStr
    txid: Txid
    hash: str
    size: int
    vsize: int
    weight: int | None = None
    version: int
    locktime: int
    vin: list[dict] = Field(default_factory=list)
    vout: list[dict] = Field(default_factory=list)
    blockhash: BlockHash | None = None
    confirmations: int | None = None
    time: int | None = None
    blocktime: int | None = None


class GetNetworkInfo(RpcModel):
    """Subset of ``getnetworkinfo``."""
    version: int
    subversion: str
    protocol_version: int = Field(alias="protocolversion")
    connections: int
    network_active: bool = Field(alias="networkactive")
    relay_fee: float = Field(alias="relayfee")
    incremental_fee: float | None = Field(default=None, alias="incrementalfee")
    warnings: str | list[str] = Field(default_factory=list)
