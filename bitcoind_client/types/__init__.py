"""Typed parameter and result models for Bitcoin Core RPCs."""

from .blockchain import (
    GetBlockchainInfo,
    GetBlockHeaderVerbose,
    GetBlockVerbosityOne,
    GetMempoolInfo,
    GetNetworkInfo,
    GetRawMempoolVerbose,
    GetRawTransactionVerbosityOne,
    GetTxOut,
    MempoolEntry,
    MempoolEntryFees,
    Network,
    ScriptPubkey,
)
from .common import SATS_PER_BTC, BlockHash, HexStr, RpcModel, RpcParams, Txid, btc_to_sats
from .psbt import (
    PSBT_MAGIC,
    FinalizePsbt,
    Psbt,
    PsbtBumpFee,
    PsbtBumpFeeOptions,
    SighashType,
    WalletCreateFundedPsbt,
    WalletCreateFundedPsbtOptions,
    WalletProcessPsbtResult,
    validate_psbt,
)
from .transactions import (
    AddressAmountOutput,
    CreateRawTransactionInput,
    CreateRawTransactionOutput,
    DataOutput,
    DecodeRawTransaction,
    PreviousTransactionOutput,
    SignRawTransactionError,
    SignRawTransactionWithWallet,
    SubmitPackage,
    SubmitPackageTxResult,
    SubmitPackageTxResultFees,
    TestMempoolAccept,
    TestMempoolAcceptFees,
)
from .wallet import (
    CreateWallet,
    GetAddressInfo,
    GetTransaction,
    GetTransactionDetail,
    ImportDescriptor,
    ImportDescriptorResult,
    ListDescriptors,
    ListDescriptorsEntry,
    ListTransactions,
    ListUnspent,
    ListUnspentQueryOptions,
    TransactionCategory,
)

__all__ = [
    "SATS_PER_BTC",
    "BlockHash",
    "HexStr",
    "RpcModel",
    "RpcParams",
    "Txid",
    "btc_to_sats",
    "GetBlockchainInfo",
    "GetBlockHeaderVerbose",
    "GetBlockVerbosityOne",
    "GetMempoolInfo",
    "GetNetworkInfo",
    "GetRawMempoolVerbose",
    "GetRawTransactionVerbosityOne",
    "GetTxOut",
    "MempoolEntry",
    "MempoolEntryFees",
    "Network",
    "ScriptPubkey",
    "PSBT_MAGIC",
    "FinalizePsbt",
    "Psbt",
    "PsbtBumpFee",
    "PsbtBumpFeeOptions",
    "SighashType",
    "WalletCreateFundedPsbt",
    "WalletCreateFundedPsbtOptions",
    "WalletProcessPsbtResult",
    "validate_psbt",
    "AddressAmountOutput",
    "CreateRawTransactionInput",
    "CreateRawTransactionOutput",
    "DataOutput",
    "DecodeRawTransaction",
    "PreviousTransactionOutput",
    "SignRawTransactionError",
    "SignRawTransactionWithWallet",
    "SubmitPackage",
    "SubmitPackageTxResult",
    "SubmitPackageTxResultFees",
    "TestMempoolAccept",
    "TestMempoolAcceptFees",
    "CreateWallet",
    "GetAddressInfo",
    "GetTransaction",
    "GetTransactionDetail",
    "ImportDescriptor",
    "ImportDescriptorResult",
    "ListDescriptors",
    "ListDescriptorsEntry",
    "ListTransactions",
    "ListUnspent",
    "ListUnspentQueryOptions",
    "TransactionCategory",
]
