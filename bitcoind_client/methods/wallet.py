"""Wallet RPCs; most are routed to ``/wallet/<name>`` when a wallet is set."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from bitcoind_client.methods.base import RpcMethods
from bitcoind_client.types.common import HexStr, Txid
from bitcoind_client.types.psbt import WalletCreateFundedPsbt, WalletCreateFundedPsbtOptions
from bitcoind_client.types.transactions import CreateRawTransactionInput, CreateRawTransactionOutput
from bitcoind_client.types.wallet import (
    CreateWallet,
    GetAddressInfo,
    GetTransaction,
    ListTransactions,
    ListUnspent,
    ListUnspentQueryOptions,
)
from bitcoind_client.utils.exceptions import ParamError

DEFAULT_MIN_CONF = 1
DEFAULT_MAX_CONF = 9_999_999


def _outputs_param(outputs: Sequence[CreateRawTransactionOutput | Mapping[str, Any]], method: str) -> list[Any]:
    if not outputs:
        raise ParamError("at least one output is required", method=method)
    return list(outputs)


class WalletMethods(RpcMethods):
    async def get_new_address(self, label: str | None = None, address_type: str | None = None) -> str:
        return await self._call("getnewaddress", [label, address_type], str, wallet_scoped=True)

    async def get_transaction(self, txid: str) -> GetTransaction:
        return await self._call("gettransaction", [txid], GetTransaction, wallet_scoped=True)

    async def list_transactions(self, count: int | None = None) -> list[ListTransactions]:
        # listtransactions takes the label first; "*" matches every label
        params = ["*", count] if count is not None else []
        return await self._call("listtransactions", params, list[ListTransactions], wallet_scoped=True)

    async def list_unspent(
        self,
        min_conf: int | None = None,
        max_conf: int | None = None,
        addresses: Sequence[str] | None = None,
        include_unsafe: bool | None = None,
        query_options: ListUnspentQueryOptions | None = None,
    ) -> list[ListUnspent]:
        """
        Unspent outputs of the wallet.

        Unset arguments take the node's defaults: 1 to 9999999 confirmations,
        every address, unsafe outputs included.
        """
        params: list[Any] = [
            DEFAULT_MIN_CONF if min_conf is None else min_conf,
            DEFAULT_MAX_CONF if max_conf is None else max_conf,
            list(addresses or []),
            True if include_unsafe is None else include_unsafe,
        ]
        if query_options is not None:
            params.append(query_options)
        return await self._call("listunspent", params, list[ListUnspent], wallet_scoped=True)

    async def get_balance(self) -> float:
        return await self._call("getbalance", [], float, wallet_scoped=True)

    async def send_to_address(self, address: str, amount: float) -> str:
        if amount <= 0:
            raise ParamError("amount must be positive", method="sendtoaddress")
        return await self._call("sendtoaddress", [address, amount], Txid, wallet_scoped=True)

    async def list_wallets(self) -> list[str]:
        return await self._call("listwallets", [], list[str])

    async def create_wallet(self, name: str, load_on_startup: bool | None = None) -> CreateWallet:
        # null positional args take the node's defaults
        params = [name, None, None, None, None, None, load_on_startup]
        return await self._call("createwallet", params, CreateWallet)

    async def load_wallet(self, name: str, load_on_startup: bool | None = None) -> CreateWallet:
        return await self._call("loadwallet", [name, load_on_startup], CreateWallet)

    async def create_raw_transaction(
        self,
        inputs: Sequence[CreateRawTransactionInput],
        outputs: Sequence[CreateRawTransactionOutput | Mapping[str, Any]],
    ) -> str:
        """Unsigned transaction hex spending ``inputs`` to ``outputs``."""
        params = [list(inputs), _outputs_param(outputs, "createrawtransaction")]
        return await self._call("createrawtransaction", params, HexStr)

    async def wallet_create_funded_psbt(
        self,
        inputs: Sequence[CreateRawTransactionInput],
        outputs: Sequence[CreateRawTransactionOutput | Mapping[str, Any]],
        locktime: int | None = None,
        options: WalletCreateFundedPsbtOptions | None = None,
        bip32_derivs: bool | None = None,
    ) -> WalletCreateFundedPsbt:
        params = [
            list(inputs),
            _outputs_param(outputs, "walletcreatefundedpsbt"),
            locktime or 0,
            options if options is not None else {},
            bip32_derivs,
        ]
        return await self._call("walletcreatefundedpsbt", params, WalletCreateFundedPsbt, wallet_scoped=True)

    async def get_address_info(self, address: str) -> GetAddressInfo:
        return await self._call("getaddressinfo", [address], GetAddressInfo, wallet_scoped=True)
