"""Signing, descriptor and PSBT RPCs."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from bitcoind_client.methods.base import RpcMethods, wallet_path
from bitcoind_client.rpc.protocol import RpcErrorCode
from bitcoind_client.types.psbt import FinalizePsbt, PsbtBumpFee, PsbtBumpFeeOptions, SighashType, WalletProcessPsbtResult
from bitcoind_client.types.transactions import PreviousTransactionOutput, SignRawTransactionWithWallet
from bitcoind_client.types.wallet import ImportDescriptor, ImportDescriptorResult, ListDescriptors
from bitcoind_client.utils.exceptions import NodeRpcError, ParamError

_WALLET_READY_CODES = frozenset(
    {
        RpcErrorCode.RPC_WALLET_ERROR,
        RpcErrorCode.RPC_WALLET_ALREADY_LOADED,
        RpcErrorCode.RPC_WALLET_ALREADY_EXISTS,
    }
)


class SignerMethods(RpcMethods):
    async def sign_raw_transaction_with_wallet(
        self,
        tx_hex: str,
        prev_outputs: Sequence[PreviousTransactionOutput] | None = None,
    ) -> SignRawTransactionWithWallet:
        logger.trace("Signing transaction {} with {} previous output(s)", tx_hex[:16], len(prev_outputs or []))
        params = [tx_hex, list(prev_outputs) if prev_outputs is not None else None]
        return await self._call(
            "signrawtransactionwithwallet", params, SignRawTransactionWithWallet, wallet_scoped=True
        )

    async def list_descriptors(self, private: bool = False) -> ListDescriptors:
        return await self._call("listdescriptors", [private], ListDescriptors, wallet_scoped=True)

    async def import_descriptors(
        self,
        descriptors: Sequence[ImportDescriptor],
        wallet_name: str,
    ) -> list[ImportDescriptorResult]:
        """
        Import descriptors into ``wallet_name``, creating and loading it first.

        "Already exists" and "already loaded" answers from the node are
        expected on repeat runs and are not errors.
        """
        if not descriptors:
            raise ParamError("at least one descriptor is required", method="importdescriptors")
        for method, params in (
            ("createwallet", [wallet_name, None, None, None, None, None, True]),
            ("loadwallet", [wallet_name, True]),
        ):
            try:
                await self._call(method, params)
            except NodeRpcError as exc:
                if exc.rpc_code not in _WALLET_READY_CODES:
                    raise
                logger.debug("{} {}: {}", method, wallet_name, exc.rpc_message)

        return await self._dispatcher.call(
            "importdescriptors",
            [list(descriptors)],
            list[ImportDescriptorResult],
            path=wallet_path(wallet_name),
        )

    async def wallet_process_psbt(
        self,
        psbt: str,
        sign: bool = True,
        sighash_type: SighashType | None = None,
        bip32_derivs: bool | None = None,
    ) -> WalletProcessPsbtResult:
        self._check_psbt(psbt, "walletprocesspsbt")
        params = [psbt, sign, sighash_type, bip32_derivs]
        return await self._call("walletprocesspsbt", params, WalletProcessPsbtResult, wallet_scoped=True)

    async def psbt_bump_fee(self, txid: str, options: PsbtBumpFeeOptions | None = None) -> PsbtBumpFee:
        return await self._call("psbtbumpfee", [txid, options], PsbtBumpFee, wallet_scoped=True)

    async def finalize_psbt(self, psbt: str, extract: bool = True) -> FinalizePsbt:
        self._check_psbt(psbt, "finalizepsbt")
        return await self._call("finalizepsbt", [psbt, extract], FinalizePsbt)
