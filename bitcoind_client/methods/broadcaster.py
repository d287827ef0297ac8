"""Transaction broadcast and mempool acceptance."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from bitcoind_client.methods.base import RpcMethods
from bitcoind_client.rpc.protocol import RpcErrorCode
from bitcoind_client.types.common import Txid
from bitcoind_client.types.transactions import DecodeRawTransaction, SubmitPackage, TestMempoolAccept
from bitcoind_client.utils.exceptions import NodeRpcError, ParamError


class BroadcasterMethods(RpcMethods):
    async def send_raw_transaction(self, tx_hex: str, max_fee_rate: float | None = None) -> str:
        """
        Broadcast a serialized transaction and return its txid.

        A transaction that is already confirmed is not an error: its txid is
        recovered with ``decoderawtransaction`` and returned.
        """
        try:
            return await self._call("sendrawtransaction", [tx_hex, max_fee_rate], Txid)
        except NodeRpcError as exc:
            if exc.rpc_code != RpcErrorCode.RPC_VERIFY_ALREADY_IN_CHAIN:
                raise
            logger.debug("sendrawtransaction: transaction already in chain, decoding txid")
        decoded = await self._call("decoderawtransaction", [tx_hex], DecodeRawTransaction)
        return decoded.txid

    async def test_mempool_accept(self, tx_hex: str | Sequence[str]) -> list[TestMempoolAccept]:
        rawtxs = [tx_hex] if isinstance(tx_hex, str) else list(tx_hex)
        if not rawtxs:
            raise ParamError("at least one transaction is required", method="testmempoolaccept")
        return await self._call("testmempoolaccept", [rawtxs], list[TestMempoolAccept])

    async def submit_package(self, tx_hexes: Sequence[str]) -> SubmitPackage:
        rawtxs = list(tx_hexes)
        if not rawtxs:
            raise ParamError("package must contain at least one transaction", method="submitpackage")
        return await self._call("submitpackage", [rawtxs], SubmitPackage)
