"""Read-only blockchain, mempool and network queries."""

from __future__ import annotations

from typing import Any

from bitcoind_client.methods.base import RpcMethods
from bitcoind_client.rpc.serialization import safe_dict
from bitcoind_client.types.blockchain import (
    GetBlockchainInfo,
    GetBlockHeaderVerbose,
    GetBlockVerbosityOne,
    GetMempoolInfo,
    GetNetworkInfo,
    GetRawMempoolVerbose,
    GetRawTransactionVerbosityOne,
    GetTxOut,
    Network,
)
from bitcoind_client.types.common import BlockHash, HexStr, Txid, btc_to_sats
from bitcoind_client.utils.exceptions import DecodeError

# 1 sat/vB expressed in BTC/kvB, used while the node has no estimate.
DEFAULT_FEE_RATE_BTC_PER_KVB = 0.00001


class ReaderMethods(RpcMethods):
    async def estimate_smart_fee(self, conf_target: int, estimate_mode: str | None = None) -> int:
        """
        Fee estimate in sat/vB for confirmation within ``conf_target`` blocks.

        The node answers in BTC/kvB; the value is converted and rounded down.
        When the node has no estimate yet, 1 sat/vB is returned.
        """
        result = await self._call("estimatesmartfee", [conf_target, estimate_mode], dict[str, Any])
        feerate = safe_dict(result).get("feerate")
        if feerate is None:
            feerate = DEFAULT_FEE_RATE_BTC_PER_KVB
        return btc_to_sats(feerate) // 1000

    async def get_block_header(self, block_hash: str) -> str:
        return await self._call("getblockheader", [block_hash, False], HexStr)

    async def get_block_header_verbose(self, block_hash: str) -> GetBlockHeaderVerbose:
        return await self._call("getblockheader", [block_hash, True], GetBlockHeaderVerbose)

    async def get_block(self, block_hash: str) -> str:
        """Serialized block as hex (verbosity 0)."""
        return await self._call("getblock", [block_hash, 0], HexStr)

    async def get_block_verbose(self, block_hash: str) -> GetBlockVerbosityOne:
        return await self._call("getblock", [block_hash, 1], GetBlockVerbosityOne)

    async def get_block_height(self, block_hash: str) -> int:
        header = await self.get_block_header_verbose(block_hash)
        return header.height

    async def get_block_hash(self, height: int) -> str:
        return await self._call("getblockhash", [height], BlockHash)

    async def get_block_header_at(self, height: int) -> str:
        return await self.get_block_header(await self.get_block_hash(height))

    async def get_block_at(self, height: int) -> str:
        return await self.get_block(await self.get_block_hash(height))

    async def get_block_count(self) -> int:
        return await self._call("getblockcount", [], int)

    async def get_best_block_hash(self) -> str:
        return await self._call("getbestblockhash", [], BlockHash)

    async def get_blockchain_info(self) -> GetBlockchainInfo:
        return await self._call("getblockchaininfo", [], GetBlockchainInfo)

    async def get_current_timestamp(self) -> int:
        """Header timestamp of the chain tip."""
        header = await self.get_block_header_verbose(await self.get_best_block_hash())
        return header.time

    async def get_raw_mempool(self) -> list[str]:
        return await self._call("getrawmempool", [], list[Txid])

    async def get_raw_mempool_verbose(self) -> GetRawMempoolVerbose:
        return await self._call("getrawmempool", [True], GetRawMempoolVerbose)

    async def get_mempool_info(self) -> GetMempoolInfo:
        return await self._call("getmempoolinfo", [], GetMempoolInfo)

    async def get_raw_transaction_verbosity_zero(self, txid: str) -> str:
        return await self._call("getrawtransaction", [txid, 0], HexStr)

    async def get_raw_transaction_verbosity_one(self, txid: str) -> GetRawTransactionVerbosityOne:
        return await self._call("getrawtransaction", [txid, 1], GetRawTransactionVerbosityOne)

    async def get_tx_out(self, txid: str, vout: int, include_mempool: bool = True) -> GetTxOut | None:
        """Unspent output details, or None when the output is spent or unknown."""
        return await self._call("gettxout", [txid, vout, include_mempool], GetTxOut | None)

    async def network(self) -> Network:
        info = await self.get_blockchain_info()
        try:
            return Network(info.chain)
        except ValueError as exc:
            raise DecodeError(f"unknown chain name: {info.chain!r}", method="getblockchaininfo") from exc

    async def get_network_info(self) -> GetNetworkInfo:
        return await self._call("getnetworkinfo", [], GetNetworkInfo)

    async def uptime(self) -> int:
        return await self._call("uptime", [], int)
