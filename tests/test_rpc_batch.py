import json

import httpx
import pytest

from bitcoind_client.rpc.protocol import RpcRequest
from bitcoind_client.types import GetMempoolInfo
from bitcoind_client.utils.exceptions import DecodeError, NodeRpcError, TransportError


def _batch_reply(entries_by_method: dict):
    """Answer a batch by method name, in reverse order to exercise id matching."""

    def reply(payload):
        out = []
        for frame in reversed(payload):
            entry = entries_by_method[frame["method"]]
            out.append({"result": entry.get("result"), "error": entry.get("error"), "id": frame["id"]})
        return httpx.Response(200, json=out)

    return reply


@pytest.mark.asyncio
async def test_batch_mid_entry_error_does_not_abort_others(node, client) -> None:
    node.queue(
        _batch_reply(
            {
                "getblockcount": {"result": 101},
                "getrawtransaction": {"error": {"code": -5, "message": "No such mempool or blockchain transaction"}},
                "getbestblockhash": {"result": "ab" * 32},
            }
        )
    )
    outcomes = await client.call_batch(
        [
            ("getblockcount", [], int),
            ("getrawtransaction", ["00" * 32]),
            ("getbestblockhash", []),
        ]
    )
    assert [o.request.method for o in outcomes] == ["getblockcount", "getrawtransaction", "getbestblockhash"]
    assert outcomes[0].ok and outcomes[0].value == 101
    assert not outcomes[1].ok
    assert isinstance(outcomes[1].error, NodeRpcError)
    assert outcomes[1].error.rpc_code == -5
    assert outcomes[2].unwrap() == "ab" * 32
    with pytest.raises(NodeRpcError):
        outcomes[1].unwrap()

    frames = node.payloads[0]
    assert isinstance(frames, list) and len(frames) == 3
    assert len({f["id"] for f in frames}) == 3


@pytest.mark.asyncio
async def test_batch_entries_decode_independently(node, client) -> None:
    node.queue(
        _batch_reply(
            {
                "getmempoolinfo": {"result": {"loaded": True}},
                "getblockcount": {"result": 7},
            }
        )
    )
    outcomes = await client.call_batch(
        [RpcRequest(id="m", method="getmempoolinfo", params=[], result_type=GetMempoolInfo), ("getblockcount", [], int)]
    )
    assert isinstance(outcomes[0].error, DecodeError)
    assert outcomes[1].value == 7


@pytest.mark.asyncio
async def test_batch_missing_entry_partial(node, client) -> None:
    def reply(payload):
        first = payload[0]
        return httpx.Response(200, json=[{"result": 1, "error": None, "id": first["id"]}])

    node.queue(reply)
    outcomes = await client.call_batch([("getblockcount", []), ("uptime", [])])
    assert outcomes[0].value == 1
    assert isinstance(outcomes[1].error, DecodeError)

    node.queue(reply)
    with pytest.raises(DecodeError):
        await client.call_batch([("getblockcount", []), ("uptime", [])], partial=False)


@pytest.mark.asyncio
async def test_batch_transport_failure_retries_whole_batch(node, client) -> None:
    node.queue(httpx.ConnectError("refused"), _batch_reply({"getblockcount": {"result": 3}, "uptime": {"result": 9}}))
    outcomes = await client.call_batch([("getblockcount", []), ("uptime", [])])
    assert [o.value for o in outcomes] == [3, 9]
    assert len(node.requests) == 2
    assert json.loads(node.requests[0].content) == json.loads(node.requests[1].content)


@pytest.mark.asyncio
async def test_batch_warmup_entries_are_not_retried(node, client) -> None:
    node.queue(
        _batch_reply(
            {
                "getblockcount": {"error": {"code": -28, "message": "Loading block index..."}},
                "uptime": {"result": 9},
            }
        )
    )
    outcomes = await client.call_batch([("getblockcount", []), ("uptime", [])])
    assert outcomes[0].error.code == "RPC_IN_WARMUP"
    assert outcomes[1].value == 9
    assert len(node.requests) == 1


@pytest.mark.asyncio
async def test_batch_http_failure_raises(node, make_client) -> None:
    client = make_client(retry=None)
    node.queue(lambda payload: httpx.Response(401))
    with pytest.raises(TransportError) as exc_info:
        await client.call_batch([("getblockcount", [])])
    assert exc_info.value.status_code == 401
