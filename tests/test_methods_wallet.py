import pytest

from bitcoind_client.types import (
    AddressAmountOutput,
    CreateRawTransactionInput,
    DataOutput,
    ListUnspentQueryOptions,
    TransactionCategory,
    WalletCreateFundedPsbtOptions,
)
from bitcoind_client.utils.exceptions import DecodeError, ParamError
from conftest import ok

TXID = "1" * 64
PSBT = "cHNidP8BAAoCAAAAAAAAAAAAAA=="


@pytest.fixture
def wallet(make_client):
    return make_client(wallet="alice")


@pytest.mark.asyncio
async def test_get_new_address_trims_unset_params(node, wallet) -> None:
    node.queue(ok("bcrt1qaddr"), ok("bcrt1qother"))
    assert await wallet.get_new_address() == "bcrt1qaddr"
    await wallet.get_new_address(address_type="bech32m")
    assert node.calls == [
        ("getnewaddress", [], "/wallet/alice"),
        ("getnewaddress", [None, "bech32m"], "/wallet/alice"),
    ]


@pytest.mark.asyncio
async def test_list_unspent_defaults_and_query_options(node, wallet) -> None:
    utxo = {
        "txid": TXID,
        "vout": 0,
        "address": "bcrt1q",
        "scriptPubKey": "0014ab",
        "amount": 1.0,
        "confirmations": 6,
        "spendable": True,
        "solvable": True,
        "safe": True,
    }
    node.queue(ok([utxo]), ok([]))
    utxos = await wallet.list_unspent()
    assert utxos[0].script_pubkey == "0014ab"
    await wallet.list_unspent(min_conf=0, query_options=ListUnspentQueryOptions(maximum_count=5))
    assert node.calls[0] == ("listunspent", [1, 9_999_999, [], True], "/wallet/alice")
    assert node.calls[1][1] == [0, 9_999_999, [], True, {"maximumCount": 5}]


@pytest.mark.asyncio
async def test_list_transactions(node, wallet) -> None:
    entry = {"address": "bcrt1q", "category": "receive", "amount": 0.1, "confirmations": 1, "txid": TXID}
    node.queue(ok([entry]), ok([]))
    txs = await wallet.list_transactions(10)
    assert txs[0].category is TransactionCategory.RECEIVE
    await wallet.list_transactions()
    assert [params for _, params, _ in node.calls] == [["*", 10], []]


@pytest.mark.asyncio
async def test_get_transaction(node, wallet) -> None:
    node.queue(
        ok(
            {
                "amount": -0.1,
                "fee": -0.0000141,
                "confirmations": 0,
                "trusted": True,
                "txid": TXID,
                "walletconflicts": [],
                "time": 1700000000,
                "timereceived": 1700000000,
                "bip125-replaceable": "no",
                "details": [{"address": "bcrt1q", "category": "send", "amount": -0.1, "vout": 0, "fee": -0.0000141}],
                "hex": "0200",
            }
        )
    )
    tx = await wallet.get_transaction(TXID)
    assert tx.bip125_replaceable == "no"
    assert tx.details[0].category is TransactionCategory.SEND


@pytest.mark.asyncio
async def test_send_to_address_rejects_non_positive_amount(node, wallet) -> None:
    with pytest.raises(ParamError):
        await wallet.send_to_address("bcrt1q", 0)
    node.queue(ok(TXID))
    assert await wallet.send_to_address("bcrt1q", 0.5) == TXID
    assert node.calls == [("sendtoaddress", ["bcrt1q", 0.5], "/wallet/alice")]


@pytest.mark.asyncio
async def test_wallet_management_is_node_level(node, wallet) -> None:
    node.queue(ok(["alice"]), ok({"name": "bob", "warnings": ""}), ok({"name": "bob"}))
    assert await wallet.list_wallets() == ["alice"]
    created = await wallet.create_wallet("bob", load_on_startup=True)
    assert created.name == "bob"
    await wallet.load_wallet("bob")
    assert node.calls == [
        ("listwallets", [], "/"),
        ("createwallet", ["bob", None, None, None, None, None, True], "/"),
        ("loadwallet", ["bob"], "/"),
    ]


@pytest.mark.asyncio
async def test_create_raw_transaction_shapes_outputs(node, wallet) -> None:
    node.queue(ok("02000000"))
    tx_hex = await wallet.create_raw_transaction(
        [CreateRawTransactionInput(txid=TXID, vout=1)],
        [AddressAmountOutput(address="bcrt1qdest", amount=0.25), DataOutput(data="cafe")],
    )
    assert tx_hex == "02000000"
    method, params, path = node.calls[-1]
    assert (method, path) == ("createrawtransaction", "/")
    assert params == [[{"txid": TXID, "vout": 1}], [{"bcrt1qdest": 0.25}, {"data": "cafe"}]]


@pytest.mark.asyncio
async def test_create_raw_transaction_requires_outputs(node, wallet) -> None:
    with pytest.raises(ParamError):
        await wallet.create_raw_transaction([], [])
    assert node.requests == []


@pytest.mark.asyncio
async def test_wallet_create_funded_psbt_params(node, wallet) -> None:
    node.queue(ok({"psbt": PSBT, "fee": 0.0000141, "changepos": 1}), ok({"psbt": PSBT, "fee": 0.0000141, "changepos": -1}))
    funded = await wallet.wallet_create_funded_psbt([], [AddressAmountOutput(address="bcrt1qdest", amount=1.0)])
    assert funded.psbt == PSBT
    assert funded.change_pos == 1
    await wallet.wallet_create_funded_psbt(
        [],
        [{"bcrt1qdest": 1.0}],
        locktime=500,
        options=WalletCreateFundedPsbtOptions(fee_rate=2.0, lock_unspents=True, replaceable=True),
        bip32_derivs=True,
    )
    assert node.calls[0] == ("walletcreatefundedpsbt", [[], [{"bcrt1qdest": 1.0}], 0, {}], "/wallet/alice")
    assert node.calls[1][1] == [
        [],
        [{"bcrt1qdest": 1.0}],
        500,
        {"fee_rate": 2.0, "lockUnspents": True, "replaceable": True},
        True,
    ]


@pytest.mark.asyncio
async def test_wallet_create_funded_psbt_validates_returned_psbt(node, wallet) -> None:
    node.queue(ok({"psbt": "bm90IGEgcHNidA==", "fee": 0.0001, "changepos": 0}))
    with pytest.raises(DecodeError):
        await wallet.wallet_create_funded_psbt([], [{"bcrt1qdest": 1.0}])


@pytest.mark.asyncio
async def test_get_address_info(node, wallet) -> None:
    node.queue(ok({"address": "bcrt1q", "ismine": True, "iswatchonly": False, "solvable": True}))
    info = await wallet.get_address_info("bcrt1q")
    assert info.ismine is True
    assert node.calls[-1] == ("getaddressinfo", ["bcrt1q"], "/wallet/alice")
