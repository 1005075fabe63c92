from typing import Any, Dict

import httpx
import msgspec
import pytest
import respx

from ethrpc.client import EthRPC
from ethrpc.configs.client_config import ClientConfig
from ethrpc.errors import DecodeError, MalformedResponse, ProtocolError, TransportError
from ethrpc.types import NOT_SYNCING, CallParams, FilterParams, Log, Transaction


def mock_result(url: str, result: Any) -> respx.Route:
    return respx.post(url).mock(
        return_value=httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})
    )

def sent(route: respx.Route) -> Dict[str, Any]:
    return msgspec.json.decode(route.calls.last.request.content)


def test_url(client: EthRPC, url: str):
    assert client.url == url

def test_from_config():
    config = ClientConfig(rpc_url="https://mock.node", timeout=5.0, debug=True)

    with EthRPC.from_config(config) as client:
        assert client.url == "https://mock.node"
        assert client.provider.debug is True

def test_call_raw_result(client: EthRPC, url: str):
    with respx.mock:
        route = mock_result(url, {"foo": "bar"})

        assert client.call("test", "a", 1) == {"foo": "bar"}
        assert sent(route) == {"jsonrpc": "2.0", "id": 1, "method": "test", "params": ["a", 1]}

def test_call_errors(client: EthRPC, url: str):
    with respx.mock:
        respx.post(url).mock(side_effect=httpx.ConnectError)
        with pytest.raises(TransportError):
            client.call("test")

    with respx.mock:
        respx.post(url).mock(return_value=httpx.Response(200, content=b"{213"))
        with pytest.raises(MalformedResponse):
            client.call("test")

    with respx.mock:
        respx.post(url).mock(
            return_value=httpx.Response(200, json={"error": {"code": 21, "message": "eee"}})
        )
        with pytest.raises(ProtocolError) as exc_info:
            client.call("test")

    assert exc_info.value.code == 21
    assert exc_info.value.message == "eee"

def test_malformed_endpoint_is_transport_error():
    with EthRPC("http://[::1") as client:
        with pytest.raises(TransportError):
            client.net_version()

def test_typed_call_rejects_wrong_result_type(client: EthRPC, url: str):
    with respx.mock:
        mock_result(url, {"foo": "bar"})

        with pytest.raises(DecodeError):
            client.net_version()

@pytest.mark.parametrize("method, rpc_method, result, expected", [
    ("web3_client_version", "web3_clientVersion", "test client", "test client"),
    ("net_version", "net_version", "v2b3", "v2b3"),
    ("net_listening", "net_listening", True, True),
    ("net_peer_count", "net_peerCount", "0x22", 34),
    ("eth_protocol_version", "eth_protocolVersion", "54", "54"),
    ("eth_coinbase", "eth_coinbase", "0x407d73d8a49eeb85d32cf465507dd71d507100c1",
     "0x407d73d8a49eeb85d32cf465507dd71d507100c1"),
    ("eth_mining", "eth_mining", False, False),
    ("eth_hashrate", "eth_hashrate", "0x38a", 906),
    ("eth_gas_price", "eth_gasPrice", "0x09184e72a000", 10000000000000),
    ("eth_accounts", "eth_accounts", ["0x1", "0x2"], ["0x1", "0x2"]),
    ("eth_block_number", "eth_blockNumber", "0x37eb38", 3664696),
    ("eth_get_compilers", "eth_getCompilers", ["solidity"], ["solidity"]),
    ("eth_new_block_filter", "eth_newBlockFilter", "0x1", "0x1"),
    ("eth_new_pending_transaction_filter", "eth_newPendingTransactionFilter", "0x2", "0x2"),
])
def test_methods_without_params(
    client: EthRPC, url: str, method: str, rpc_method: str, result: Any, expected: Any
):
    with respx.mock:
        route = mock_result(url, result)

        assert getattr(client, method)() == expected

        request = sent(route)
        assert request["method"] == rpc_method
        assert request["params"] is None

def test_web3_sha3(client: EthRPC, url: str):
    with respx.mock:
        route = mock_result(url, "0x47173285a8d7341e5e972fc677286384f802f8ef42a5ec5f03bbfa254cb01fad")

        result = client.web3_sha3(b"data")

        assert result == "0x47173285a8d7341e5e972fc677286384f802f8ef42a5ec5f03bbfa254cb01fad"
        assert sent(route)["params"] == ["0x64617461"]

def test_eth_syncing(client: EthRPC, url: str):
    with respx.mock:
        mock_result(url, False)
        assert client.eth_syncing() == NOT_SYNCING

    with respx.mock:
        mock_result(url, {"currentBlock": "0x8c3be", "highestBlock": "0x9bb3b", "startingBlock": "0x0"})
        status = client.eth_syncing()

    assert status.is_syncing
    assert status.current_block == 574398
    assert status.highest_block == 637755

def test_eth_get_balance(client: EthRPC, url: str):
    address = "0x6247cf0412c6462da2a51d05139e2a3c6c630f0a"

    with respx.mock:
        route = mock_result(url, "0x486d06b0d08d05909c4")

        balance = client.eth_get_balance(address)

        assert balance == 21376347749069564217796
        assert sent(route) == {
            "jsonrpc": "2.0", "id": 1, "method": "eth_getBalance", "params": [address, "latest"]
        }

def test_eth_get_storage_at(client: EthRPC, url: str):
    address = "0x6247cf0412c6462da2a51d05139e2a3c6c630f0a"

    with respx.mock:
        route = mock_result(url, "0x6f")

        assert client.eth_get_storage_at(address, 33, "pending") == "0x6f"
        assert sent(route)["params"] == [address, "0x21", "pending"]

@pytest.mark.parametrize("method, rpc_method, args, params, result, expected", [
    ("eth_get_transaction_count", "eth_getTransactionCount",
     ("0xe1a2", ), ["0xe1a2", "latest"], "0x1", 1),
    ("eth_get_transaction_count", "eth_getTransactionCount",
     ("0xe1a2", 100), ["0xe1a2", "0x64"], "0x1", 1),
    ("eth_get_code", "eth_getCode", ("0xe1a2",), ["0xe1a2", "latest"], "0x1dd7", "0x1dd7"),
    ("eth_get_block_transaction_count_by_hash", "eth_getBlockTransactionCountByHash",
     ("0x111",), ["0x111"], "0x8", 8),
    ("eth_get_block_transaction_count_by_number", "eth_getBlockTransactionCountByNumber",
     (2384732,), ["0x24635c"], "0x8", 8),
    ("eth_get_uncle_count_by_block_hash", "eth_getUncleCountByBlockHash",
     ("0x111",), ["0x111"], "0x1", 1),
    ("eth_get_uncle_count_by_block_number", "eth_getUncleCountByBlockNumber",
     (3987434,), ["0x3cd7ea"], "0x1", 1),
    ("eth_sign", "eth_sign", ("0x111", "0xdeadbeaf"), ["0x111", "0xdeadbeaf"], "0xa3f2", "0xa3f2"),
    ("eth_send_raw_transaction", "eth_sendRawTransaction", ("0xd46e",), ["0xd46e"], "0xe670", "0xe670"),
    ("eth_get_filter_changes", "eth_getFilterChanges", ("0x6996",), ["0x6996"], [], []),
    ("eth_get_filter_logs", "eth_getFilterLogs", ("0x6996",), ["0x6996"], [], []),
    ("eth_uninstall_filter", "eth_uninstallFilter", ("0x6996",), ["0x6996"], True, True),
])
def test_methods_with_params(
    client: EthRPC, url: str, method: str, rpc_method: str,
    args: tuple, params: list, result: Any, expected: Any,
):
    with respx.mock:
        route = mock_result(url, result)

        assert getattr(client, method)(*args) == expected

        request = sent(route)
        assert request["method"] == rpc_method
        assert request["params"] == params

def test_eth_send_transaction(client: EthRPC, url: str):
    transaction = CallParams(
        from_address="0x3cc1a3c082944b9dba70e490e481dd56",
        to="0x1bf21cb1dc384d019a885a06973f7308",
        gas=24900,
        gas_price=5000000000,
        value=client.eth1(),
        data="some data",
        nonce=98384,
    )

    with respx.mock:
        route = mock_result(url, "0xea1115eb5")

        assert client.eth_send_transaction(transaction) == "0xea1115eb5"
        assert sent(route)["params"] == [{
            "from": "0x3cc1a3c082944b9dba70e490e481dd56",
            "to": "0x1bf21cb1dc384d019a885a06973f7308",
            "gas": "0x6144",
            "gasPrice": "0x12a05f200",
            "value": "0xde0b6b3a7640000",
            "data": "some data",
            "nonce": "0x18050",
        }]

def test_eth_send_transaction_empty_params_still_send_from(client: EthRPC, url: str):
    with respx.mock:
        route = mock_result(url, "0xea1115eb5")

        client.eth_send_transaction(CallParams())

        assert sent(route)["params"] == [{"from": ""}]

def test_eth_call(client: EthRPC, url: str):
    with respx.mock:
        route = mock_result(url, "0x11")

        result = client.eth_call(CallParams(from_address="0x111", to="0x222"), "ttt")

        assert result == "0x11"
        assert sent(route)["params"] == [{"from": "0x111", "to": "0x222"}, "ttt"]

def test_eth_estimate_gas(client: EthRPC, url: str):
    with respx.mock:
        route = mock_result(url, "0x5022")

        assert client.eth_estimate_gas(CallParams(from_address="0x111", to="0x222")) == 20514
        assert sent(route)["params"] == [{"from": "0x111", "to": "0x222"}]

def test_eth_get_transaction_by_hash(client: EthRPC, url: str):
    with respx.mock:
        route = mock_result(url, {
            "hash": "0x123", "nonce": "0x1", "from": "0x1", "to": None, "gas": "0x5208",
            "gasPrice": "0x1", "value": "0x0", "input": "0x",
            "blockHash": None, "blockNumber": None, "transactionIndex": None,
        })

        tx = client.eth_get_transaction_by_hash("0x123")

        assert sent(route)["params"] == ["0x123"]
        assert tx is not None
        assert tx.hash == "0x123"
        assert tx.block_number is None

def test_transaction_lookups_not_found(client: EthRPC, url: str):
    with respx.mock:
        route = mock_result(url, None)

        assert client.eth_get_transaction_by_hash("0x123") is None
        assert client.eth_get_transaction_by_block_hash_and_index("0x623", 18) is None
        assert sent(route)["params"] == ["0x623", "0x12"]
        assert client.eth_get_transaction_by_block_number_and_index(32847834, 10) is None
        assert sent(route)["params"] == ["0x1f537da", "0xa"]
        assert client.eth_get_transaction_receipt("0x9c17") is None
        assert sent(route)["method"] == "eth_getTransactionReceipt"

def test_eth_get_block_by_hash_sends_flag(client: EthRPC, url: str):
    with respx.mock:
        route = mock_result(url, None)

        assert client.eth_get_block_by_hash("0x111", True) is None
        assert sent(route)["params"] == ["0x111", True]

        assert client.eth_get_block_by_hash("0x222") is None
        assert sent(route)["params"] == ["0x222", False]

def test_eth_get_block_by_number_sends_flag(client: EthRPC, url: str):
    with respx.mock:
        route = mock_result(url, None)

        assert client.eth_get_block_by_number(3274863, True) is None
        assert sent(route) == {
            "jsonrpc": "2.0", "id": 1, "method": "eth_getBlockByNumber", "params": ["0x31f86f", True]
        }

        client.eth_get_block_by_number(14322, False)
        assert sent(route)["params"] == ["0x37f2", False]

        client.eth_get_block_by_number("latest")
        assert sent(route)["params"] == ["latest", False]

def _block(transactions: list) -> Dict[str, Any]:
    return {
        "number": "0x4055d5",
        "hash": "0x2bdd",
        "parentHash": "0x913f",
        "nonce": "0xefd7ef000d0b78b8",
        "sha3Uncles": "0x1dcc",
        "logsBloom": "0x0",
        "transactionsRoot": "0x9784",
        "stateRoot": "0xab92",
        "miner": "0x1e99",
        "difficulty": "0x81299d4dbde29",
        "extraData": "0x",
        "size": "0x2fc6",
        "gasLimit": "0x667900",
        "gasUsed": "0x639fa0",
        "timestamp": "0x59a556bd",
        "uncles": [],
        "transactions": transactions,
    }

def test_eth_get_block_hashes_mode(client: EthRPC, url: str):
    with respx.mock:
        mock_result(url, _block(["0x160e", "0x161f"]))

        block = client.eth_get_block_by_number(4216277)

    assert block is not None
    assert block.transactions == (Transaction(hash="0x160e"), Transaction(hash="0x161f"))

def test_eth_get_block_full_mode(client: EthRPC, url: str):
    tx = {
        "hash": "0xf519", "nonce": "0x289b", "from": "0xa953", "to": "0xb595", "gas": "0x5208",
        "gasPrice": "0x6edf2a079e", "value": "0xdbd2fc137a30000", "input": "0x",
        "transactionIndex": "0x0",
    }

    with respx.mock:
        mock_result(url, _block([tx]))

        block = client.eth_get_block_by_hash("0x2bdd", True)

    assert block is not None
    assert block.transactions[0].block_hash == "0x2bdd"
    assert block.transactions[0].block_number == 4216277
    assert block.transactions[0].nonce == 10395

def test_eth_get_block_mode_follows_request(client: EthRPC, url: str):
    """A full-transaction block answered to a hashes request is a decode error."""
    with respx.mock:
        mock_result(url, _block([{"hash": "0xf519"}]))

        with pytest.raises(DecodeError):
            client.eth_get_block_by_number(1, False)

def test_eth_new_filter(client: EthRPC, url: str):
    address = "0x8888f1f195afa192cfee860698584c030f4c9db1"

    with respx.mock:
        route = mock_result(url, "0x6996a3a4788d4f2067108d1f536d4330")

        filter_id = client.eth_new_filter(FilterParams(address=[address], topics=[["0x111"], ["0x222"]]))

        assert filter_id == "0x6996a3a4788d4f2067108d1f536d4330"
        assert sent(route)["params"] == [{"address": [address], "topics": [["0x111"], ["0x222"]]}]

def test_eth_get_logs(client: EthRPC, url: str):
    params = FilterParams(
        from_block="0x1",
        to_block=16,
        address=["0x8888f1f195afa192cfee860698584c030f4c9db1"],
        topics=[["0x111"], None],
    )

    with respx.mock:
        route = mock_result(url, [{
            "address": "0xaca0cc3a6bf9552f2866ccc67801d4e6aa6a70f2",
            "blockHash": "0x9d9838090bb7f6194f62acea788688435b79cc44c62dcf1479abd9f2c72a7d5c",
            "blockNumber": 1,
            "data": "0x000000000000000000000000000000000000000000000000000000112c905320",
            "logIndex": 0,
            "removed": False,
            "topics": ["0x581d416ae9dff30c9305c2b35cb09ed5991897ab97804db29ccf92678e953160"],
        }])

        logs = client.eth_get_logs(params)

        assert sent(route)["params"] == [{
            "fromBlock": "0x1",
            "toBlock": "0x10",
            "address": ["0x8888f1f195afa192cfee860698584c030f4c9db1"],
            "topics": [["0x111"], None],
        }]

    assert logs == [Log(
        address="0xaca0cc3a6bf9552f2866ccc67801d4e6aa6a70f2",
        block_hash="0x9d9838090bb7f6194f62acea788688435b79cc44c62dcf1479abd9f2c72a7d5c",
        block_number=1,
        data="0x000000000000000000000000000000000000000000000000000000112c905320",
        log_index=0,
        topics=("0x581d416ae9dff30c9305c2b35cb09ed5991897ab97804db29ccf92678e953160",),
    )]

def test_protocol_error_through_typed_method(client: EthRPC, url: str):
    with respx.mock:
        respx.post(url).mock(return_value=httpx.Response(
            200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "method not found"}}
        ))

        with pytest.raises(ProtocolError, match=r"Error -32601 \(method not found\)"):
            client.eth_block_number()

def test_eth1(client: EthRPC):
    assert client.eth1() == 1000000000000000000

def test_context_manager_closes_transport(url: str):
    with EthRPC(url) as client:
        pass

    assert client.provider.transport.client.is_closed  # type: ignore[attr-defined]
