from typing import Any, Callable, List, Optional, TypeVar

from ethrpc.configs.client_config import ClientConfig
from ethrpc.decoders import (
    decode_big_int,
    decode_block,
    decode_bool,
    decode_int,
    decode_logs,
    decode_receipt,
    decode_str,
    decode_str_list,
    decode_syncing,
    decode_transaction,
)
from ethrpc.provider import NodeProvider
from ethrpc.quantity import encode_big_quantity, encode_data, encode_quantity, eth1
from ethrpc.transport import HTTPXTransport, Transport
from ethrpc.types import (
    Block,
    BlockMode,
    BlockRef,
    CallParams,
    FilterParams,
    Log,
    Syncing,
    Transaction,
    TransactionReceipt,
    encode_block_ref,
)

T = TypeVar("T")


class EthRPC:
    """
    Ethereum JSON-RPC client.

    Every method is one call: encode params, send, decode the result.
    Lookups that can miss (blocks, transactions, receipts) return None when
    the node answers null.
    """

    def __init__(self, url: str, transport: Optional[Transport] = None, debug: bool = False):
        self.provider = NodeProvider(url, transport=transport, debug=debug)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "EthRPC":
        return cls(
            config.rpc_url,
            transport=HTTPXTransport(timeout=config.timeout),
            debug=config.debug,
        )

    @property
    def url(self) -> str:
        return self.provider.rpc_url

    def close(self) -> None:
        self.provider.close()

    def __enter__(self) -> "EthRPC":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def call(self, method: str, *params: Any) -> Any:
        """
        Returns the raw 'result' of a call; params are sent as null when empty.
        """
        return self.provider.call(method, list(params))

    def call_decoded(self, method: str, decoder: Callable[[Any], T], *params: Any) -> T:
        return decoder(self.call(method, *params))

    # --- web3 / net ---

    def web3_client_version(self) -> str:
        return self.call_decoded("web3_clientVersion", decode_str)

    def web3_sha3(self, data: bytes) -> str:
        return self.call_decoded("web3_sha3", decode_str, encode_data(data))

    def net_version(self) -> str:
        return self.call_decoded("net_version", decode_str)

    def net_listening(self) -> bool:
        return self.call_decoded("net_listening", decode_bool)

    def net_peer_count(self) -> int:
        return self.call_decoded("net_peerCount", decode_int)

    # --- node state ---

    def eth_protocol_version(self) -> str:
        return self.call_decoded("eth_protocolVersion", decode_str)

    def eth_syncing(self) -> Syncing:
        return self.call_decoded("eth_syncing", decode_syncing)

    def eth_coinbase(self) -> str:
        return self.call_decoded("eth_coinbase", decode_str)

    def eth_mining(self) -> bool:
        return self.call_decoded("eth_mining", decode_bool)

    def eth_hashrate(self) -> int:
        return self.call_decoded("eth_hashrate", decode_int)

    def eth_gas_price(self) -> int:
        return self.call_decoded("eth_gasPrice", decode_big_int)

    def eth_accounts(self) -> List[str]:
        return self.call_decoded("eth_accounts", decode_str_list)

    def eth_block_number(self) -> int:
        return self.call_decoded("eth_blockNumber", decode_int)

    def eth_get_compilers(self) -> List[str]:
        return self.call_decoded("eth_getCompilers", decode_str_list)

    # --- accounts and state ---

    def eth_get_balance(self, address: str, block: BlockRef = "latest") -> int:
        return self.call_decoded("eth_getBalance", decode_big_int, address, encode_block_ref(block))

    def eth_get_storage_at(self, address: str, position: int, block: BlockRef = "latest") -> str:
        return self.call_decoded(
            "eth_getStorageAt", decode_str, address, encode_big_quantity(position), encode_block_ref(block)
        )

    def eth_get_transaction_count(self, address: str, block: BlockRef = "latest") -> int:
        return self.call_decoded(
            "eth_getTransactionCount", decode_int, address, encode_block_ref(block)
        )

    def eth_get_code(self, address: str, block: BlockRef = "latest") -> str:
        return self.call_decoded("eth_getCode", decode_str, address, encode_block_ref(block))

    def eth_get_block_transaction_count_by_hash(self, block_hash: str) -> int:
        return self.call_decoded("eth_getBlockTransactionCountByHash", decode_int, block_hash)

    def eth_get_block_transaction_count_by_number(self, number: BlockRef) -> int:
        return self.call_decoded(
            "eth_getBlockTransactionCountByNumber", decode_int, encode_block_ref(number)
        )

    def eth_get_uncle_count_by_block_hash(self, block_hash: str) -> int:
        return self.call_decoded("eth_getUncleCountByBlockHash", decode_int, block_hash)

    def eth_get_uncle_count_by_block_number(self, number: BlockRef) -> int:
        return self.call_decoded(
            "eth_getUncleCountByBlockNumber", decode_int, encode_block_ref(number)
        )

    # --- transactions ---

    def eth_sign(self, address: str, data: str) -> str:
        return self.call_decoded("eth_sign", decode_str, address, data)

    def eth_send_transaction(self, transaction: CallParams) -> str:
        return self.call_decoded("eth_sendTransaction", decode_str, transaction.to_params())

    def eth_send_raw_transaction(self, data: str) -> str:
        return self.call_decoded("eth_sendRawTransaction", decode_str, data)

    def eth_call(self, transaction: CallParams, block: BlockRef = "latest") -> str:
        return self.call_decoded(
            "eth_call", decode_str, transaction.to_params(), encode_block_ref(block)
        )

    def eth_estimate_gas(self, transaction: CallParams) -> int:
        return self.call_decoded("eth_estimateGas", decode_int, transaction.to_params())

    def eth_get_transaction_by_hash(self, tx_hash: str) -> Optional[Transaction]:
        return self.call_decoded("eth_getTransactionByHash", decode_transaction, tx_hash)

    def eth_get_transaction_by_block_hash_and_index(
        self, block_hash: str, index: int
    ) -> Optional[Transaction]:
        return self.call_decoded(
            "eth_getTransactionByBlockHashAndIndex",
            decode_transaction,
            block_hash,
            encode_quantity(index),
        )

    def eth_get_transaction_by_block_number_and_index(
        self, number: BlockRef, index: int
    ) -> Optional[Transaction]:
        return self.call_decoded(
            "eth_getTransactionByBlockNumberAndIndex",
            decode_transaction,
            encode_block_ref(number),
            encode_quantity(index),
        )

    def eth_get_transaction_receipt(self, tx_hash: str) -> Optional[TransactionReceipt]:
        return self.call_decoded("eth_getTransactionReceipt", decode_receipt, tx_hash)

    # --- blocks ---

    def get_block(self, method: str, ref: str, full_transactions: bool) -> Optional[Block]:
        """
        Shared body of the get-block methods. The decode mode follows the
        flag sent to the node, never the shape of the answer.
        """
        mode = BlockMode.from_flag(full_transactions)
        raw = self.call(method, ref, full_transactions)
        return decode_block(raw, mode)

    def eth_get_block_by_hash(self, block_hash: str, full_transactions: bool = False) -> Optional[Block]:
        return self.get_block("eth_getBlockByHash", block_hash, full_transactions)

    def eth_get_block_by_number(self, number: BlockRef, full_transactions: bool = False) -> Optional[Block]:
        return self.get_block("eth_getBlockByNumber", encode_block_ref(number), full_transactions)

    # --- filters and logs ---

    def eth_new_filter(self, params: FilterParams) -> str:
        return self.call_decoded("eth_newFilter", decode_str, params.to_params())

    def eth_new_block_filter(self) -> str:
        return self.call_decoded("eth_newBlockFilter", decode_str)

    def eth_new_pending_transaction_filter(self) -> str:
        return self.call_decoded("eth_newPendingTransactionFilter", decode_str)

    def eth_get_filter_changes(self, filter_id: str) -> List[Log]:
        return self.call_decoded("eth_getFilterChanges", decode_logs, filter_id)

    def eth_get_filter_logs(self, filter_id: str) -> List[Log]:
        return self.call_decoded("eth_getFilterLogs", decode_logs, filter_id)

    def eth_get_logs(self, params: FilterParams) -> List[Log]:
        return self.call_decoded("eth_getLogs", decode_logs, params.to_params())

    def eth_uninstall_filter(self, filter_id: str) -> bool:
        return self.call_decoded("eth_uninstallFilter", decode_bool, filter_id)

    def eth1(self) -> int:
        return eth1()
