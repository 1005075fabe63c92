"""
Wire shapes of the entities returned by the node.

Field names follow the protocol (camelCase on the wire). Numeric fields stay
as the raw JSON value here; ethrpc.decoders turns them into integers.
"""
from typing import List, Optional, Union

import msgspec

# Nodes normally send hex strings; a few emit bare integers for log positions.
WireQuantity = Union[str, int]


class WireSyncing(msgspec.Struct):
    starting_block: WireQuantity = msgspec.field(name="startingBlock")
    current_block: WireQuantity = msgspec.field(name="currentBlock")
    highest_block: WireQuantity = msgspec.field(name="highestBlock")


class WireTransaction(msgspec.Struct):
    hash: str
    nonce: WireQuantity
    from_address: str = msgspec.field(name="from")
    gas: WireQuantity
    gas_price: WireQuantity = msgspec.field(name="gasPrice")
    value: WireQuantity
    input: str
    to: Optional[str] = None
    block_hash: Optional[str] = msgspec.field(name="blockHash", default=None)
    block_number: Optional[WireQuantity] = msgspec.field(name="blockNumber", default=None)
    transaction_index: Optional[WireQuantity] = msgspec.field(name="transactionIndex", default=None)
    max_fee_per_gas: Optional[WireQuantity] = msgspec.field(name="maxFeePerGas", default=None)
    max_priority_fee_per_gas: Optional[WireQuantity] = msgspec.field(
        name="maxPriorityFeePerGas", default=None
    )


class WireLog(msgspec.Struct):
    address: str
    data: str
    topics: List[str]
    removed: bool = False
    log_index: Optional[WireQuantity] = msgspec.field(name="logIndex", default=None)
    transaction_index: Optional[WireQuantity] = msgspec.field(name="transactionIndex", default=None)
    transaction_hash: Optional[str] = msgspec.field(name="transactionHash", default=None)
    block_number: Optional[WireQuantity] = msgspec.field(name="blockNumber", default=None)
    block_hash: Optional[str] = msgspec.field(name="blockHash", default=None)


class WireTransactionReceipt(msgspec.Struct):
    transaction_hash: str = msgspec.field(name="transactionHash")
    transaction_index: WireQuantity = msgspec.field(name="transactionIndex")
    block_hash: str = msgspec.field(name="blockHash")
    block_number: WireQuantity = msgspec.field(name="blockNumber")
    cumulative_gas_used: WireQuantity = msgspec.field(name="cumulativeGasUsed")
    gas_used: WireQuantity = msgspec.field(name="gasUsed")
    logs: List[WireLog]
    logs_bloom: str = msgspec.field(name="logsBloom")
    contract_address: Optional[str] = msgspec.field(name="contractAddress", default=None)
    root: Optional[str] = None
    status: Optional[WireQuantity] = None


class WireBlockHeader(msgspec.Struct):
    """
    Block fields shared by both request variants.
    """
    parent_hash: str = msgspec.field(name="parentHash")
    sha3_uncles: str = msgspec.field(name="sha3Uncles")
    transactions_root: str = msgspec.field(name="transactionsRoot")
    state_root: str = msgspec.field(name="stateRoot")
    miner: str
    difficulty: WireQuantity
    extra_data: str = msgspec.field(name="extraData")
    size: WireQuantity
    gas_limit: WireQuantity = msgspec.field(name="gasLimit")
    gas_used: WireQuantity = msgspec.field(name="gasUsed")
    timestamp: WireQuantity
    uncles: List[str]
    number: Optional[WireQuantity] = None
    hash: Optional[str] = None
    nonce: Optional[str] = None
    logs_bloom: Optional[str] = msgspec.field(name="logsBloom", default=None)
    receipts_root: Optional[str] = msgspec.field(name="receiptsRoot", default=None)
    mix_hash: Optional[str] = msgspec.field(name="mixHash", default=None)
    total_difficulty: Optional[WireQuantity] = msgspec.field(name="totalDifficulty", default=None)
    base_fee_per_gas: Optional[WireQuantity] = msgspec.field(name="baseFeePerGas", default=None)


class WireBlockWithHashes(WireBlockHeader, kw_only=True):
    transactions: List[str]


class WireBlockWithTransactions(WireBlockHeader, kw_only=True):
    transactions: List[WireTransaction]
