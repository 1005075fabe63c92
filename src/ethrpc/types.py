from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

import msgspec

from ethrpc.quantity import encode_big_quantity, encode_quantity

BlockRef = Union[int, str]


class BlockMode(Enum):
    """
    Shape of a block's transaction list, fixed by the request that fetched it.
    """
    HASHES = "hashes"
    FULL = "full"

    @classmethod
    def from_flag(cls, full_transactions: bool) -> "BlockMode":
        return cls.FULL if full_transactions else cls.HASHES


class Syncing(msgspec.Struct, frozen=True, kw_only=True):
    is_syncing: bool
    starting_block: int = 0
    current_block: int = 0
    highest_block: int = 0


NOT_SYNCING = Syncing(is_syncing=False)


class Transaction(msgspec.Struct, frozen=True, kw_only=True):
    """
    A transaction as reported by the node.

    Block position fields are None while the transaction is pending. A
    transaction lifted from a hash-only block carries just its hash.
    """
    hash: str
    nonce: int = 0
    block_hash: Optional[str] = None
    block_number: Optional[int] = None
    transaction_index: Optional[int] = None
    from_address: str = ""
    to: Optional[str] = None
    value: int = 0
    gas: int = 0
    gas_price: int = 0
    input: str = ""
    max_fee_per_gas: Optional[int] = None
    max_priority_fee_per_gas: Optional[int] = None


class Log(msgspec.Struct, frozen=True, kw_only=True):
    address: str
    data: str
    topics: Tuple[str, ...] = ()
    removed: bool = False
    log_index: Optional[int] = None
    transaction_index: Optional[int] = None
    transaction_hash: Optional[str] = None
    block_number: Optional[int] = None
    block_hash: Optional[str] = None


class TransactionReceipt(msgspec.Struct, frozen=True, kw_only=True):
    """
    Receipt of a mined transaction. contract_address is the empty string
    unless the transaction created a contract.
    """
    transaction_hash: str
    transaction_index: int
    block_hash: str
    block_number: int
    cumulative_gas_used: int
    gas_used: int
    contract_address: str = ""
    logs: Tuple[Log, ...] = ()
    logs_bloom: str = ""
    root: Optional[str] = None
    status: Optional[int] = None


class Block(msgspec.Struct, frozen=True, kw_only=True):
    number: Optional[int]
    hash: Optional[str]
    parent_hash: str
    nonce: Optional[str]
    sha3_uncles: str
    logs_bloom: Optional[str]
    transactions_root: str
    state_root: str
    miner: str
    difficulty: int
    extra_data: str
    size: int
    gas_limit: int
    gas_used: int
    timestamp: int
    uncles: Tuple[str, ...] = ()
    transactions: Tuple[Transaction, ...] = ()
    receipts_root: Optional[str] = None
    mix_hash: Optional[str] = None
    total_difficulty: Optional[int] = None
    base_fee_per_gas: Optional[int] = None


class CallParams(msgspec.Struct, kw_only=True):
    """
    Transaction-like input for eth_call, eth_estimateGas and eth_sendTransaction.
    """
    from_address: str = ""
    to: str = ""
    gas: int = 0
    gas_price: Optional[int] = None
    value: Optional[int] = None
    data: str = ""
    nonce: int = 0

    def to_params(self) -> Dict[str, Any]:
        # 'from' is always sent, everything else only when set
        params: Dict[str, Any] = {"from": self.from_address}
        if self.to:
            params["to"] = self.to
        if self.gas > 0:
            params["gas"] = encode_quantity(self.gas)
        if self.gas_price:
            params["gasPrice"] = encode_big_quantity(self.gas_price)
        if self.value:
            params["value"] = encode_big_quantity(self.value)
        if self.data:
            params["data"] = self.data
        if self.nonce > 0:
            params["nonce"] = encode_quantity(self.nonce)
        return params


class FilterParams(msgspec.Struct, kw_only=True):
    """
    Log filter. A None entry in topics matches any topic at that position.
    """
    from_block: Optional[BlockRef] = None
    to_block: Optional[BlockRef] = None
    address: List[str] = msgspec.field(default_factory=list)
    topics: List[Optional[List[str]]] = msgspec.field(default_factory=list)

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.from_block is not None:
            params["fromBlock"] = encode_block_ref(self.from_block)
        if self.to_block is not None:
            params["toBlock"] = encode_block_ref(self.to_block)
        if self.address:
            params["address"] = list(self.address)
        if self.topics:
            params["topics"] = [list(t) if t is not None else None for t in self.topics]
        return params


def encode_block_ref(block: BlockRef) -> str:
    """
    Block numbers become quantities; tags such as "latest" pass through.
    """
    if isinstance(block, int):
        return encode_quantity(block)
    return block
