"""
Decoders from raw JSON-RPC results to typed records.

Every decoder validates the raw value against a wire struct from
ethrpc.schema, then maps it onto the record field by field. Numeric fields
go through the quantity codec; byte-data strings are copied verbatim.
"""
from typing import Any, Callable, List, Optional, Type, TypeVar

import msgspec

from ethrpc.errors import DecodeError, MalformedQuantity
from ethrpc.quantity import decode_big_quantity, decode_quantity
from ethrpc.schema import (
    WireBlockHeader,
    WireBlockWithHashes,
    WireBlockWithTransactions,
    WireLog,
    WireQuantity,
    WireSyncing,
    WireTransaction,
    WireTransactionReceipt,
)
from ethrpc.types import NOT_SYNCING, Block, BlockMode, Log, Syncing, Transaction, TransactionReceipt

W = TypeVar("W")


def _convert(raw: Any, wire_type: Type[W], entity: str) -> W:
    try:
        return msgspec.convert(raw, type=wire_type)
    except msgspec.ValidationError as exc:
        raise DecodeError(f"Invalid {entity}: {exc}") from exc


def _number(value: WireQuantity, name: str, parse: Callable[[str], int]) -> int:
    if isinstance(value, int):
        if value < 0:
            raise DecodeError(f"Negative quantity in {name}: {value}")
        return value
    try:
        return parse(value)
    except MalformedQuantity as exc:
        raise DecodeError(f"Invalid quantity in {name}: {exc}") from exc


def _int(value: WireQuantity, name: str) -> int:
    return _number(value, name, decode_quantity)


def _big(value: WireQuantity, name: str) -> int:
    return _number(value, name, decode_big_quantity)


def _opt_int(value: Optional[WireQuantity], name: str) -> Optional[int]:
    return None if value is None else _int(value, name)


def _opt_big(value: Optional[WireQuantity], name: str) -> Optional[int]:
    return None if value is None else _big(value, name)


def decode_int(raw: Any) -> int:
    """
    Machine-width quantity result (block number, counts, gas estimates).
    """
    if not isinstance(raw, (str, int)) or isinstance(raw, bool):
        raise DecodeError(f"Expected a quantity, got {raw!r}")
    return _int(raw, "result")


def decode_big_int(raw: Any) -> int:
    """
    Arbitrary-precision quantity result (balances, gas price).
    """
    if not isinstance(raw, (str, int)) or isinstance(raw, bool):
        raise DecodeError(f"Expected a quantity, got {raw!r}")
    return _big(raw, "result")


def decode_str(raw: Any) -> str:
    return _convert(raw, str, "string result")


def decode_bool(raw: Any) -> bool:
    return _convert(raw, bool, "boolean result")


def decode_str_list(raw: Any) -> List[str]:
    return _convert(raw, List[str], "string list")


def decode_syncing(raw: Any) -> Syncing:
    """
    eth_syncing answers `false` when idle and a progress object otherwise.
    The branch is on JSON type, not on which fields are present.
    """
    if raw is False:
        return NOT_SYNCING
    if not isinstance(raw, dict):
        raise DecodeError(f"Invalid sync status: expected false or an object, got {raw!r}")

    wire = _convert(raw, WireSyncing, "sync status")
    return Syncing(
        is_syncing=True,
        starting_block=_int(wire.starting_block, "startingBlock"),
        current_block=_int(wire.current_block, "currentBlock"),
        highest_block=_int(wire.highest_block, "highestBlock"),
    )


def _map_transaction(wire: WireTransaction) -> Transaction:
    return Transaction(
        hash=wire.hash,
        nonce=_int(wire.nonce, "nonce"),
        block_hash=wire.block_hash,
        block_number=_opt_int(wire.block_number, "blockNumber"),
        transaction_index=_opt_int(wire.transaction_index, "transactionIndex"),
        from_address=wire.from_address,
        to=wire.to,
        value=_big(wire.value, "value"),
        gas=_int(wire.gas, "gas"),
        gas_price=_big(wire.gas_price, "gasPrice"),
        input=wire.input,
        max_fee_per_gas=_opt_big(wire.max_fee_per_gas, "maxFeePerGas"),
        max_priority_fee_per_gas=_opt_big(wire.max_priority_fee_per_gas, "maxPriorityFeePerGas"),
    )


def decode_transaction(raw: Any) -> Optional[Transaction]:
    """
    Returns None when the node does not know the transaction (JSON null).
    """
    if raw is None:
        return None
    return _map_transaction(_convert(raw, WireTransaction, "transaction"))


def _map_log(wire: WireLog) -> Log:
    return Log(
        address=wire.address,
        data=wire.data,
        topics=tuple(wire.topics),
        removed=wire.removed,
        log_index=_opt_int(wire.log_index, "logIndex"),
        transaction_index=_opt_int(wire.transaction_index, "transactionIndex"),
        transaction_hash=wire.transaction_hash,
        block_number=_opt_int(wire.block_number, "blockNumber"),
        block_hash=wire.block_hash,
    )


def decode_log(raw: Any) -> Log:
    return _map_log(_convert(raw, WireLog, "log"))


def decode_logs(raw: Any) -> List[Log]:
    return [_map_log(w) for w in _convert(raw, List[WireLog], "log list")]


def decode_receipt(raw: Any) -> Optional[TransactionReceipt]:
    """
    Returns None while the transaction is not mined yet (JSON null).
    """
    if raw is None:
        return None

    wire = _convert(raw, WireTransactionReceipt, "transaction receipt")
    return TransactionReceipt(
        transaction_hash=wire.transaction_hash,
        transaction_index=_int(wire.transaction_index, "transactionIndex"),
        block_hash=wire.block_hash,
        block_number=_int(wire.block_number, "blockNumber"),
        cumulative_gas_used=_int(wire.cumulative_gas_used, "cumulativeGasUsed"),
        gas_used=_int(wire.gas_used, "gasUsed"),
        contract_address=wire.contract_address or "",
        logs=tuple(_map_log(w) for w in wire.logs),
        logs_bloom=wire.logs_bloom,
        root=wire.root,
        status=_opt_int(wire.status, "status"),
    )


def _hash_only(tx_hash: str) -> Transaction:
    return Transaction(hash=tx_hash)


def _backfilled(tx: Transaction, block_hash: Optional[str], block_number: Optional[int]) -> Transaction:
    return msgspec.structs.replace(tx, block_hash=block_hash, block_number=block_number)


def _map_block(wire: WireBlockHeader, transactions: List[Transaction]) -> Block:
    return Block(
        number=_opt_int(wire.number, "number"),
        hash=wire.hash,
        parent_hash=wire.parent_hash,
        nonce=wire.nonce,
        sha3_uncles=wire.sha3_uncles,
        logs_bloom=wire.logs_bloom,
        transactions_root=wire.transactions_root,
        state_root=wire.state_root,
        miner=wire.miner,
        difficulty=_big(wire.difficulty, "difficulty"),
        extra_data=wire.extra_data,
        size=_int(wire.size, "size"),
        gas_limit=_int(wire.gas_limit, "gasLimit"),
        gas_used=_int(wire.gas_used, "gasUsed"),
        timestamp=_int(wire.timestamp, "timestamp"),
        uncles=tuple(wire.uncles),
        transactions=tuple(transactions),
        receipts_root=wire.receipts_root,
        mix_hash=wire.mix_hash,
        total_difficulty=_opt_big(wire.total_difficulty, "totalDifficulty"),
        base_fee_per_gas=_opt_big(wire.base_fee_per_gas, "baseFeePerGas"),
    )


def decode_block(raw: Any, mode: BlockMode) -> Optional[Block]:
    """
    Decodes a block whose transaction list shape was chosen by the request.

    In HASHES mode each hash becomes a Transaction carrying only that hash.
    In FULL mode each object is decoded as a transaction and its block
    hash/number are taken from the enclosing block. A null result means the
    block does not exist and yields None.
    """
    if raw is None:
        return None

    if mode is BlockMode.HASHES:
        hashed = _convert(raw, WireBlockWithHashes, "block")
        return _map_block(hashed, [_hash_only(h) for h in hashed.transactions])

    full = _convert(raw, WireBlockWithTransactions, "block")
    number = _opt_int(full.number, "number")
    transactions = [
        _backfilled(_map_transaction(w), full.hash, number) for w in full.transactions
    ]
    return _map_block(full, transactions)
