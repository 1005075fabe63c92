import logging
from typing import NoReturn, Optional

import typer
from dotenv import load_dotenv

from ethrpc.client import EthRPC
from ethrpc.configs.client_config import ClientConfig
from ethrpc.errors import EthRPCError
from ethrpc.types import Block, BlockRef

load_dotenv()

app = typer.Typer(help="ethrpc: query an Ethereum node over JSON-RPC")

RPC_URL_OPTION = typer.Option(None, "--rpc-url", help="Node endpoint (defaults to $ETH_RPC_URL)")
DEBUG_OPTION = typer.Option(False, "--debug", help="Log raw request and response bodies")


def get_client(rpc_url: Optional[str], debug: bool) -> EthRPC:
    """Helper to initialize the client from flags and env variables."""
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    env = ClientConfig.from_env()
    config = ClientConfig(
        rpc_url=rpc_url or env.rpc_url,
        timeout=env.timeout,
        debug=debug or env.debug,
    )
    return EthRPC.from_config(config)


def parse_block_ref(value: str) -> BlockRef:
    """Decimal block numbers become ints; tags and hex pass through."""
    return int(value) if value.isdigit() else value


def _fail(exc: EthRPCError) -> NoReturn:
    typer.secho(f"❌ {type(exc).__name__}: {exc}", fg=typer.colors.RED)
    raise typer.Exit(1)


def _not_found(what: str) -> NoReturn:
    typer.secho(f"⚠️ {what} not found", fg=typer.colors.YELLOW)
    raise typer.Exit(1)


def _print_block(block: Block) -> None:
    typer.echo(f"{'Number':<18} | {block.number}")
    typer.echo(f"{'Hash':<18} | {block.hash}")
    typer.echo(f"{'Parent':<18} | {block.parent_hash}")
    typer.echo(f"{'Miner':<18} | {block.miner}")
    typer.echo(f"{'Timestamp':<18} | {block.timestamp}")
    typer.echo(f"{'Gas used / limit':<18} | {block.gas_used:,} / {block.gas_limit:,}")
    typer.echo(f"{'Transactions':<18} | {len(block.transactions)}")
    for tx in block.transactions:
        line = f"  {tx.hash}"
        if tx.from_address:
            line += f"  {tx.from_address} -> {tx.to or '(create)'}  {tx.value}"
        typer.echo(line)


@app.command("block-number")
def block_number(rpc_url: Optional[str] = RPC_URL_OPTION, debug: bool = DEBUG_OPTION):
    """Print the number of the most recent block."""
    with get_client(rpc_url, debug) as client:
        try:
            typer.echo(client.eth_block_number())
        except EthRPCError as exc:
            _fail(exc)


@app.command()
def block(
    ref: str = typer.Argument("latest", help="Block number, hash or tag"),
    full: bool = typer.Option(False, "--full", help="Include full transaction objects"),
    rpc_url: Optional[str] = RPC_URL_OPTION,
    debug: bool = DEBUG_OPTION,
):
    """Show a block by number, hash or tag."""
    with get_client(rpc_url, debug) as client:
        try:
            if ref.startswith("0x") and len(ref) == 66:
                result = client.eth_get_block_by_hash(ref, full)
            else:
                result = client.eth_get_block_by_number(parse_block_ref(ref), full)
        except EthRPCError as exc:
            _fail(exc)

        if result is None:
            _not_found(f"Block {ref}")
        _print_block(result)


@app.command()
def tx(tx_hash: str, rpc_url: Optional[str] = RPC_URL_OPTION, debug: bool = DEBUG_OPTION):
    """Show a transaction by hash."""
    with get_client(rpc_url, debug) as client:
        try:
            result = client.eth_get_transaction_by_hash(tx_hash)
        except EthRPCError as exc:
            _fail(exc)

        if result is None:
            _not_found(f"Transaction {tx_hash}")

        status = "pending" if result.block_number is None else f"block {result.block_number}"
        typer.echo(f"{result.hash} ({status})")
        typer.echo(f"{result.from_address} -> {result.to or '(create)'}")
        typer.echo(f"value={result.value} gas={result.gas} gasPrice={result.gas_price} nonce={result.nonce}")


@app.command()
def receipt(tx_hash: str, rpc_url: Optional[str] = RPC_URL_OPTION, debug: bool = DEBUG_OPTION):
    """Show a transaction receipt."""
    with get_client(rpc_url, debug) as client:
        try:
            result = client.eth_get_transaction_receipt(tx_hash)
        except EthRPCError as exc:
            _fail(exc)

        if result is None:
            _not_found(f"Receipt for {tx_hash}")

        typer.echo(f"Block {result.block_number} ({result.block_hash}), index {result.transaction_index}")
        typer.echo(f"Gas used: {result.gas_used:,} (cumulative {result.cumulative_gas_used:,})")
        if result.status is not None:
            color = typer.colors.GREEN if result.status == 1 else typer.colors.RED
            typer.secho(f"Status: {result.status}", fg=color)
        if result.contract_address:
            typer.echo(f"Created contract: {result.contract_address}")
        typer.echo(f"Logs: {len(result.logs)}")


@app.command()
def syncing(rpc_url: Optional[str] = RPC_URL_OPTION, debug: bool = DEBUG_OPTION):
    """Report whether the node is still syncing."""
    with get_client(rpc_url, debug) as client:
        try:
            status = client.eth_syncing()
        except EthRPCError as exc:
            _fail(exc)

        if not status.is_syncing:
            typer.secho("✅ Not syncing", fg=typer.colors.GREEN)
            return
        typer.secho(
            f"🔄 Syncing: {status.current_block:,} / {status.highest_block:,} "
            f"(started at {status.starting_block:,})",
            fg=typer.colors.CYAN,
        )


@app.command()
def balance(
    address: str,
    block_ref: str = typer.Option("latest", "--block", help="Block number or tag"),
    rpc_url: Optional[str] = RPC_URL_OPTION,
    debug: bool = DEBUG_OPTION,
):
    """Print an account balance in wei and ether."""
    with get_client(rpc_url, debug) as client:
        try:
            wei = client.eth_get_balance(address, parse_block_ref(block_ref))
        except EthRPCError as exc:
            _fail(exc)

        whole, frac = divmod(wei, client.eth1())
        typer.echo(f"{wei} wei ({whole}.{frac:018d} ETH)")


def main():
    app()


if __name__ == "__main__":
    main()
