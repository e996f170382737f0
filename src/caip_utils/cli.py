from pathlib import Path
from typing import Optional
import asyncio
import json
import logging
import typer

from .config import settings
from .dispatch import parse_caip2, parse_caip10, parse_caip19, parse_caip221, verify_caip19, verify_caip221
from .exceptions import CAIPError
from .models import CAIPModel
from .namespaces.eip155 import ChainDataCache, ChainlistClient, load_static_chains, write_chains_snapshot


app = typer.Typer(help="Parse and verify CAIP blockchain identifiers")


@app.callback()
def main(log_level: str = typer.Option(settings.LOG_LEVEL, help="Logging level")):
    logging.basicConfig(level=log_level.upper())


def _run(coro) -> None:
    """Run a parse/verify coroutine and print the result as camelCase JSON"""
    try:
        result: CAIPModel = asyncio.run(coro)
    except CAIPError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    data = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    typer.echo(json.dumps(data, indent=4, default=str))


@app.command()
def chain(identifier: str):
    """Parse a CAIP-2 chain id, e.g. eip155:1"""
    _run(parse_caip2(identifier))


@app.command()
def account(identifier: str):
    """Parse a CAIP-10 account id, e.g. eip155:1:0xab16a96D359eC26a11e2C2b3d8f8B8942d5Bfcdb"""
    _run(parse_caip10(identifier))


@app.command()
def asset(
    identifier: str,
    verify: bool = typer.Option(False, help="Confirm the asset on-chain"),
):
    """Parse a CAIP-19 asset id, e.g. eip155:1/erc20:0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"""
    _run(verify_caip19(identifier) if verify else parse_caip19(identifier))


@app.command()
def transaction(
    identifier: str,
    verify: bool = typer.Option(False, help="Confirm the transaction on-chain"),
):
    """Parse a CAIP-221 transaction id, e.g. stellar:pubnet:txn/<hash>"""
    _run(verify_caip221(identifier) if verify else parse_caip221(identifier))


@app.command("update-chains")
def update_chains(
    output: Optional[Path] = typer.Option(None, help="Snapshot file to write (default: the bundled snapshot)"),
):
    """Refresh the EIP155 chain snapshot with all chains from the chain list"""
    snapshot_path = output or settings.CHAINS_SNAPSHOT_PATH
    cache = ChainDataCache(
        fetcher=ChainlistClient(settings.CHAINLIST_URL, timeout=settings.REQUEST_TIMEOUT).fetch_chains,
        static_chains=load_static_chains(settings.CHAINS_SNAPSHOT_PATH),
        ttl_seconds=settings.CHAINLIST_TTL_SECONDS,
    )
    try:
        chains = asyncio.run(cache.refresh_snapshot())
    except Exception as e:
        typer.echo(f"Failed to update snapshot: {e}", err=True)
        raise typer.Exit(code=1)

    path = write_chains_snapshot(chains, snapshot_path)
    typer.echo(f"Snapshot {path} now contains {len(chains)} chains")


if __name__ == "__main__":
    app()
