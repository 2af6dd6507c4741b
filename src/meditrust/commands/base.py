"""Shared plumbing for CLI commands: client construction and error exits."""

from __future__ import annotations

import asyncio
import sys
from typing import Any, Awaitable, TypeVar

import click
import httpx

from ..client import ChainRecordClient
from ..errors import MediTrustError
from ..wallet import Wallet, blocking_approver

T = TypeVar("T")


def _confirm(address: str) -> bool:
    return click.confirm(f"Allow MediTrust to use account {address}?", default=True)


def build_client(ctx: click.Context) -> ChainRecordClient:
    """Client for the current invocation, with the persisted address restored."""
    settings = ctx.find_root().obj or {}
    approve = None if settings.get("yes") else blocking_approver(_confirm)
    client = ChainRecordClient(
        wallet=Wallet(approve=approve),
        rpc_url=settings.get("rpc_url"),
    )
    client.restore_address()
    return client


def run(coro: Awaitable[T]) -> T:
    """Drive ``coro`` to completion, turning failures into a red message and exit code."""
    try:
        return asyncio.run(coro)  # type: ignore[arg-type]
    except MediTrustError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)
    except httpx.HTTPError as exc:
        click.secho(f"ERROR: node unreachable: {exc}", fg="red", err=True)
        sys.exit(1)
    except Exception as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)


def print_receipt(result: dict[str, Any]) -> None:
    click.secho("SUCCESS: Transaction confirmed!", fg="green")
    click.echo(f"  TX: {result['tx_hash']}")
    block = (result.get("receipt") or {}).get("blockNumber")
    if block:
        click.echo(f"  Block: {int(block, 16)}")
