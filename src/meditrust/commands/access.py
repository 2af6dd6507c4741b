"""
Access - Grant, revoke and check a doctor's access to a record.

Only the record owner can grant or revoke; the contract enforces this and
a rejected call surfaces as a reverted transaction.
"""

from __future__ import annotations

import sys

import click

from .base import build_client, print_receipt, run


@click.command()
@click.argument("record_id", type=click.IntRange(min=0))
@click.argument("doctor")
@click.pass_context
def grant(ctx: click.Context, record_id: int, doctor: str) -> None:
    """Let DOCTOR read record RECORD_ID."""
    client = build_client(ctx)
    print_receipt(run(client.grant_access(record_id, doctor)))


@click.command()
@click.argument("record_id", type=click.IntRange(min=0))
@click.argument("doctor")
@click.pass_context
def revoke(ctx: click.Context, record_id: int, doctor: str) -> None:
    """Withdraw DOCTOR's access to record RECORD_ID."""
    client = build_client(ctx)
    print_receipt(run(client.revoke_access(record_id, doctor)))


@click.command("has-access")
@click.argument("record_id", type=click.IntRange(min=0))
@click.argument("account")
@click.pass_context
def has_access(ctx: click.Context, record_id: int, account: str) -> None:
    """Check whether ACCOUNT may read record RECORD_ID (exit 1 if not)."""
    client = build_client(ctx)
    if run(client.has_access(record_id, account)):
        click.secho("yes", fg="green")
    else:
        click.secho("no", fg="yellow")
        sys.exit(1)
