"""
Records - Add and read medical records.

Files themselves live on IPFS (encrypted); the contract only stores the
hash, type and size, so 'add' takes those values rather than a file.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional

import click

from ..models import MedicalRecord
from .base import build_client, print_receipt, run


def _print_records(records: list[MedicalRecord], as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([r.to_dict() for r in records], indent=2))
        return

    if not records:
        click.echo("No records.")
        return

    for record in records:
        _print_record(record, record.id)


def _print_record(record: MedicalRecord, record_id: Optional[int]) -> None:
    when = datetime.fromtimestamp(record.timestamp, tz=timezone.utc).isoformat()
    click.echo(
        click.style(f"  #{record_id}", fg="cyan", bold=True)
        + f"  {record.record_type}  {record.size} bytes  {when}"
    )
    click.echo(f"      IPFS: {record.ipfs_hash}")
    if record.owner:
        click.echo(f"      Owner: {record.owner}")


@click.command()
@click.option("--ipfs-hash", required=True, help="IPFS hash of the encrypted file")
@click.option("--type", "record_type", required=True, help="Record type, e.g. 'xray'")
@click.option("--size", "file_size", required=True, type=click.IntRange(min=0), help="File size in bytes")
@click.pass_context
def add(ctx: click.Context, ipfs_hash: str, record_type: str, file_size: int) -> None:
    """Register an uploaded file as a new medical record."""
    client = build_client(ctx)
    result = run(client.add_record(ipfs_hash, record_type, file_size))
    print_receipt(result)


@click.command()
@click.argument("record_id", type=click.IntRange(min=0))
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def record(ctx: click.Context, record_id: int, as_json: bool) -> None:
    """Show a single record."""
    client = build_client(ctx)
    result = run(client.get_record(record_id))
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_record(result, record_id)


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def mine(ctx: click.Context, as_json: bool) -> None:
    """List the records you own."""
    client = build_client(ctx)
    _print_records(run(client.get_my_records()), as_json)


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def accessible(ctx: click.Context, as_json: bool) -> None:
    """List the records shared with you."""
    client = build_client(ctx)
    _print_records(run(client.get_accessible_records()), as_json)
