"""
Address - Manage the MediTrust contract address.

The address is persisted in ~/.meditrust/state.json and restored by every
other command. MEDITRUST_CONTRACT_ADDRESS is used when nothing is stored.
"""

from __future__ import annotations

import click

from ..client import ChainRecordClient
from ..store import AddressStore


@click.group()
def address() -> None:
    """Show or change the contract address."""


@address.command("set")
@click.argument("contract_address")
def address_set(contract_address: str) -> None:
    """Use CONTRACT_ADDRESS for all later commands."""
    client = ChainRecordClient(contract_address="")
    client.set_address(contract_address)
    click.echo(f"Contract address set: {contract_address}")


@address.command("show")
def address_show() -> None:
    """Print the contract address in use."""
    client = ChainRecordClient()
    client.restore_address()
    if not client.contract_address:
        click.echo("Contract address not set.")
        click.echo("Run 'meditrust address set <ADDRESS>' after deployment.")
        return
    click.echo(client.contract_address)


@address.command("clear")
def address_clear() -> None:
    """Forget the persisted contract address."""
    AddressStore().clear()
    click.echo("Stored contract address cleared.")
