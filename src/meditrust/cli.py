"""
MediTrust CLI

Command-line interface for the MediTrust medical-records contract.

Identity = ECDSA/secp256k1 wallet (PRIVATE_KEY in ~/.meditrust/.env).
Record contents stay encrypted on IPFS; the chain only holds pointers and
access grants.

Commands:
  keygen      - Create a development wallet
  whoami      - Connect the wallet and show its address
  info        - Show configuration
  address     - Show / set / clear the contract address
  add         - Register a new record
  record      - Show one record
  mine        - List your records
  accessible  - List records shared with you
  grant       - Grant a doctor access to a record
  revoke      - Revoke a doctor's access
  has-access  - Check an account's access to a record
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import click

from . import config
from .commands.access import grant, has_access, revoke
from .commands.address import address
from .commands.base import build_client, run
from .commands.records import accessible, add, mine, record
from .errors import WalletUnavailableError
from .wallet import generate_eoa, load_private_key, save_private_key


# ============ Constants ============

VERSION = "0.1.0"


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=VERSION, prog_name="meditrust")
@click.option(
    "--rpc-url",
    envvar="MEDITRUST_RPC_URL",
    default=None,
    help="Ethereum JSON-RPC URL",
)
@click.option("--yes", "-y", is_flag=True, help="Skip the wallet connection prompt")
@click.option("--verbose", "-v", is_flag=True, help="Log RPC traffic")
@click.pass_context
def cli(ctx: click.Context, rpc_url: Optional[str], yes: bool, verbose: bool) -> None:
    """MediTrust: medical records on chain."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config.load_env()
    ctx.obj = {"rpc_url": rpc_url, "yes": yes}


cli.add_command(address)
cli.add_command(add)
cli.add_command(record)
cli.add_command(mine)
cli.add_command(accessible)
cli.add_command(grant)
cli.add_command(revoke)
cli.add_command(has_access)


# ============ Identity ============


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite an existing key")
def keygen(force: bool) -> None:
    """Create a development wallet in ~/.meditrust/.env."""
    try:
        load_private_key()
        if not force:
            click.echo("A wallet already exists. Use --force to replace it.")
            sys.exit(1)
    except WalletUnavailableError:
        pass

    private_key, wallet_address = generate_eoa()
    env_path = save_private_key(private_key)
    click.echo(f"Address: {wallet_address}")
    click.echo(f"Saved to: {env_path}")


@cli.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Connect the wallet and show its address."""
    client = build_client(ctx)
    signer = run(client.connect())
    click.echo(f"Address: {signer.address}")


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show configuration."""
    client = build_client(ctx)

    click.echo(click.style("  RPC URL:   ", dim=True) + (client.rpc_url or config.get_rpc_url()))
    click.echo(
        click.style("  Contract:  ", dim=True)
        + (client.contract_address or click.style("not set", fg="yellow"))
    )

    try:
        wallet_address = client.wallet.current_address()
        click.echo(click.style("  Wallet:    ", dim=True) + wallet_address)
    except WalletUnavailableError:
        click.echo(
            click.style("  Wallet:    ", dim=True)
            + click.style("not initialized", fg="yellow")
            + click.style("  (run: meditrust keygen)", dim=True)
        )


# ============ Entry Points ============


def main() -> None:
    """MediTrust CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
