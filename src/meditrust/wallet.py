"""
Wallet - ECDSA / secp256k1 account used to sign MediTrust transactions.

The key lives in ~/.meditrust/.env as PRIVATE_KEY (hex format), or in the
PRIVATE_KEY environment variable. It is re-read on every connect().

An optional ``approve`` callback plays the role of the wallet's connection
prompt: it receives the account address and returns True to allow access.
"""

from __future__ import annotations

import asyncio
import inspect
import os
import secrets
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from dotenv import load_dotenv
from eth_account import Account
from eth_account.signers.local import LocalAccount

from . import config
from .errors import WalletRejectedError, WalletUnavailableError

Approver = Callable[[str], Union[bool, Awaitable[bool]]]


def generate_eoa() -> tuple[str, str]:
    """
    Generate a new ECDSA/secp256k1 keypair (EOA).

    Returns:
        Tuple of (private_key_hex, address)
    """
    private_key = "0x" + secrets.token_hex(32)
    account = Account.from_key(private_key)
    return private_key, account.address


def save_private_key(private_key: str, env_path: Optional[Path] = None) -> Path:
    """
    Save private key to .env file, keeping any other entries.

    Returns:
        Path to the saved .env file
    """
    env_path = env_path or config.MEDITRUST_ENV
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing = {}
    if env_path.exists():
        for line in env_path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, v = line.split("=", 1)
                existing[k.strip()] = v.strip()

    existing["PRIVATE_KEY"] = private_key

    lines = [f"{k}={v}" for k, v in existing.items()]
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    if os.name != "nt":
        env_path.chmod(0o600)

    return env_path


def load_private_key(env_path: Optional[Path] = None) -> str:
    """
    Load private key from .env file or environment.

    Raises:
        WalletUnavailableError: If no PRIVATE_KEY is configured
    """
    env_path = env_path or config.MEDITRUST_ENV

    if env_path.exists():
        load_dotenv(env_path, override=True)

    private_key = os.environ.get("PRIVATE_KEY")
    if not private_key:
        raise WalletUnavailableError(
            f"No wallet found. Set PRIVATE_KEY in {env_path} or the environment."
        )

    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    return private_key


class Wallet:
    """
    Source of the transaction signer.

    Args:
        private_key: Explicit 0x-prefixed key; skips the .env lookup.
        env_path:    .env file to read PRIVATE_KEY from.
        approve:     Connection prompt; sync or async, returns True to allow.
    """

    def __init__(
        self,
        private_key: Optional[str] = None,
        env_path: Optional[Path] = None,
        approve: Optional[Approver] = None,
    ) -> None:
        self.private_key = private_key
        self.env_path = env_path
        self.approve = approve

    def _account(self) -> LocalAccount:
        key = self.private_key or load_private_key(self.env_path)
        try:
            return Account.from_key(key)
        except (ValueError, TypeError) as exc:
            raise WalletUnavailableError(f"Invalid private key: {exc}") from exc

    async def _ask(self, address: str) -> None:
        if self.approve is None:
            return
        answer = self.approve(address)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            raise WalletRejectedError("User rejected the request.")

    def current_address(self) -> str:
        """Address of the configured key, without asking for approval."""
        return self._account().address

    async def request_accounts(self) -> list[str]:
        """Ask for account access; returns the approved addresses."""
        account = self._account()
        await self._ask(account.address)
        return [account.address]

    async def connect(self) -> LocalAccount:
        """Ask for account access and return the signer."""
        account = self._account()
        await self._ask(account.address)
        return account


def blocking_approver(prompt: Callable[[str], bool]) -> Approver:
    """Wrap a blocking prompt (e.g. click.confirm) so it runs off the event loop."""

    async def _approve(address: str) -> bool:
        return await asyncio.to_thread(prompt, address)

    return _approve
