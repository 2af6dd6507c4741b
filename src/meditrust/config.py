"""
Runtime configuration for the MediTrust client.

Everything is read from the environment, optionally seeded from
~/.meditrust/.env (or $MEDITRUST_HOME/.env) through python-dotenv.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _home() -> Path:
    override = os.environ.get("MEDITRUST_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".meditrust"


# Default config directory
MEDITRUST_DIR = _home()
MEDITRUST_ENV = MEDITRUST_DIR / ".env"

# Key under which the contract address is persisted
ADDRESS_STORAGE_KEY = "mediTrustContractAddress"

DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_GAS_LIMIT = 500_000


def load_env(env_path: Optional[Path] = None) -> None:
    """Load the .env file into os.environ if it exists."""
    env_path = env_path or MEDITRUST_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)


def get_rpc_url() -> str:
    """Get the RPC URL from environment or default."""
    return os.environ.get("MEDITRUST_RPC_URL", DEFAULT_RPC_URL)


def get_chain_id() -> Optional[int]:
    """
    Get the chain ID from environment.

    Returns None when unset; callers then ask the node via eth_chainId.
    """
    value = os.environ.get("MEDITRUST_CHAIN_ID")
    if not value:
        return None
    return int(value, 0)


def default_contract_address() -> str:
    """Address used when nothing has been persisted yet (may be empty)."""
    return os.environ.get("MEDITRUST_CONTRACT_ADDRESS", "")
