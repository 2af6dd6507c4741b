"""Error hierarchy. Every failure keeps its own exit code for the CLI."""

from __future__ import annotations

from typing import Any, Optional


class MediTrustError(RuntimeError):
    exit_code: int = 1


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


class WalletUnavailableError(MediTrustError):
    exit_code = 2


class WalletRejectedError(MediTrustError):
    """The user declined the connection request (EIP-1193 code 4001)."""

    exit_code = 3
    code = 4001


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ContractAddressNotSetError(MediTrustError):
    exit_code = 4


# ---------------------------------------------------------------------------
# Remote
# ---------------------------------------------------------------------------


class RpcError(MediTrustError):
    exit_code = 5

    def __init__(self, code: Optional[int], message: str, data: Any = None) -> None:
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"RPC error {code}: {message}")


class TransactionRevertedError(MediTrustError):
    exit_code = 6

    def __init__(self, tx_hash: str, receipt: dict) -> None:
        self.tx_hash = tx_hash
        self.receipt = receipt
        super().__init__(f"Transaction {tx_hash} reverted")


__all__ = [
    "ContractAddressNotSetError",
    "MediTrustError",
    "RpcError",
    "TransactionRevertedError",
    "WalletRejectedError",
    "WalletUnavailableError",
]
