__all__ = [
    # Client
    "ChainRecordClient",
    # Models
    "MedicalRecord",
    # Persistence
    "AddressStore",
    # Wallet
    "Wallet",
    "generate_eoa",
    "load_private_key",
    "save_private_key",
    # Chain layer
    "ContractHandle",
    "JsonRpc",
    "load_abi",
    # Errors
    "MediTrustError",
    "WalletUnavailableError",
    "WalletRejectedError",
    "ContractAddressNotSetError",
    "RpcError",
    "TransactionRevertedError",
]

from .chain.abi import load_abi
from .chain.contract import ContractHandle
from .chain.rpc import JsonRpc
from .client import ChainRecordClient
from .errors import (
    ContractAddressNotSetError,
    MediTrustError,
    RpcError,
    TransactionRevertedError,
    WalletRejectedError,
    WalletUnavailableError,
)
from .models import MedicalRecord
from .store import AddressStore
from .wallet import Wallet, generate_eoa, load_private_key, save_private_key
