"""
ChainRecordClient - façade over the MediTrust contract.

Every operation follows the same path: connect the wallet, bind a contract
handle to the configured address, invoke one contract method, and (for
writes) wait for the transaction to be mined. Nothing is cached between
calls. Failures are logged and re-raised unchanged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx
from eth_account.signers.local import LocalAccount

from .chain.abi import load_abi
from .chain.contract import ContractHandle
from .chain.rpc import JsonRpc
from .config import default_contract_address
from .errors import ContractAddressNotSetError
from .models import MedicalRecord
from .store import AddressStore
from .wallet import Wallet

logger = logging.getLogger(__name__)


class ChainRecordClient:
    """
    Async client for the MediTrust records contract.

    Args:
        contract_address: Deployed contract address. Defaults to
                          MEDITRUST_CONTRACT_ADDRESS (may be empty).
        wallet:           Signer source. Defaults to a Wallet reading .env.
        rpc_url:          Node URL. Defaults to MEDITRUST_RPC_URL.
        store:            Where set_address() persists the address.
        abi_path:         Artifact to load the ABI from.
        transport:        httpx transport override (used by tests).
    """

    def __init__(
        self,
        contract_address: Optional[str] = None,
        wallet: Optional[Wallet] = None,
        rpc_url: Optional[str] = None,
        store: Optional[AddressStore] = None,
        abi_path: Optional[Path] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if contract_address is None:
            contract_address = default_contract_address()
        self.contract_address = contract_address
        self.wallet = wallet or Wallet()
        self.rpc_url = rpc_url
        self.store = store or AddressStore()
        self.abi_path = abi_path
        self.transport = transport

    # ------------------------------------------------------------------
    # Connection and address management
    # ------------------------------------------------------------------

    async def connect(self) -> LocalAccount:
        """Request account access from the wallet and return the signer."""
        return await self.wallet.connect()

    def contract(self, signer: LocalAccount) -> ContractHandle:
        """
        Bind the MediTrust contract to ``signer``.

        Raises:
            ContractAddressNotSetError: If no address has been configured
        """
        if not self.contract_address:
            raise ContractAddressNotSetError(
                "Contract address not set. Please deploy the contract first."
            )
        return ContractHandle(
            address=self.contract_address,
            abi=load_abi(self.abi_path),
            signer=signer,
            rpc=JsonRpc(self.rpc_url, transport=self.transport),
        )

    def set_address(self, address: str) -> None:
        """Use ``address`` from now on and persist it for later sessions."""
        self.store.save(address)
        self.contract_address = address

    def restore_address(self) -> None:
        """Load the persisted address, if any, into this client."""
        saved = self.store.load()
        if saved:
            self.contract_address = saved

    async def _contract(self) -> ContractHandle:
        signer = await self.connect()
        return self.contract(signer)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def add_record(self, ipfs_hash: str, record_type: str, file_size: int) -> dict:
        """Register an uploaded file (by IPFS hash) as a new record."""
        try:
            contract = await self._contract()
            return await contract.transact("addRecord", ipfs_hash, record_type, file_size)
        except Exception as exc:
            logger.error("Error adding record to blockchain: %s", exc)
            raise

    async def grant_access(self, record_id: int, doctor_address: str) -> dict:
        try:
            contract = await self._contract()
            return await contract.transact("grantAccess", record_id, doctor_address)
        except Exception as exc:
            logger.error("Error granting access: %s", exc)
            raise

    async def revoke_access(self, record_id: int, doctor_address: str) -> dict:
        try:
            contract = await self._contract()
            return await contract.transact("revokeAccess", record_id, doctor_address)
        except Exception as exc:
            logger.error("Error revoking access: %s", exc)
            raise

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def has_access(self, record_id: int, address: str) -> bool:
        try:
            contract = await self._contract()
            granted = await contract.call("hasAccess", record_id, address)
            return bool(granted)
        except Exception as exc:
            logger.error("Error checking access: %s", exc)
            raise

    async def get_record(self, record_id: int) -> MedicalRecord:
        try:
            contract = await self._contract()
            raw = await contract.call("getRecord", record_id)
            return MedicalRecord.from_contract(raw)
        except Exception as exc:
            logger.error("Error getting record: %s", exc)
            raise

    async def get_my_records(self) -> list[MedicalRecord]:
        """Records owned by the connected account; owner is left out."""
        try:
            contract = await self._contract()
            records = await contract.call("getMyRecords")
            return [
                MedicalRecord.from_contract(raw, record_id=index, include_owner=False)
                for index, raw in enumerate(records)
            ]
        except Exception as exc:
            logger.error("Error getting my records: %s", exc)
            raise

    async def get_accessible_records(self) -> list[MedicalRecord]:
        """Records the connected account has been granted access to."""
        try:
            contract = await self._contract()
            records = await contract.call("getAccessibleRecords")
            return [
                MedicalRecord.from_contract(raw, record_id=index)
                for index, raw in enumerate(records)
            ]
        except Exception as exc:
            logger.error("Error getting accessible records: %s", exc)
            raise
