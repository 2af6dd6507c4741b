from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class MedicalRecord:
    """
    A record as stored by the MediTrust contract.

    The contract keeps only a pointer (``ipfs_hash``) to the encrypted file.
    ``id`` is the contract's own id when it exposes one; list queries
    otherwise fall back to the position in the returned sequence.
    """

    ipfs_hash: str
    timestamp: int
    record_type: str
    size: int
    owner: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def from_contract(
        cls,
        raw: dict[str, Any],
        record_id: Optional[int] = None,
        include_owner: bool = True,
    ) -> "MedicalRecord":
        explicit_id = raw.get("id")
        return cls(
            ipfs_hash=raw["ipfsHash"],
            timestamp=int(raw["timestamp"]),
            record_type=raw["recordType"],
            size=int(raw["size"]),
            owner=raw.get("owner") if include_owner else None,
            id=int(explicit_id) if explicit_id is not None else record_id,
        )

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "ipfsHash": self.ipfs_hash,
            "owner": self.owner,
            "timestamp": self.timestamp,
            "recordType": self.record_type,
            "size": self.size,
        }
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["MedicalRecord"]
