"""Tests for MedicalRecord shaping."""

from __future__ import annotations

from meditrust.models import MedicalRecord

OWNER = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"


def _raw(**overrides):
    raw = {"ipfsHash": "Qm1", "owner": OWNER, "timestamp": 5, "recordType": "lab", "size": 7}
    raw.update(overrides)
    return raw


def test_position_id_used_without_contract_id() -> None:
    assert MedicalRecord.from_contract(_raw(), record_id=4).id == 4


def test_contract_id_preferred_over_position() -> None:
    assert MedicalRecord.from_contract(_raw(id=42), record_id=0).id == 42


def test_to_dict_camel_case() -> None:
    record = MedicalRecord.from_contract(_raw(), record_id=1)
    assert record.to_dict() == {
        "id": 1,
        "ipfsHash": "Qm1",
        "owner": OWNER,
        "timestamp": 5,
        "recordType": "lab",
        "size": 7,
    }


def test_owner_can_be_dropped() -> None:
    record = MedicalRecord.from_contract(_raw(), record_id=0, include_owner=False)
    assert "owner" not in record.to_dict()
