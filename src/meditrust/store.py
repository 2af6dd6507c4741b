"""
Contract address persistence.

Keeps the deployed contract address in a small JSON state file so a later
session can restore it.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from . import config


@dataclass
class AddressStore:
    """Single-key persistent store for the contract address."""

    state_dir: Path = field(default_factory=lambda: config.MEDITRUST_DIR)
    key: str = config.ADDRESS_STORAGE_KEY

    @property
    def path(self) -> Path:
        return self.state_dir / "state.json"

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> Optional[str]:
        """Return the persisted address, or None if nothing usable is stored."""
        value = self._read().get(self.key)
        return value if isinstance(value, str) and value else None

    def save(self, address: str) -> None:
        self.state_dir.mkdir(parents=True, exist_ok=True)
        data = self._read()
        data[self.key] = address
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        if os.name != "nt":
            self.path.chmod(0o600)

    def clear(self) -> None:
        data = self._read()
        if data.pop(self.key, None) is None:
            return
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
