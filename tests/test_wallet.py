"""Tests for wallet key loading and the connection prompt."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import pytest

from meditrust.errors import WalletRejectedError, WalletUnavailableError
from meditrust.wallet import Wallet, generate_eoa, load_private_key, save_private_key


class TestKeys:
    def test_generate_eoa(self) -> None:
        private_key, address = generate_eoa()
        assert private_key.startswith("0x") and len(private_key) == 66
        assert address.startswith("0x") and len(address) == 42

    def test_save_and_load(self, meditrust_home: Path) -> None:
        private_key, _ = generate_eoa()
        env_path = save_private_key(private_key)
        assert env_path == meditrust_home / ".env"
        assert load_private_key() == private_key

    def test_save_keeps_other_entries(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text("MEDITRUST_RPC_URL=http://x\n", encoding="utf-8")
        save_private_key("0x" + "11" * 32, env_path)
        text = env_path.read_text(encoding="utf-8")
        assert "MEDITRUST_RPC_URL=http://x" in text
        assert "PRIVATE_KEY=0x" + "11" * 32 in text

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_env_file_is_private(self, tmp_path: Path) -> None:
        env_path = save_private_key("0x" + "22" * 32, tmp_path / ".env")
        assert env_path.stat().st_mode & 0o777 == 0o600

    def test_prefix_added(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRIVATE_KEY", "33" * 32)
        assert load_private_key() == "0x" + "33" * 32

    def test_missing_key(self) -> None:
        with pytest.raises(WalletUnavailableError):
            load_private_key()


class TestConnect:
    def test_connect_returns_signer(self) -> None:
        private_key, address = generate_eoa()
        signer = asyncio.run(Wallet(private_key=private_key).connect())
        assert signer.address == address

    def test_no_wallet(self) -> None:
        with pytest.raises(WalletUnavailableError):
            asyncio.run(Wallet().connect())

    def test_invalid_key(self) -> None:
        with pytest.raises(WalletUnavailableError, match="Invalid private key"):
            asyncio.run(Wallet(private_key="0x1234").connect())

    def test_rejected_prompt(self) -> None:
        private_key, _ = generate_eoa()
        wallet = Wallet(private_key=private_key, approve=lambda address: False)
        with pytest.raises(WalletRejectedError) as excinfo:
            asyncio.run(wallet.connect())
        assert excinfo.value.code == 4001

    def test_prompt_sees_address(self) -> None:
        private_key, address = generate_eoa()
        seen = []

        def approve(addr: str) -> bool:
            seen.append(addr)
            return True

        accounts = asyncio.run(Wallet(private_key=private_key, approve=approve).request_accounts())
        assert accounts == [address]
        assert seen == [address]

    def test_async_prompt(self) -> None:
        private_key, _ = generate_eoa()

        async def approve(addr: str) -> bool:
            await asyncio.sleep(0)
            return False

        with pytest.raises(WalletRejectedError):
            asyncio.run(Wallet(private_key=private_key, approve=approve).connect())

    def test_key_is_reread_each_time(self, monkeypatch: pytest.MonkeyPatch) -> None:
        wallet = Wallet()
        first, first_address = generate_eoa()
        second, second_address = generate_eoa()

        monkeypatch.setenv("PRIVATE_KEY", first)
        assert asyncio.run(wallet.connect()).address == first_address
        monkeypatch.setenv("PRIVATE_KEY", second)
        assert asyncio.run(wallet.connect()).address == second_address
