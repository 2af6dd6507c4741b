"""Shared fixtures: an in-memory JSON-RPC node and an isolated ~/.meditrust."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional
from unittest.mock import patch

import httpx
import pytest
from eth_abi import encode
from eth_utils import keccak

from meditrust.chain.abi import abi_type, find_function, function_selector, load_abi
from meditrust.client import ChainRecordClient
from meditrust.store import AddressStore
from meditrust.wallet import Wallet, generate_eoa


class FakeNode:
    """
    Answers the handful of JSON-RPC methods the client uses.

    Contract reads return whatever was registered with ``returns``;
    every request is recorded in ``calls``.
    """

    CHAIN_ID = 31337

    def __init__(self, abi: list) -> None:
        self.abi = abi
        self.calls: list[tuple[str, list]] = []
        self.results: dict[str, Any] = {}
        self.errors: dict[str, dict] = {}
        self.sent: list[str] = []
        self.receipt_status = 1
        self._by_selector = {
            "0x" + function_selector(entry).hex(): entry["name"]
            for entry in abi
            if entry.get("type") == "function"
        }

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def returns(self, function_name: str, value: Any) -> None:
        self.results[function_name] = value

    def contract_calls(self) -> list[str]:
        """Names of the contract functions hit through eth_call."""
        return [
            self._by_selector[params[0]["data"][:10]]
            for method, params in self.calls
            if method == "eth_call"
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        method, params = payload["method"], payload["params"]
        self.calls.append((method, params))

        body: dict[str, Any] = {"jsonrpc": "2.0", "id": payload["id"]}
        if method in self.errors:
            body["error"] = self.errors[method]
        else:
            body["result"] = getattr(self, "_" + method)(params)
        return httpx.Response(200, json=body)

    def _eth_call(self, params: list) -> str:
        name = self._by_selector[params[0]["data"][:10]]
        outputs = find_function(self.abi, name)["outputs"]
        data = encode([abi_type(o) for o in outputs], [self.results[name]])
        return "0x" + data.hex()

    def _eth_chainId(self, params: list) -> str:
        return hex(self.CHAIN_ID)

    def _eth_getTransactionCount(self, params: list) -> str:
        return hex(len(self.sent))

    def _eth_gasPrice(self, params: list) -> str:
        return hex(1_000_000_000)

    def _eth_sendRawTransaction(self, params: list) -> str:
        raw = params[0]
        self.sent.append(raw)
        return "0x" + keccak(hexstr=raw).hex()

    def _eth_getTransactionReceipt(self, params: list) -> Optional[dict]:
        return {
            "transactionHash": params[0],
            "blockNumber": "0x1",
            "status": hex(self.receipt_status),
        }


@pytest.fixture(autouse=True)
def meditrust_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point ~/.meditrust at a temp dir and blank out related env vars."""
    home = tmp_path / ".meditrust"
    for name in (
        "PRIVATE_KEY",
        "MEDITRUST_CONTRACT_ADDRESS",
        "MEDITRUST_CHAIN_ID",
        "MEDITRUST_ARTIFACT",
    ):
        monkeypatch.setenv(name, "")
    monkeypatch.setenv("MEDITRUST_RPC_URL", "http://node.test")
    with patch("meditrust.config.MEDITRUST_DIR", home), patch(
        "meditrust.config.MEDITRUST_ENV", home / ".env"
    ):
        yield home


@pytest.fixture()
def node() -> FakeNode:
    return FakeNode(load_abi())


@pytest.fixture()
def wallet_key() -> tuple[str, str]:
    return generate_eoa()


@pytest.fixture()
def make_client(
    node: FakeNode, wallet_key: tuple[str, str], meditrust_home: Path
) -> Callable[..., ChainRecordClient]:
    def _make(
        contract_address: str = "0x5FbDB2315678afecb367f032d93F642f64180aa3",
        approve=None,
    ) -> ChainRecordClient:
        return ChainRecordClient(
            contract_address=contract_address,
            wallet=Wallet(private_key=wallet_key[0], approve=approve),
            store=AddressStore(state_dir=meditrust_home),
            transport=node.transport,
        )

    return _make
