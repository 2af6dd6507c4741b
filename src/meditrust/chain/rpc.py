"""
Async JSON-RPC client for an Ethereum node.

Uses httpx for HTTP; ABI work lives in abi.py. A fresh HTTP client is
opened per request, so no connection outlives a single call.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from typing import Any, Optional

import httpx

from ..config import get_rpc_url
from ..errors import RpcError

logger = logging.getLogger(__name__)

_request_ids = itertools.count(1)


class JsonRpc:
    """
    Minimal JSON-RPC endpoint.

    Args:
        url:       Node URL. Defaults to MEDITRUST_RPC_URL.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
        timeout:   Per-request HTTP timeout in seconds.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ) -> None:
        self.url = url or get_rpc_url()
        self.transport = transport
        self.timeout = timeout

    async def request(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Returns:
            Result field from the RPC response

        Raises:
            RpcError: If the node answers with an error object
            httpx.HTTPError: On transport or HTTP status failures
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(_request_ids),
        }
        logger.debug("rpc %s -> %s", method, self.url)

        async with httpx.AsyncClient(
            transport=self.transport, timeout=self.timeout
        ) as client:
            response = await client.post(self.url, json=payload)
            response.raise_for_status()
            data = response.json()

        if "error" in data:
            error = data["error"] or {}
            raise RpcError(error.get("code"), error.get("message", str(error)), error.get("data"))

        return data.get("result")

    async def call(self, tx: dict, block: str = "latest") -> str:
        """eth_call; returns the raw 0x-prefixed return data."""
        return await self.request("eth_call", [tx, block])

    async def chain_id(self) -> int:
        return int(await self.request("eth_chainId", []), 16)

    async def get_nonce(self, address: str) -> int:
        result = await self.request("eth_getTransactionCount", [address, "pending"])
        return int(result, 16)

    async def get_gas_price(self) -> int:
        return int(await self.request("eth_gasPrice", []), 16)

    async def send_raw_transaction(self, raw_tx: str) -> str:
        """Send a signed raw transaction; returns the transaction hash."""
        return await self.request("eth_sendRawTransaction", [raw_tx])

    async def get_receipt(self, tx_hash: str) -> Optional[dict]:
        return await self.request("eth_getTransactionReceipt", [tx_hash])

    async def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: Optional[float] = None,
        poll_interval: float = 1.0,
    ) -> dict:
        """
        Wait for a transaction receipt.

        Args:
            tx_hash: Transaction hash
            timeout: Maximum wait time in seconds; None waits indefinitely
            poll_interval: Polling interval in seconds

        Raises:
            TimeoutError: If a timeout was given and it elapsed
        """
        start = time.monotonic()
        while True:
            receipt = await self.get_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if timeout is not None and time.monotonic() - start >= timeout:
                raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout}s")
            await asyncio.sleep(poll_interval)
