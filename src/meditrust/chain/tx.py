"""
Transaction Builder - Build, sign, and send contract transactions.

Uses eth-account for signing and the async JSON-RPC client for sending.
Gas is paid by the connected wallet.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address

from ..config import DEFAULT_GAS_LIMIT, get_chain_id
from ..errors import TransactionRevertedError
from .rpc import JsonRpc

logger = logging.getLogger(__name__)


async def build_contract_tx(
    rpc: JsonRpc,
    account: LocalAccount,
    contract_address: str,
    calldata: str,
    value: int = 0,
    gas_limit: Optional[int] = None,
) -> dict:
    """
    Build a contract call transaction (unsigned).

    Args:
        rpc: Node to query for nonce, gas price and chain id
        account: Sender
        contract_address: 0x-prefixed contract address
        calldata: ABI-encoded call data
        value: ETH value in wei (default: 0)
        gas_limit: Gas limit (default: DEFAULT_GAS_LIMIT)

    Returns:
        Unsigned transaction dict
    """
    chain_id = get_chain_id()
    if chain_id is None:
        chain_id = await rpc.chain_id()

    return {
        "to": to_checksum_address(contract_address),
        "data": calldata,
        "value": value,
        "nonce": await rpc.get_nonce(account.address),
        "gas": gas_limit or DEFAULT_GAS_LIMIT,
        "gasPrice": await rpc.get_gas_price(),
        "chainId": chain_id,
    }


async def sign_and_send(
    rpc: JsonRpc,
    account: LocalAccount,
    tx: dict,
    wait: bool = True,
    timeout: Optional[float] = None,
) -> dict:
    """
    Sign a transaction and send it.

    Args:
        rpc: Node to send through
        account: Signer
        tx: Unsigned transaction dict
        wait: Whether to wait for the receipt
        timeout: Receipt wait timeout (None waits indefinitely)

    Returns:
        Dict with tx_hash and, when waited for, receipt and status

    Raises:
        TransactionRevertedError: If the mined receipt has status 0
    """
    signed = account.sign_transaction(tx)
    raw_tx = "0x" + bytes(signed.raw_transaction).hex()

    tx_hash = await rpc.send_raw_transaction(raw_tx)
    logger.debug("sent %s from %s", tx_hash, account.address)
    result: dict[str, Any] = {"tx_hash": tx_hash}

    if wait:
        receipt = await rpc.wait_for_receipt(tx_hash, timeout=timeout)
        status = int(receipt.get("status", "0x0"), 16)
        result["receipt"] = receipt
        result["status"] = status
        if status != 1:
            raise TransactionRevertedError(tx_hash, receipt)

    return result
