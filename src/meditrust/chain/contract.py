"""Contract handle: a deployed contract's address and ABI bound to a signer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from eth_account.signers.local import LocalAccount

from ..errors import RpcError
from .abi import decode_result, encode_call, find_function
from .rpc import JsonRpc
from .tx import build_contract_tx, sign_and_send


@dataclass(frozen=True)
class ContractHandle:
    address: str
    abi: list
    signer: LocalAccount
    rpc: JsonRpc

    async def call(self, function_name: str, *args: Any) -> Any:
        """Read-only call, issued from the signer's address."""
        calldata = encode_call(self.abi, function_name, list(args))
        result = await self.rpc.call(
            {"from": self.signer.address, "to": self.address, "data": calldata}
        )

        if result is None or result == "0x":
            if find_function(self.abi, function_name).get("outputs"):
                raise RpcError(
                    None,
                    f"{function_name} returned no data; "
                    f"is {self.address} a deployed MediTrust contract?",
                )
            return None

        return decode_result(self.abi, function_name, result)

    async def transact(
        self,
        function_name: str,
        *args: Any,
        gas_limit: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> dict:
        """Send a state-changing call and wait for it to be mined."""
        calldata = encode_call(self.abi, function_name, list(args))
        tx = await build_contract_tx(
            self.rpc,
            self.signer,
            self.address,
            calldata,
            gas_limit=gas_limit,
        )
        return await sign_and_send(self.rpc, self.signer, tx, timeout=timeout)
