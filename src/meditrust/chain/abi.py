"""
ABI Loader - Loads the MediTrust ABI from its Hardhat artifact.

The artifact ships inside the package (chain/artifacts/MediTrust.json).
Point MEDITRUST_ARTIFACT at a freshly compiled artifact to override it.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from eth_abi import decode, encode
from eth_utils import keccak

CONTRACT_NAME = "MediTrust"

BUNDLED_ARTIFACT = Path(__file__).resolve().parent / "artifacts" / f"{CONTRACT_NAME}.json"


def artifact_path() -> Path:
    """Return the artifact path, honouring MEDITRUST_ARTIFACT."""
    override = os.environ.get("MEDITRUST_ARTIFACT")
    if override:
        return Path(override).expanduser()
    return BUNDLED_ARTIFACT


@lru_cache(maxsize=16)
def _load_artifact_abi(path: Path) -> tuple:
    if not path.exists():
        raise FileNotFoundError(
            f"ABI not found: {path}. "
            f"Run 'npx hardhat compile' and set MEDITRUST_ARTIFACT."
        )

    with path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    # Plain ABI arrays are accepted as well as full artifacts
    abi = artifact["abi"] if isinstance(artifact, dict) else artifact
    return tuple(abi)


def load_abi(path: Optional[Path] = None) -> list[dict[str, Any]]:
    """
    Load the contract ABI.

    Args:
        path: Artifact (or bare ABI) JSON file. Defaults to artifact_path().

    Returns:
        ABI as a list of dicts

    Raises:
        FileNotFoundError: If the file does not exist
    """
    return list(_load_artifact_abi(path or artifact_path()))


def find_function(abi: list, function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def abi_type(param: dict[str, Any]) -> str:
    """
    Canonical type string of an ABI parameter.

    Tuples are expanded from their components, keeping any array suffix:
    ``tuple[]`` with components (string, uint256) becomes ``(string,uint256)[]``.
    """
    kind = param["type"]
    if not kind.startswith("tuple"):
        return kind
    inner = ",".join(abi_type(c) for c in param.get("components", []))
    return f"({inner}){kind[len('tuple'):]}"


def function_selector(func: dict[str, Any]) -> bytes:
    input_types = [abi_type(inp) for inp in func.get("inputs", [])]
    sig = f"{func['name']}({','.join(input_types)})"
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(text=sig)[:4]


def encode_call(abi: list, function_name: str, args: list) -> str:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = find_function(abi, function_name)
    input_types = [abi_type(inp) for inp in func.get("inputs", [])]

    if len(args) != len(input_types):
        raise ValueError(
            f"{function_name} expects {len(input_types)} arguments, got {len(args)}"
        )

    encoded_args = encode(input_types, list(args)) if args else b""
    return "0x" + function_selector(func).hex() + encoded_args.hex()


def _to_python(param: dict[str, Any], value: Any) -> Any:
    """Turn decoded tuples into dicts keyed by component name."""
    kind = param["type"]
    if kind.startswith("tuple"):
        if kind.endswith("]"):
            element = dict(param, type=kind[: kind.rindex("[")])
            return [_to_python(element, item) for item in value]
        components = param.get("components", [])
        return {
            (c.get("name") or str(i)): _to_python(c, v)
            for i, (c, v) in enumerate(zip(components, value))
        }
    return value


def decode_result(abi: list, function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Args:
        abi: Contract ABI
        function_name: Function name
        data: 0x-prefixed hex encoded return data

    Returns:
        Decoded result. A single output is unwrapped; structs become dicts.
    """
    func = find_function(abi, function_name)
    outputs = func.get("outputs", [])
    if not outputs:
        return None

    raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    decoded = decode([abi_type(out) for out in outputs], raw)
    values = [_to_python(out, val) for out, val in zip(outputs, decoded)]

    if len(values) == 1:
        return values[0]
    return tuple(values)
