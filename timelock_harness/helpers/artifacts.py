"""
Compiled contract artifacts.

Loads ABI + creation bytecode from whatever the contract's build produced:

- Foundry ``out/<File>.sol/<Name>.json`` (``bytecode.object``)
- Hardhat ``artifacts/.../<Name>.json`` (``bytecode`` string)
- Truffle ``build/contracts/<Name>.json`` (``bytecode`` string)
- a ``<Name>.abi`` + ``<Name>.bin`` pair
- a ``.sol`` source, compiled on the fly with py-solc-x
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from solcx import compile_source, get_installed_solc_versions, install_solc

from ..config.abis import TIMELOCK_AIRDROP_ABI
from ..errors import ArtifactError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractArtifact:
    name: str
    abi: list[dict[str, Any]]
    bytecode: str

    def __post_init__(self):
        if not self.bytecode or self.bytecode in ("0x", "0x0"):
            raise ArtifactError(f"{self.name}: empty bytecode (abstract contract or interface?)")


def _normalize_bytecode(bytecode: str) -> str:
    bytecode = bytecode.strip()
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    return bytecode


def _bytecode_from_json(data: dict[str, Any]) -> str | None:
    bytecode = data.get("bytecode")
    if isinstance(bytecode, dict):
        return bytecode.get("object")
    if isinstance(bytecode, str):
        return bytecode
    # solc standard-json single contract entry
    evm = data.get("evm")
    if isinstance(evm, dict):
        return evm.get("bytecode", {}).get("object")
    return None


def load_json_artifact(path: Path, name: str | None = None) -> ContractArtifact:
    """Load a Foundry/Hardhat/Truffle JSON artifact."""
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ArtifactError(f"Cannot read artifact {path}: {e}")

    bytecode = _bytecode_from_json(data)
    if not bytecode:
        raise ArtifactError(f"Bytecode not found in artifact {path}")

    abi = data.get("abi")
    if not abi:
        logger.warning("No ABI in %s, falling back to the built-in airdrop ABI", path)
        abi = TIMELOCK_AIRDROP_ABI

    return ContractArtifact(
        name=name or data.get("contractName") or path.stem,
        abi=abi,
        bytecode=_normalize_bytecode(bytecode),
    )


def load_abi_bin_pair(path: Path) -> ContractArtifact:
    """Load ``<stem>.abi`` + ``<stem>.bin`` next to ``path``."""
    abi_path = path.with_suffix(".abi")
    bin_path = path.with_suffix(".bin")
    if not abi_path.exists() or not bin_path.exists():
        raise ArtifactError(f"Missing build artifacts: expected {abi_path} and {bin_path}")
    try:
        abi = json.loads(abi_path.read_text())
    except json.JSONDecodeError as e:
        raise ArtifactError(f"Cannot read ABI {abi_path}: {e}")
    return ContractArtifact(name=path.stem, abi=abi, bytecode=_normalize_bytecode(bin_path.read_text()))


def compile_contract(source_path: Path, contract_name: str, solc_version: str) -> ContractArtifact:
    """Compile a Solidity source with py-solc-x and return ``contract_name``."""
    if not source_path.exists():
        raise ArtifactError(f"Contract source not found: {source_path}")

    installed = {str(v) for v in get_installed_solc_versions()}
    if solc_version not in installed:
        logger.info("Installing solc %s", solc_version)
        install_solc(solc_version)

    compiled = compile_source(
        source_path.read_text(),
        output_values=["abi", "bin"],
        solc_version=solc_version,
        base_path=str(source_path.parent),
        optimize=True,
        optimize_runs=200,
    )

    contract_id = f"<stdin>:{contract_name}"
    if contract_id not in compiled:
        available = ", ".join(k.split(":", 1)[-1] for k in compiled)
        raise ArtifactError(f"{contract_name} not found in {source_path} (compiled: {available})")

    contract_data = compiled[contract_id]
    logger.info("Compiled %s with solc %s", contract_name, solc_version)
    return ContractArtifact(
        name=contract_name,
        abi=contract_data["abi"],
        bytecode=_normalize_bytecode(contract_data["bin"]),
    )


def load_artifact(path: Path, contract_name: str, solc_version: str) -> ContractArtifact:
    """Dispatch on file type: ``.sol`` compiles, ``.json`` loads, anything else tries ``.abi``/``.bin``."""
    suffix = path.suffix.lower()
    if suffix == ".sol":
        return compile_contract(path, contract_name, solc_version)
    if suffix == ".json":
        if not path.exists():
            raise ArtifactError(f"Artifact not found: {path}")
        return load_json_artifact(path, contract_name)
    return load_abi_bin_pair(path)
