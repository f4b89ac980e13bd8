"""Hardhat artifact discovery and parsing for qyoo-deploy."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import ArtifactNotFoundError, InvalidArtifactError
from .paths import get_debug_path
from .types import ContractArtifact


def find_artifact(artifacts_dir: Path, contract_name: str) -> Path:
    """
    Locate the artifact file for a contract.

    Assumption: Hardhat writes one file per contract to
    artifacts/contracts/<SourceName>.sol/<ContractName>.json, next to a
    <ContractName>.dbg.json debug file.

    Args:
        artifacts_dir: Root of the Hardhat artifacts tree
        contract_name: Contract name (e.g. "Qyoo")

    Returns:
        Path to the artifact JSON file

    Raises:
        ArtifactNotFoundError: If the tree is missing, or has zero or several matches
    """
    contracts_dir = artifacts_dir / "contracts"
    if not contracts_dir.is_dir():
        raise ArtifactNotFoundError(
            f"Artifacts directory not found at {contracts_dir}. "
            "Compile the contracts first (npx hardhat compile)."
        )

    candidates: List[Path] = sorted(
        p
        for p in contracts_dir.rglob(f"{contract_name}.json")
        if not p.name.endswith(".dbg.json")
    )

    if not candidates:
        raise ArtifactNotFoundError(
            f"Artifact for contract '{contract_name}' not found under {contracts_dir}"
        )
    if len(candidates) > 1:
        found = ", ".join(str(p.relative_to(artifacts_dir)) for p in candidates)
        raise ArtifactNotFoundError(
            f"Multiple artifacts for contract '{contract_name}': {found}"
        )

    return candidates[0]


def load_artifact(file_path: Path) -> ContractArtifact:
    """
    Parse a Hardhat artifact JSON file.

    Args:
        file_path: Path to <ContractName>.json

    Returns:
        ContractArtifact with abi, creation bytecode and, when the debug file
        points at readable build info, the compiler version

    Raises:
        InvalidArtifactError: If the file is not JSON, misses required fields,
                              or has no creation bytecode
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidArtifactError(f"Artifact {file_path} is not valid JSON: {e}") from e

    missing = [key for key in ("contractName", "abi", "bytecode") if key not in data]
    if missing:
        raise InvalidArtifactError(
            f"Artifact {file_path} is missing required fields: {', '.join(missing)}"
        )

    bytecode = data["bytecode"]
    if not isinstance(bytecode, str) or not bytecode.startswith("0x") or len(bytecode) <= 2:
        # Interfaces and abstract contracts compile to "0x"
        raise InvalidArtifactError(
            f"Contract '{data['contractName']}' has no creation bytecode; "
            "it may be abstract or an interface"
        )

    return ContractArtifact(
        contract_name=data["contractName"],
        source_name=data.get("sourceName", ""),
        abi=data["abi"],
        bytecode=bytecode,
        path=file_path,
        solc_version=read_compiler_version(file_path),
    )


def read_compiler_version(file_path: Path) -> Optional[str]:
    """
    Read the solc version an artifact was built with.

    Follows <Name>.dbg.json -> buildInfo -> solcVersion.

    Args:
        file_path: Path to <ContractName>.json

    Returns:
        Version string (e.g. "0.8.20"), or None if any link is missing or corrupted
    """
    debug = _read_json(get_debug_path(file_path))
    if not debug or "buildInfo" not in debug:
        return None

    build_info = _read_json((file_path.parent / debug["buildInfo"]).resolve())
    if not build_info:
        return None

    return build_info.get("solcVersion")


def _read_json(path: Path) -> Optional[Dict[str, Any]]:
    try:
        with open(path) as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return None
