"""Data types and dataclasses for qyoo-deploy."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .exceptions import DeploymentError


@dataclass(frozen=True)
class NetworkConfig:
    """Connection settings for one named network."""

    name: str
    url: str
    # Raw private keys; empty means the node's own unlocked accounts
    accounts: Tuple[Optional[str], ...] = ()
    chain_id: Optional[int] = None

    def __repr__(self) -> str:
        # Keys stay out of logs and tracebacks
        return (
            f"NetworkConfig(name={self.name!r}, url={self.url!r}, "
            f"accounts=<{len(self.accounts)}>, chain_id={self.chain_id!r})"
        )


@dataclass(frozen=True)
class ProjectConfig:
    """Compiler and network configuration."""

    solidity: str
    networks: Mapping[str, NetworkConfig] = field(default_factory=dict)


@dataclass(frozen=True)
class ContractArtifact:
    """A compiled contract as written by Hardhat."""

    contract_name: str
    source_name: str
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed creation code
    path: Path
    solc_version: Optional[str] = None


@dataclass(frozen=True)
class DeploymentResult:
    """Information about a freshly deployed contract."""

    contract_name: str
    address: str  # Checksummed address
    transaction_hash: str
    network: str
    block_number: int
    deployer: str
    explorer_url: Optional[str] = None


class FailureReason(Enum):
    """Why a deployment did not complete."""

    CONFIGURATION = "configuration"
    ARTIFACT = "artifact"
    NETWORK = "network"
    CONFIRMATION = "confirmation"


class DeploymentStage(Enum):
    """Progress of a deployment run, in order."""

    START = "start"
    FACTORY_OBTAINED = "factory-obtained"
    TX_SUBMITTED = "tx-submitted"
    CONFIRMED = "confirmed"
    ADDRESS_LOGGED = "address-logged"


@dataclass(frozen=True)
class DeploymentOutcome:
    """Result of deploy_contract(): either a result or a tagged failure."""

    result: Optional[DeploymentResult] = None
    failure: Optional[FailureReason] = None
    error: Optional[DeploymentError] = None
    stage: DeploymentStage = DeploymentStage.START

    @property
    def ok(self) -> bool:
        return self.result is not None

    @classmethod
    def success(cls, result: DeploymentResult) -> "DeploymentOutcome":
        return cls(result=result, stage=DeploymentStage.ADDRESS_LOGGED)

    @classmethod
    def failed(
        cls, reason: FailureReason, error: DeploymentError, stage: DeploymentStage
    ) -> "DeploymentOutcome":
        return cls(failure=reason, error=error, stage=stage)
