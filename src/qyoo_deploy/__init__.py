"""
qyoo-deploy: deploy a compiled Hardhat contract over JSON-RPC and report its address
"""

from importlib.metadata import PackageNotFoundError, version

from .config import load_config, resolve_network
from .deploy import deploy_contract
from .exceptions import (
    ArtifactNotFoundError,
    ConfigurationError,
    ConfirmationTimeoutError,
    DeploymentError,
    DeploymentVerificationError,
    InvalidArtifactError,
    NetworkNotFoundError,
    RpcError,
    TransactionRevertedError,
)
from .factory import ContractFactory, DeployedContract, get_contract_factory
from .types import (
    DeploymentOutcome,
    DeploymentResult,
    DeploymentStage,
    FailureReason,
    NetworkConfig,
    ProjectConfig,
)

try:
    __version__ = version("qyoo-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "load_config",
    "resolve_network",
    "deploy_contract",
    "get_contract_factory",
    "ContractFactory",
    "DeployedContract",
    "DeploymentOutcome",
    "DeploymentResult",
    "DeploymentStage",
    "FailureReason",
    "NetworkConfig",
    "ProjectConfig",
    "DeploymentError",
    "ConfigurationError",
    "NetworkNotFoundError",
    "ArtifactNotFoundError",
    "InvalidArtifactError",
    "RpcError",
    "TransactionRevertedError",
    "ConfirmationTimeoutError",
    "DeploymentVerificationError",
]
