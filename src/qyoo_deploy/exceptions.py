"""Custom exception classes for qyoo-deploy."""

from typing import Any, Optional


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when network settings or signing credentials are unusable."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network is not configured."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when no compiled artifact exists for a contract name."""

    pass


class InvalidArtifactError(DeploymentError, ValueError):
    """Raised when an artifact file cannot be used to deploy a contract."""

    pass


class RpcError(DeploymentError, RuntimeError):
    """Raised when a JSON-RPC call fails at the transport or protocol level."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        status: Optional[int] = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.code = code
        self.status = status
        self.data = data


class TransactionRevertedError(DeploymentError):
    """Raised when the deployment transaction was mined with status 0."""

    def __init__(self, message: str, transaction_hash: Optional[str] = None):
        super().__init__(message)
        self.transaction_hash = transaction_hash


class ConfirmationTimeoutError(DeploymentError, TimeoutError):
    """Raised when no receipt appears before the confirmation deadline."""

    pass


class DeploymentVerificationError(DeploymentError):
    """Raised when the mined receipt does not describe a live contract."""

    pass
