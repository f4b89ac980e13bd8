"""Contract factory and deployed-contract handle for qyoo-deploy."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import rlp
from eth_utils import keccak, to_canonical_address, to_checksum_address
from web3 import Web3
from web3.exceptions import TimeExhausted

from .artifacts import find_artifact, load_artifact
from .constants import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT
from .exceptions import (
    ConfirmationTimeoutError,
    DeploymentVerificationError,
    TransactionRevertedError,
)
from .rpc import JsonRpcClient, connect
from .signers import signer_for_network
from .types import ContractArtifact, NetworkConfig

logger = logging.getLogger(__name__)


def compute_contract_address(deployer: str, nonce: int) -> str:
    """
    Derive the address a CREATE transaction will deploy to.

    Args:
        deployer: Sender address
        nonce: Sender nonce used by the creation transaction

    Returns:
        Checksummed contract address
    """
    encoded = rlp.encode([to_canonical_address(deployer), nonce])
    return to_checksum_address(keccak(encoded)[12:])


class DeployedContract:
    """Handle to a contract whose creation transaction has been submitted."""

    def __init__(
        self,
        factory: "ContractFactory",
        transaction_hash: str,
        deployer: str,
        nonce: int,
    ):
        self.factory = factory
        self.transaction_hash = transaction_hash
        self.deployer = deployer
        self.nonce = nonce
        self.receipt: Optional[Dict[str, Any]] = None
        self._address = compute_contract_address(deployer, nonce)

    def wait_for_deployment(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> "DeployedContract":
        """
        Block until the creation transaction is mined and the code is live.

        Args:
            timeout: Seconds to wait for a receipt
            poll_interval: Seconds between receipt polls

        Returns:
            self, with receipt populated

        Raises:
            ConfirmationTimeoutError: If no receipt appears within timeout
            TransactionRevertedError: If the receipt status is 0
            DeploymentVerificationError: If the receipt has no contract address
                                         or no code is deployed there
            RpcError: If polling fails
        """
        if self.receipt is not None:
            return self

        w3 = self.factory.w3
        try:
            receipt = w3.eth.wait_for_transaction_receipt(
                self.transaction_hash, timeout=timeout, poll_latency=poll_interval
            )
        except TimeExhausted as e:
            raise ConfirmationTimeoutError(
                f"Transaction {self.transaction_hash} not mined within {timeout} seconds"
            ) from e

        # Receipts from before Byzantium carry no status
        if receipt.get("status") == 0:
            raise TransactionRevertedError(
                f"Deployment transaction {self.transaction_hash} reverted",
                transaction_hash=self.transaction_hash,
            )

        contract_address = receipt.get("contractAddress")
        if not contract_address:
            raise DeploymentVerificationError(
                f"Receipt for {self.transaction_hash} has no contract address"
            )

        # The receipt is the source of truth for the address
        contract_address = to_checksum_address(contract_address)
        if contract_address != self._address:
            logger.warning(
                "Receipt address %s differs from derived address %s",
                contract_address,
                self._address,
            )
        self._address = contract_address

        if not w3.eth.get_code(contract_address):
            raise DeploymentVerificationError(
                f"No code found at {contract_address} after deployment"
            )

        self.receipt = receipt
        return self

    def get_address(self) -> str:
        """Return the checksummed contract address."""
        return self._address


class ContractFactory:
    """Creates deployment transactions for one compiled contract."""

    def __init__(self, artifact: ContractArtifact, w3: Web3, signer):
        self.artifact = artifact
        self.w3 = w3
        self.signer = signer
        self.contract = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    @property
    def contract_name(self) -> str:
        return self.artifact.contract_name

    def deploy(self) -> DeployedContract:
        """
        Submit one contract-creation transaction.

        Returns:
            DeployedContract handle (not yet confirmed)

        Raises:
            RpcError: If the node rejects the transaction or is unreachable
        """
        transaction_hash, nonce = self.signer.deploy(self.w3, self.contract.constructor())
        logger.debug("Creation transaction %s submitted", transaction_hash)
        return DeployedContract(self, transaction_hash, self.signer.address, nonce)


def get_contract_factory(
    contract_name: str,
    network: NetworkConfig,
    artifacts_dir: Path,
    rpc: Optional[JsonRpcClient] = None,
) -> ContractFactory:
    """
    Build a factory for a compiled contract on a network.

    Args:
        contract_name: Contract name (e.g. "Qyoo")
        network: Network configuration
        artifacts_dir: Root of the Hardhat artifacts tree
        rpc: Client for the network (created from network.url if None)

    Returns:
        ContractFactory bound to the network's signer

    Raises:
        ArtifactNotFoundError: If the artifact is missing or ambiguous
        InvalidArtifactError: If the artifact cannot be deployed
        ConfigurationError: If the signing credential is unusable
    """
    artifact = load_artifact(find_artifact(artifacts_dir, contract_name))

    if rpc is None:
        rpc = JsonRpcClient(network.url)

    w3 = connect(rpc)
    signer = signer_for_network(network, w3)
    return ContractFactory(artifact, w3, signer)
