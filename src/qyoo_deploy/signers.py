"""Transaction signers for qyoo-deploy."""

import logging
import re
from typing import Optional, Tuple

from eth_account import Account
from eth_utils import ValidationError, to_checksum_address, to_hex
from web3 import Web3
from web3.contract.contract import ContractConstructor

from .exceptions import ConfigurationError
from .types import NetworkConfig

logger = logging.getLogger(__name__)

_PRIVATE_KEY_PATTERN = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


class LocalAccountSigner:
    """Signs transactions locally with a private key and submits them raw."""

    def __init__(self, private_key: Optional[str]):
        """
        Initialize the signer.

        Args:
            private_key: Hex private key, with or without 0x prefix

        Raises:
            ConfigurationError: If the key is missing or malformed
        """
        if not private_key:
            raise ConfigurationError("No signing credential configured (private key is empty)")

        if not _PRIVATE_KEY_PATTERN.match(private_key):
            raise ConfigurationError(
                "Invalid private key: expected 32 bytes as 64 hex characters"
            )

        try:
            self._account = Account.from_key(private_key)
        except (ValueError, ValidationError) as e:
            raise ConfigurationError(f"Invalid private key: {e}") from e

    @property
    def address(self) -> str:
        return self._account.address

    def deploy(self, w3: Web3, constructor: ContractConstructor) -> Tuple[str, int]:
        """
        Build, sign and submit a contract-creation transaction.

        web3 fills chainId, gas and fee fields; the nonce is taken from the
        pending block so queued transactions are not replaced.

        Args:
            w3: Web3 instance for the target network
            constructor: Constructor call of the contract to deploy

        Returns:
            Tuple of (transaction_hash, nonce)
        """
        nonce = w3.eth.get_transaction_count(self.address, "pending")
        tx = constructor.build_transaction({"from": self.address, "nonce": nonce})

        logger.debug(
            "Signing transaction from %s (nonce=%d, gas=%d)",
            self.address,
            nonce,
            tx["gas"],
        )
        signed = self._account.sign_transaction(tx)
        transaction_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
        return to_hex(transaction_hash), nonce


class NodeAccountSigner:
    """Delegates signing to an account unlocked on the node (e.g. a Hardhat node)."""

    def __init__(self, address: str):
        self._address = to_checksum_address(address)

    @property
    def address(self) -> str:
        return self._address

    def deploy(self, w3: Web3, constructor: ContractConstructor) -> Tuple[str, int]:
        """
        Submit a contract-creation transaction for the node to sign.

        Args:
            w3: Web3 instance for the target network
            constructor: Constructor call of the contract to deploy

        Returns:
            Tuple of (transaction_hash, nonce)
        """
        nonce = w3.eth.get_transaction_count(self.address, "pending")
        logger.debug("Sending transaction from node account %s (nonce=%d)", self.address, nonce)
        transaction_hash = constructor.transact({"from": self.address, "nonce": nonce})
        return to_hex(transaction_hash), nonce


def signer_for_network(network: NetworkConfig, w3: Web3):
    """
    Pick the signer for a network.

    The first configured account wins. Without configured accounts the
    node's first unlocked account is used, as Hardhat does for localhost.

    Args:
        network: Network configuration
        w3: Web3 instance for the network (only queried for node accounts)

    Returns:
        LocalAccountSigner or NodeAccountSigner

    Raises:
        ConfigurationError: If the credential is invalid or the node has no accounts
    """
    if network.accounts:
        return LocalAccountSigner(network.accounts[0])

    node_accounts = w3.eth.accounts
    if not node_accounts:
        raise ConfigurationError(
            f"Network '{network.name}' has no configured accounts and the node exposes none"
        )
    return NodeAccountSigner(node_accounts[0])
