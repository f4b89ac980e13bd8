"""Deployment procedure for qyoo-deploy."""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import resolve_network
from .constants import (
    DEFAULT_CONTRACT_NAME,
    DEFAULT_NETWORK,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
    NETWORK_CONFIG,
)
from .exceptions import (
    ArtifactNotFoundError,
    ConfigurationError,
    DeploymentError,
    InvalidArtifactError,
    NetworkNotFoundError,
)
from .factory import get_contract_factory
from .paths import get_artifacts_dir
from .rpc import JsonRpcClient
from .types import (
    DeploymentOutcome,
    DeploymentResult,
    DeploymentStage,
    FailureReason,
    ProjectConfig,
)

logger = logging.getLogger(__name__)

_STAGE_ORDER = list(DeploymentStage)


def classify_failure(error: DeploymentError, stage: DeploymentStage) -> FailureReason:
    """
    Map an error raised at a given stage to a failure reason.

    Configuration and artifact errors are classified by type. Anything else
    counts as a network failure until the creation transaction has been
    submitted, and as a confirmation failure afterwards.

    Args:
        error: The raised error
        stage: Last stage reached before the error

    Returns:
        FailureReason
    """
    if isinstance(error, (ConfigurationError, NetworkNotFoundError)):
        return FailureReason.CONFIGURATION
    if isinstance(error, (ArtifactNotFoundError, InvalidArtifactError)):
        return FailureReason.ARTIFACT
    if _STAGE_ORDER.index(stage) < _STAGE_ORDER.index(DeploymentStage.TX_SUBMITTED):
        return FailureReason.NETWORK
    return FailureReason.CONFIRMATION


def deploy_contract(
    config: ProjectConfig,
    network: str = DEFAULT_NETWORK,
    contract_name: str = DEFAULT_CONTRACT_NAME,
    artifacts_dir: Optional[Union[Path, str]] = None,
    *,
    rpc: Optional[JsonRpcClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> DeploymentOutcome:
    """
    Deploy a compiled contract and report its address.

    Runs get factory -> deploy -> wait for deployment -> get address, logging
    one progress line per step. Nothing is retried; the first error ends the
    run and is returned as a tagged failure.

    Args:
        config: Project configuration
        network: Network name to deploy to
        contract_name: Artifact name to deploy
        artifacts_dir: Hardhat artifacts directory (defaults to ./artifacts)
        rpc: Client to use instead of one built from the network URL
        timeout: Seconds to wait for the deployment to be mined
        poll_interval: Seconds between receipt polls

    Returns:
        DeploymentOutcome holding either a DeploymentResult or a FailureReason
    """
    stage = DeploymentStage.START
    owns_rpc = rpc is None
    logger.info("Starting deployment...")

    try:
        network_config = resolve_network(config, network)
        if rpc is None:
            rpc = JsonRpcClient(network_config.url)

        factory = get_contract_factory(
            contract_name, network_config, get_artifacts_dir(artifacts_dir), rpc
        )
        stage = DeploymentStage.FACTORY_OBTAINED
        logger.info("Contract factory obtained.")

        solc_version = factory.artifact.solc_version
        if solc_version and solc_version != config.solidity:
            logger.warning(
                "Artifact %s was compiled with solc %s, configuration expects %s",
                factory.artifact.path,
                solc_version,
                config.solidity,
            )

        deployed = factory.deploy()
        stage = DeploymentStage.TX_SUBMITTED
        logger.info("Deployment transaction sent. Waiting for deployment...")

        deployed.wait_for_deployment(timeout=timeout, poll_interval=poll_interval)
        stage = DeploymentStage.CONFIRMED
        logger.info("Contract deployed.")

        address = deployed.get_address()
        logger.info("%s deployed to: %s", contract_name, address)

    except DeploymentError as e:
        logger.error("Error deploying contract: %s", e, exc_info=True)
        return DeploymentOutcome.failed(classify_failure(e, stage), e, stage)

    finally:
        if owns_rpc and rpc is not None:
            rpc.close()

    explorer = NETWORK_CONFIG.get(network, {}).get("block_explorer_url")
    return DeploymentOutcome.success(
        DeploymentResult(
            contract_name=contract_name,
            address=address,
            transaction_hash=deployed.transaction_hash,
            network=network,
            block_number=deployed.receipt["blockNumber"],
            deployer=deployed.deployer,
            explorer_url=f"{explorer}/address/{address}" if explorer else None,
        )
    )
