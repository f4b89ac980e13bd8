"""Network and compiler configuration for qyoo-deploy."""

import os
from typing import Mapping, Optional

from .constants import (
    ALCHEMY_URL_TEMPLATE,
    BUILTIN_NETWORKS,
    COMPILER_VERSION,
    ENV_ALCHEMY_API_KEY,
    ENV_WALLET_PRIVATE_KEY,
    NETWORK_CONFIG,
    UNSET_PLACEHOLDER,
)
from .exceptions import NetworkNotFoundError
from .types import NetworkConfig, ProjectConfig


def load_config(environ: Optional[Mapping[str, str]] = None) -> ProjectConfig:
    """
    Build the project configuration from environment variables.

    No validation happens here: an unset API key leaves the literal text
    "undefined" in the endpoint URL and an unset private key becomes a
    None credential. Both surface later, when the network is used.

    Args:
        environ: Variable mapping (defaults to os.environ)

    Returns:
        ProjectConfig with the compiler version and the sepolia network
    """
    if environ is None:
        environ = os.environ

    api_key = environ.get(ENV_ALCHEMY_API_KEY)
    private_key = environ.get(ENV_WALLET_PRIVATE_KEY)

    sepolia = NetworkConfig(
        name="sepolia",
        url=ALCHEMY_URL_TEMPLATE.format(
            api_key=UNSET_PLACEHOLDER if api_key is None else api_key
        ),
        accounts=(private_key,),
        chain_id=NETWORK_CONFIG["sepolia"]["chain_id"],
    )

    return ProjectConfig(solidity=COMPILER_VERSION, networks={"sepolia": sepolia})


def resolve_network(config: ProjectConfig, name: str) -> NetworkConfig:
    """
    Look up a network by name, falling back to built-in networks.

    Args:
        config: Project configuration
        name: Network name (e.g. "sepolia" or "localhost")

    Returns:
        NetworkConfig for the requested network

    Raises:
        NetworkNotFoundError: If the name is neither configured nor built in
    """
    if name in config.networks:
        return config.networks[name]

    if name in BUILTIN_NETWORKS:
        return NetworkConfig(
            name=name,
            url=BUILTIN_NETWORKS[name]["url"],
            chain_id=NETWORK_CONFIG.get(name, {}).get("chain_id"),
        )

    available = sorted(set(config.networks) | set(BUILTIN_NETWORKS))
    raise NetworkNotFoundError(
        f"Network '{name}' not found in configuration "
        f"(available: {', '.join(available)})"
    )
