"""Configuration constants for qyoo-deploy."""

# Solidity compiler the artifacts are expected to be built with
COMPILER_VERSION = "0.8.20"

DEFAULT_CONTRACT_NAME = "Qyoo"
DEFAULT_NETWORK = "sepolia"

# Environment variables read by the configuration loader
ENV_ALCHEMY_API_KEY = "ALCHEMY_API_KEY"
ENV_WALLET_PRIVATE_KEY = "WALLET_PRIVATE_KEY"
# Recognised but not emitted into the configuration
ENV_INFURA_PROJECT_ID = "INFURA_PROJECT_ID"

RECOGNISED_ENV_VARS = (
    ENV_INFURA_PROJECT_ID,
    ENV_ALCHEMY_API_KEY,
    ENV_WALLET_PRIVATE_KEY,
)

ALCHEMY_URL_TEMPLATE = "https://eth-sepolia.g.alchemy.com/v2/{api_key}"

# Text substituted for an unset variable in URL templates
UNSET_PLACEHOLDER = "undefined"

# Network metadata based on ethereum-lists/chains
NETWORK_CONFIG = {
    "sepolia": {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
        "block_explorer_url": "https://sepolia.etherscan.io",
    },
    "localhost": {
        "chain_id": 31337,
        "chain_name": "Hardhat Network",
        "block_explorer_url": None,
    },
}

# Networks available without any configuration, keyed by name
BUILTIN_NETWORKS = {
    "localhost": {
        "url": "http://127.0.0.1:8545",
    },
}

# Seconds
DEFAULT_RPC_TIMEOUT = 30
DEFAULT_TIMEOUT = 120
DEFAULT_POLL_INTERVAL = 1.0
