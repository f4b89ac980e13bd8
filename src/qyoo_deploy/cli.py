"""Command line entry point for qyoo-deploy."""

import argparse
import os
from typing import List, Optional

from dotenv import load_dotenv

from .config import load_config
from .constants import (
    DEFAULT_CONTRACT_NAME,
    DEFAULT_NETWORK,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
)
from .deploy import deploy_contract
from .logging_setup import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qyoo-deploy",
        description="Deploy a compiled Hardhat contract and print its address",
    )
    parser.add_argument("--network", default=DEFAULT_NETWORK, help="Network name")
    parser.add_argument(
        "--contract", default=DEFAULT_CONTRACT_NAME, help="Contract artifact name"
    )
    parser.add_argument(
        "--artifacts", default=None, help="Hardhat artifacts directory (default: ./artifacts)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for the deployment to be mined",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help="Seconds between receipt polls",
    )
    parser.add_argument("--env-file", default=".env", help="dotenv file to load if present")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one deployment.

    Returns:
        0 on success, 1 on any deployment failure
    """
    args = build_parser().parse_args(argv)

    # Variables already set in the environment take precedence
    load_dotenv(args.env_file, override=False)
    configure_logging(args.verbose)

    outcome = deploy_contract(
        load_config(os.environ),
        network=args.network,
        contract_name=args.contract,
        artifacts_dir=args.artifacts,
        timeout=args.timeout,
        poll_interval=args.poll_interval,
    )
    return 0 if outcome.ok else 1
