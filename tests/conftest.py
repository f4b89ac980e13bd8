"""Shared pytest fixtures for qyoo-deploy tests."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import responses
from eth_account import Account
from eth_utils import keccak, to_hex

from qyoo_deploy.constants import RECOGNISED_ENV_VARS
from qyoo_deploy.factory import compute_contract_address
from qyoo_deploy.logging_setup import LOGGER_NAME

# Hardhat's first default account
HARDHAT_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
HARDHAT_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

SEPOLIA_URL = "https://eth-sepolia.g.alchemy.com/v2/abc123"
LOCALHOST_URL = "http://127.0.0.1:8545"

DEPLOYED_CODE = (
    "0x60806040525f80fdfea2646970667358221220f2b1d1b8f4e9c3a6d7e0c5b4a392817060"
    "5f4e3d2c1b0a99887766554433221164736f6c63430008140033"
)


class FakeNode:
    """
    In-memory Ethereum node answering JSON-RPC over mocked HTTP.

    Every accepted transaction is treated as a contract creation and mined
    into its own block. Receipts can be held back for a number of polls.
    """

    def __init__(
        self,
        chain_id: int = 31337,
        base_fee: int = 875_000_000,
        priority_fee: int = 1_000_000_000,
        accounts: List[str] = (),
        pending_polls: int = 0,
        revert: bool = False,
        report_status: bool = True,
        deployed_code: str = DEPLOYED_CODE,
        reject_transactions: Optional[str] = None,
    ):
        self.chain_id = chain_id
        self.base_fee = base_fee
        self.priority_fee = priority_fee
        self.node_accounts = list(accounts)
        self.pending_polls = pending_polls
        self.revert = revert
        self.report_status = report_status
        self.deployed_code = deployed_code
        self.reject_transactions = reject_transactions

        self.block_number = 0
        self.nonces: Dict[str, int] = {}
        self.transactions: List[Dict[str, Any]] = []
        self.receipts: Dict[str, Dict[str, Any]] = {}
        self.polls: Dict[str, int] = {}
        self.calls: List[str] = []
        self.requests: List[Dict[str, Any]] = []

    def register(self, rsps: responses.RequestsMock, url: str) -> "FakeNode":
        rsps.add_callback(
            responses.POST,
            url,
            callback=self.handle,
            content_type="application/json",
        )
        return self

    def handle(self, request):
        body = json.loads(request.body)
        self.requests.append(body)
        method = body["method"]
        self.calls.append(method)

        handler = getattr(self, method, None)
        if handler is None:
            payload = {
                "jsonrpc": "2.0",
                "id": body["id"],
                "error": {"code": -32601, "message": f"Method {method} not found"},
            }
        else:
            try:
                payload = {"jsonrpc": "2.0", "id": body["id"], "result": handler(*body["params"])}
            except ValueError as e:
                payload = {
                    "jsonrpc": "2.0",
                    "id": body["id"],
                    "error": {"code": -32000, "message": str(e)},
                }

        return (200, {}, json.dumps(payload))

    def params_of(self, method: str) -> List[List[Any]]:
        """Return the params of every request made with a method."""
        return [body["params"] for body in self.requests if body["method"] == method]

    # JSON-RPC methods

    def web3_clientVersion(self):
        return "FakeNode/v0.1.0"

    def eth_chainId(self):
        return hex(self.chain_id)

    def eth_blockNumber(self):
        return hex(self.block_number)

    def eth_accounts(self):
        return self.node_accounts

    def eth_getTransactionCount(self, address, *rest):
        return hex(self.nonces.get(address.lower(), 0))

    def eth_gasPrice(self):
        return hex(self.base_fee + self.priority_fee)

    def eth_maxPriorityFeePerGas(self):
        return hex(self.priority_fee)

    def eth_getBlockByNumber(self, tag, *rest):
        number = self.block_number
        return {
            "number": hex(number),
            "hash": to_hex(keccak(text=f"block:{number}")),
            "parentHash": to_hex(keccak(text=f"block:{number - 1}")),
            "timestamp": hex(1_700_000_000 + 12 * number),
            "gasLimit": hex(30_000_000),
            "gasUsed": hex(0),
            "baseFeePerGas": hex(self.base_fee),
            "extraData": "0x",
            "miner": "0x" + "00" * 20,
            "transactions": [],
        }

    def eth_estimateGas(self, tx, *rest):
        return hex(100_000)

    def eth_sendRawTransaction(self, raw):
        if self.reject_transactions:
            raise ValueError(self.reject_transactions)
        sender = Account.recover_transaction(raw)
        return self._mine(sender, to_hex(keccak(hexstr=raw)))

    def eth_sendTransaction(self, tx):
        if self.reject_transactions:
            raise ValueError(self.reject_transactions)
        sender = tx["from"]
        nonce = self.nonces.get(sender.lower(), 0)
        return self._mine(sender, to_hex(keccak(text=f"{sender.lower()}:{nonce}")))

    def eth_getTransactionReceipt(self, transaction_hash):
        transaction_hash = transaction_hash.lower()
        if transaction_hash not in self.receipts:
            return None
        if self.polls[transaction_hash] < self.pending_polls:
            self.polls[transaction_hash] += 1
            return None
        return self.receipts[transaction_hash]

    def eth_getCode(self, address, *rest):
        deployed = {
            tx["contract_address"].lower() for tx in self.transactions if not self.revert
        }
        return self.deployed_code if address.lower() in deployed else "0x"

    def _mine(self, sender: str, transaction_hash: str) -> str:
        nonce = self.nonces.get(sender.lower(), 0)
        contract_address = compute_contract_address(sender, nonce)
        self.nonces[sender.lower()] = nonce + 1
        self.block_number += 1

        self.transactions.append(
            {
                "hash": transaction_hash,
                "sender": sender,
                "nonce": nonce,
                "contract_address": contract_address,
            }
        )
        # Nodes report addresses in lowercase
        receipt = {
            "transactionHash": transaction_hash,
            "transactionIndex": "0x0",
            "blockHash": to_hex(keccak(text=f"block:{self.block_number}")),
            "blockNumber": hex(self.block_number),
            "from": sender.lower(),
            "to": None,
            "contractAddress": contract_address.lower(),
            "gasUsed": hex(90_000),
            "cumulativeGasUsed": hex(90_000),
            "effectiveGasPrice": hex(self.base_fee + self.priority_fee),
            "logs": [],
            "type": "0x2",
            "status": "0x0" if self.revert else "0x1",
        }
        if not self.report_status:
            receipt["status"] = None
        self.receipts[transaction_hash] = receipt
        self.polls[transaction_hash] = 0
        return transaction_hash


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path) -> Path:
    """Return the path to the sample Hardhat artifacts tree."""
    return fixtures_dir / "artifacts"


@pytest.fixture
def qyoo_artifact_path(artifacts_dir: Path) -> Path:
    """Return path to the sample Qyoo artifact."""
    return artifacts_dir / "contracts" / "Qyoo.sol" / "Qyoo.json"


@pytest.fixture
def mocked_responses():
    """Activate responses; unexpected HTTP calls fail with ConnectionError."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def sepolia_node(mocked_responses) -> FakeNode:
    """Fake node serving the sepolia URL built from ALCHEMY_API_KEY=abc123."""
    return FakeNode(chain_id=11155111).register(mocked_responses, SEPOLIA_URL)


@pytest.fixture
def localhost_node(mocked_responses) -> FakeNode:
    """Fake Hardhat node on localhost exposing one unlocked account."""
    return FakeNode(accounts=[HARDHAT_ADDRESS.lower()]).register(
        mocked_responses, LOCALHOST_URL
    )


@pytest.fixture
def deploy_environ() -> Dict[str, str]:
    """Environment mapping with a valid API key and private key."""
    return {
        "ALCHEMY_API_KEY": "abc123",
        "WALLET_PRIVATE_KEY": HARDHAT_PRIVATE_KEY,
    }


@pytest.fixture
def clean_env(monkeypatch):
    """Remove deployment variables from os.environ for the duration of a test."""
    for name in RECOGNISED_ENV_VARS:
        # setenv first so the original state is restored on teardown
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handler changes made by configure_logging()."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def make_node(mocked_responses):
    """Return a function creating a FakeNode registered at a URL."""

    def _make(url: str = SEPOLIA_URL, **kwargs) -> FakeNode:
        return FakeNode(**kwargs).register(mocked_responses, url)

    return _make


@pytest.fixture
def hardhat_private_key() -> str:
    return HARDHAT_PRIVATE_KEY


@pytest.fixture
def hardhat_address() -> str:
    return HARDHAT_ADDRESS
