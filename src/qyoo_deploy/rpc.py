"""JSON-RPC transport for qyoo-deploy."""

import itertools
import json
import logging
from typing import Any, Dict, List, Optional

import requests
from web3 import Web3
from web3.providers.base import JSONBaseProvider

from .constants import DEFAULT_RPC_TIMEOUT
from .exceptions import RpcError

logger = logging.getLogger(__name__)


class JsonRpcClient:
    """Minimal Ethereum JSON-RPC 2.0 client over HTTP."""

    def __init__(
        self,
        url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_RPC_TIMEOUT,
    ):
        """
        Initialize the client.

        Args:
            url: RPC endpoint URL
            session: Shared requests session (a new one is created if None)
            timeout: Per-request timeout in seconds
        """
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._owns_session = session is None
        self._ids = itertools.count(1)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "JsonRpcClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def call(self, method: str, params: Optional[List[Any]] = None) -> Dict[str, Any]:
        """
        Perform a JSON-RPC call.

        Args:
            method: RPC method name (e.g. "eth_chainId")
            params: Positional parameters

        Returns:
            The full response object, guaranteed to carry a "result" member

        Raises:
            RpcError: On network errors, non-200 status, malformed bodies or RPC errors
        """
        request_id = next(self._ids)
        logger.debug("RPC %s (id=%d)", method, request_id)

        try:
            response = self._session.post(
                self.url,
                json={
                    "jsonrpc": "2.0",
                    "method": method,
                    "params": params or [],
                    "id": request_id,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RpcError(f"Network error during RPC call {method}: {e}") from e

        # Check for HTTP errors
        if response.status_code != 200:
            raise RpcError(
                f"RPC request {method} failed with status {response.status_code}",
                status=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RpcError(f"RPC response to {method} is not valid JSON") from e

        if not isinstance(body, dict):
            raise RpcError(f"RPC response to {method} is not a JSON object")

        # Check for RPC errors
        if "error" in body:
            error = body["error"]
            if not isinstance(error, dict):
                error = {"message": error}
            raise RpcError(
                f"RPC error from {method}: {error.get('message', error)}",
                code=error.get("code"),
                data=error.get("data"),
            )

        if "result" not in body:
            raise RpcError(f"RPC response to {method} has no result")

        body.setdefault("jsonrpc", "2.0")
        body.setdefault("id", request_id)
        return body

    def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Perform a JSON-RPC call and return only its result."""
        return self.call(method, params)["result"]


class JsonRpcProvider(JSONBaseProvider):
    """web3 provider that sends every request through a JsonRpcClient."""

    def __init__(self, client: JsonRpcClient):
        super().__init__()
        self.client = client

    def make_request(self, method, params):
        # HexBytes and AttributeDict params need web3's JSON encoder
        return self.client.call(method, json.loads(Web3.to_json(list(params))))

    def is_connected(self, show_traceback: bool = False) -> bool:
        try:
            self.client.call("web3_clientVersion")
        except RpcError:
            if show_traceback:
                raise
            return False
        return True


def connect(client: JsonRpcClient) -> Web3:
    """
    Build a Web3 instance on top of a JsonRpcClient.

    RPC failures surface as RpcError from the client instead of web3's
    own error types.
    """
    return Web3(JsonRpcProvider(client))
