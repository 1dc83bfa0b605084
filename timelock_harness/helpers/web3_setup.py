"""
Web3 setup helper - provides web3 instance and signer utilities.

Public API
----------
get_web3_instance(rpc_url=None, timeout=RPC_TIMEOUT)
    Return a Web3 instance connected to the specified RPC URL.
    Falls back to the RPC_URL environment variable / CHAIN profile.
load_account(private_key)
    Return the LocalAccount used to sign harness transactions.
"""
from __future__ import annotations

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

from ..config.network import RPC_TIMEOUT, get_rpc_url
from ..errors import ConfigurationError

__all__ = ["get_web3_instance", "load_account", "ensure_connected"]


def get_web3_instance(rpc_url: str | None = None, timeout: int = RPC_TIMEOUT) -> Web3:
    """
    Get a Web3 instance connected to the specified RPC URL.

    Args:
        rpc_url: Optional RPC URL. If not provided, uses RPC_URL or the CHAIN profile default.
        timeout: HTTP request timeout in seconds.

    Returns:
        Web3 instance
    """
    if rpc_url is None:
        rpc_url = get_rpc_url()

    return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))


def ensure_connected(w3: Web3) -> int:
    """Check connectivity and return the chain id."""
    if not w3.is_connected():
        raise ConfigurationError(f"Could not connect to RPC endpoint {w3.provider.endpoint_uri}")
    return w3.eth.chain_id


def load_account(private_key: str) -> LocalAccount:
    """Return the signing account for ``private_key`` (0x prefix optional)."""
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key
    try:
        return Account.from_key(private_key)
    except ValueError as e:
        raise ConfigurationError(f"Invalid PRIVATE_KEY: {e}")
