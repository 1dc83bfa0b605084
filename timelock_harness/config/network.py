"""
Network configuration for the timelock claim harness.

Local development networks that expose the ``evm_increaseTime`` /
``evm_mine`` control plane. Each profile carries its default RPC URL and,
where the node derives accounts from a well-known mnemonic, the private
key of account #0.
"""

import os
from typing import Any


# =============================================================================
# CHAIN CONFIGURATIONS
# =============================================================================

# Account #0 of the "test test test ... junk" mnemonic used by anvil and hardhat
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"

CHAINS: dict[str, dict[str, Any]] = {
    "anvil": {
        "chain_id": 31337,
        "name": "Anvil",
        "currency": "ETH",
        "rpc_urls": [
            "http://127.0.0.1:8545",
        ],
        "dev_private_key": DEV_PRIVATE_KEY,
    },
    "hardhat": {
        "chain_id": 31337,
        "name": "Hardhat Network",
        "currency": "ETH",
        "rpc_urls": [
            "http://127.0.0.1:8545",
        ],
        "dev_private_key": DEV_PRIVATE_KEY,
    },
    "ganache": {
        "chain_id": 1337,
        "name": "Ganache",
        "currency": "ETH",
        "rpc_urls": [
            "http://127.0.0.1:7545",
            "http://127.0.0.1:8545",
        ],
        # Ganache generates a fresh mnemonic per run unless told otherwise
        "dev_private_key": None,
    },
}

DEFAULT_CHAIN = "anvil"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_chain_config(chain: str | None = None) -> dict[str, Any]:
    """Get configuration for a local network profile.

    Args:
        chain: Profile name (e.g., 'anvil', 'hardhat').
               If None, uses CHAIN environment variable or defaults to 'anvil'.

    Returns:
        Chain configuration dictionary.

    Raises:
        ValueError: If the profile is not supported.
    """
    if chain is None:
        chain = os.getenv("CHAIN", DEFAULT_CHAIN)

    chain = chain.lower()
    if chain not in CHAINS:
        raise ValueError(f"Unsupported chain: {chain}. Supported: {list(CHAINS.keys())}")

    return CHAINS[chain]


def get_rpc_url(chain: str | None = None) -> str:
    """Get the RPC URL for a profile.

    Uses RPC_URL environment variable if set, otherwise returns first default.
    """
    env_rpc = os.getenv("RPC_URL")
    if env_rpc:
        return env_rpc

    config = get_chain_config(chain)
    return config["rpc_urls"][0]


def get_chain_id(chain: str | None = None) -> int:
    """Get the chain ID for a profile name."""
    return get_chain_config(chain)["chain_id"]


def get_dev_private_key(chain: str | None = None) -> str | None:
    """Private key of the node's pre-funded account #0, if deterministic."""
    return get_chain_config(chain)["dev_private_key"]


# Network timeouts
RPC_TIMEOUT: int = 30  # seconds
TX_TIMEOUT: int = 120  # seconds to wait for a receipt
