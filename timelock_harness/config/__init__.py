"""
Configuration package for the timelock claim harness.
"""

from timelock_harness.config.network import (
    CHAINS,
    DEFAULT_CHAIN,
    DEV_PRIVATE_KEY,
    RPC_TIMEOUT,
    TX_TIMEOUT,
    get_chain_config,
    get_chain_id,
    get_dev_private_key,
    get_rpc_url,
)

from timelock_harness.config.settings import (
    HarnessSettings,
    load_settings,
)

from timelock_harness.config.abis import (
    TIMELOCK_AIRDROP_ABI
)

__all__ = [
    # Network
    'CHAINS',
    'DEFAULT_CHAIN',
    'DEV_PRIVATE_KEY',
    'RPC_TIMEOUT',
    'TX_TIMEOUT',
    'get_chain_config',
    'get_chain_id',
    'get_dev_private_key',
    'get_rpc_url',

    # Settings
    'HarnessSettings',
    'load_settings',

    # ABIs
    'TIMELOCK_AIRDROP_ABI',
]
