"""
Contract ABI package for the timelock claim harness.
"""

from .airdrop import TIMELOCK_AIRDROP_ABI

__all__ = [
    'TIMELOCK_AIRDROP_ABI',
]
