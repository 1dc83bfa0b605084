"""
Timelock Claim Test Harness.

Drives a time-locked airdrop claim contract through
deploy -> fund -> claim -> advance clock -> withdraw against a local
test network (anvil, hardhat node, ganache).
"""

__version__ = "0.1.0"
