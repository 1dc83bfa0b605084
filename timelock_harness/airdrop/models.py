"""
Value types for the timelock airdrop lifecycle.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from eth_utils import is_address, to_checksum_address

UINT256_MAX = 2**256 - 1


@dataclass(frozen=True)
class DeploymentDescriptor:
    """Constructor arguments of the airdrop. Immutable once deployed."""

    merkle_root: bytes
    collateral: str
    release_delay: int

    def __post_init__(self):
        root = self.merkle_root
        if isinstance(root, str):
            try:
                root = bytes.fromhex(root[2:] if root.startswith("0x") else root)
            except ValueError:
                raise ValueError(f"Merkle root is not hex: {self.merkle_root!r}")
            object.__setattr__(self, "merkle_root", root)
        if len(self.merkle_root) != 32:
            raise ValueError(f"Merkle root must be 32 bytes, got {len(self.merkle_root)}")
        if not is_address(self.collateral):
            raise ValueError(f"Collateral is not an address: {self.collateral!r}")
        object.__setattr__(self, "collateral", to_checksum_address(self.collateral))
        if not 0 <= int(self.release_delay) <= UINT256_MAX:
            raise ValueError(f"Release delay out of uint256 range: {self.release_delay}")

    def as_constructor_args(self) -> tuple[bytes, str, int]:
        return self.merkle_root, self.collateral, int(self.release_delay)


class ClaimState(Enum):
    UNCLAIMED = "unclaimed"
    LOCKED = "locked"
    WITHDRAWABLE = "withdrawable"
    WITHDRAWN = "withdrawn"


@dataclass(frozen=True)
class ClaimRecord:
    """``claims(address)`` as stored by the contract."""

    locked_amount: int
    timestamp: int

    @property
    def exists(self) -> bool:
        return self.timestamp != 0 or self.locked_amount != 0

    def state(self, now: int, release_delay: int) -> ClaimState:
        """Derive the lifecycle state at chain time ``now``."""
        if self.locked_amount == 0:
            return ClaimState.WITHDRAWN if self.timestamp else ClaimState.UNCLAIMED
        if now < self.timestamp + release_delay:
            return ClaimState.LOCKED
        return ClaimState.WITHDRAWABLE


@dataclass(frozen=True)
class WithdrawSuccess:
    tx_hash: str
    amount: int

    ok = True


@dataclass(frozen=True)
class WithdrawFailure:
    error: str

    ok = False


WithdrawResult = Union[WithdrawSuccess, WithdrawFailure]
