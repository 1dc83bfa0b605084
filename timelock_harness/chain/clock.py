"""
Simulated clock control for local test networks.

The clock belongs to the node (anvil, hardhat, ganache). The harness only
ever touches it through a ``SimulatedClock`` object passed in explicitly, so
tests can substitute their own clock and scenarios can be isolated with
snapshots.
"""
from __future__ import annotations

import logging
from typing import Any, Protocol

from web3 import Web3

from ..errors import ClockControlError

logger = logging.getLogger(__name__)


class SimulatedClock(Protocol):
    def increase_time(self, seconds: int) -> int: ...

    def mine(self) -> None: ...

    def now(self) -> int: ...

    def snapshot(self) -> Any: ...

    def revert(self, snapshot_id: Any) -> bool: ...


class RpcTestClock:
    """Clock driven through the node's ``evm_*`` control-plane RPCs."""

    def __init__(self, w3: Web3):
        self.w3 = w3

    def _request(self, method: str, params: list[Any]) -> Any:
        response = self.w3.provider.make_request(method, params)
        if "error" in response:
            raise ClockControlError(method, response["error"])
        return response.get("result")

    def increase_time(self, seconds: int) -> int:
        """Move the node's clock forward by ``seconds``; returns the node's reported offset."""
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards ({seconds}s)")
        result = self._request("evm_increaseTime", [seconds])
        logger.debug("evm_increaseTime(%s) -> %s", seconds, result)
        if isinstance(result, str):
            return int(result, 16)
        return int(result or 0)

    def mine(self) -> None:
        """Force one block so the new timestamp is visible to contracts."""
        self._request("evm_mine", [])

    def now(self) -> int:
        return int(self.w3.eth.get_block("latest")["timestamp"])

    def snapshot(self) -> Any:
        snapshot_id = self._request("evm_snapshot", [])
        logger.debug("Snapshot taken: %s", snapshot_id)
        return snapshot_id

    def revert(self, snapshot_id: Any) -> bool:
        reverted = bool(self._request("evm_revert", [snapshot_id]))
        if not reverted:
            logger.warning("evm_revert to %s was refused by the node", snapshot_id)
        return reverted
