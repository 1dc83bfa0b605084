"""
Exception types raised by the harness.

Reverted contract calls surface as ``TransactionReverted``; the withdraw step
is the only place that turns it into a result value instead of raising.
"""
from __future__ import annotations


class HarnessError(Exception):
    """Base class for harness failures."""


class ConfigurationError(HarnessError):
    """Missing or invalid settings."""


class ArtifactError(HarnessError):
    """Compiled contract artifact is missing ABI or bytecode."""


class InsufficientFunds(HarnessError):
    """Sender balance cannot cover value plus gas."""

    def __init__(self, address: str, balance_wei: int, required_wei: int):
        self.address = address
        self.balance_wei = balance_wei
        self.required_wei = required_wei
        super().__init__(
            f"Insufficient balance for {address}: have {balance_wei} wei, need {required_wei} wei"
        )


class TransactionReverted(HarnessError):
    """A contract call or mined transaction reverted."""

    def __init__(self, message: str, tx_hash: str | None = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class ClockControlError(HarnessError):
    """The test network rejected a clock control RPC."""

    def __init__(self, method: str, error: object):
        self.method = method
        self.error = error
        super().__init__(f"{method} failed: {error}")


class ExpectationFailed(HarnessError):
    """A negative-path step succeeded, or a post-condition did not hold."""
