"""
Timelock claim lifecycle driver.

``TimelockClaimHarness`` walks one claimant through

    deploy -> fund -> claim -> read state -> advance clock -> withdraw -> read state

against whatever backend and clock it is given. Every step blocks until the
node has answered. Failures propagate as exceptions, except in
``withdraw()``: a reverted withdraw is an expected, loggable outcome and is
returned as ``WithdrawFailure``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence

from web3 import Web3

from ..airdrop.models import (
    ClaimRecord,
    ClaimState,
    DeploymentDescriptor,
    WithdrawFailure,
    WithdrawResult,
    WithdrawSuccess,
)
from ..chain.clock import SimulatedClock
from ..config.logging_config import log_claim_state, log_withdraw_result
from ..errors import ExpectationFailed, TransactionReverted


class ClaimContract(Protocol):
    @property
    def address(self) -> str: ...

    def claim(self, proof: Sequence[bytes], amount: int) -> Any: ...

    def withdraw(self) -> Any: ...

    def claims(self, address: str) -> ClaimRecord: ...

    def balance(self) -> int: ...


class AirdropBackend(Protocol):
    @property
    def claimant(self) -> str: ...

    def deploy(self, descriptor: DeploymentDescriptor) -> ClaimContract: ...

    def fund(self, address: str, amount_wei: int) -> Any: ...


@dataclass(frozen=True)
class LifecycleReport:
    claimant: str
    contract: str
    before: ClaimRecord
    withdraw: WithdrawResult
    after: ClaimRecord
    balance_before: int
    balance_after: int
    state_at_withdraw: Optional[ClaimState] = None

    @property
    def transferred(self) -> int:
        """Native value that left the contract during the withdraw step."""
        return self.balance_before - self.balance_after


def _tx_hash(receipt: Any) -> str:
    return Web3.to_hex(receipt["transactionHash"])


class TimelockClaimHarness:
    def __init__(
        self,
        backend: AirdropBackend,
        clock: SimulatedClock,
        logger: Optional[logging.Logger] = None,
    ):
        self.backend = backend
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)
        self.descriptor: Optional[DeploymentDescriptor] = None
        self._contract: Optional[ClaimContract] = None

    @property
    def claimant(self) -> str:
        return self.backend.claimant

    @property
    def contract(self) -> ClaimContract:
        if self._contract is None:
            raise RuntimeError("Airdrop not deployed yet; call deploy() first")
        return self._contract

    # 1. Deploy
    def deploy(self, descriptor: DeploymentDescriptor) -> ClaimContract:
        self.logger.info(
            "Deploying airdrop: root=0x%s collateral=%s delay=%ss",
            descriptor.merkle_root.hex(),
            descriptor.collateral,
            descriptor.release_delay,
        )
        self._contract = self.backend.deploy(descriptor)
        self.descriptor = descriptor
        return self._contract

    # 2. Fund
    def fund(self, amount_wei: int) -> None:
        self.backend.fund(self.contract.address, amount_wei)
        self.logger.info("Contract %s balance: %s wei", self.contract.address, self.contract.balance())

    # 3. Claim
    def claim(self, proof: Sequence[bytes], amount: int) -> ClaimRecord:
        self.contract.claim(proof, amount)
        record = self.read_state()
        self.logger.info("Claimed %s, locked amount now %s", amount, record.locked_amount)
        return record

    def expect_claim_rejected(self, proof: Sequence[bytes], amount: int) -> str:
        """
        Claim that must revert. Returns the revert message; raises
        ``ExpectationFailed`` if the claim went through or left a record.
        """
        try:
            self.contract.claim(proof, amount)
        except TransactionReverted as e:
            record = self.read_state()
            if record.exists:
                raise ExpectationFailed(f"Rejected claim left a record: {record}")
            self.logger.info("Claim rejected as expected: %s", e)
            return str(e)
        raise ExpectationFailed(f"Claim of {amount} with an invalid proof was accepted")

    # 4. / 7. Read state
    def read_state(self, address: Optional[str] = None) -> ClaimRecord:
        address = address or self.claimant
        return self.contract.claims(address)

    def claim_state(self, address: Optional[str] = None) -> ClaimState:
        record = self.read_state(address)
        delay = self.descriptor.release_delay if self.descriptor else 0
        return record.state(self.clock.now(), delay)

    # 5. Advance clock
    def advance_clock(self, seconds: int) -> int:
        """
        Ask the node to move time forward, then force one block so contracts
        observe it. Returns the timestamp of the new latest block.
        """
        if self.descriptor is not None and seconds < self.descriptor.release_delay:
            self.logger.warning(
                "Advancing %ss, less than the %ss release delay; withdraw is expected to revert",
                seconds,
                self.descriptor.release_delay,
            )
        self.clock.increase_time(seconds)
        self.clock.mine()
        now = self.clock.now()
        self.logger.info("Clock advanced by %ss, latest block timestamp %s", seconds, now)
        return now

    # 6. Withdraw
    def withdraw(self) -> WithdrawResult:
        """Withdraw for the claimant. Reverts are returned, never raised."""
        before = self.read_state()
        try:
            receipt = self.contract.withdraw()
        except TransactionReverted as e:
            log_withdraw_result(self.logger, self.claimant, success=False, error=str(e))
            return WithdrawFailure(error=str(e))

        after = self.read_state()
        result = WithdrawSuccess(tx_hash=_tx_hash(receipt), amount=before.locked_amount - after.locked_amount)
        log_withdraw_result(self.logger, self.claimant, success=True, amount=result.amount, tx_hash=result.tx_hash)
        return result

    def run(
        self,
        descriptor: DeploymentDescriptor,
        proof: Sequence[bytes],
        amount: int,
        fund_wei: int,
        advance_seconds: int,
    ) -> LifecycleReport:
        """
        The full lifecycle for the claimant. Writes the before/after locked
        amounts and the withdraw outcome to the log.
        """
        self.deploy(descriptor)
        self.fund(fund_wei)
        self.claim(proof, amount)

        before = self.read_state()
        log_claim_state(self.logger, "before withdraw", self.claimant, before.locked_amount, before.timestamp)
        self.logger.info("Before withdraw: %s", before.locked_amount)

        if advance_seconds:
            self.advance_clock(advance_seconds)

        state = self.claim_state()
        self.logger.info("Claim state before withdraw: %s", state.value)
        balance_before = self.contract.balance()
        result = self.withdraw()
        if isinstance(result, WithdrawSuccess):
            self.logger.info("Withdraw successful: %s", result.tx_hash)
        else:
            self.logger.info("Withdraw failed: %s", result.error)
        balance_after = self.contract.balance()

        after = self.read_state()
        log_claim_state(self.logger, "after withdraw", self.claimant, after.locked_amount, after.timestamp)
        self.logger.info("After withdraw: %s", after.locked_amount)

        return LifecycleReport(
            claimant=self.claimant,
            contract=self.contract.address,
            before=before,
            withdraw=result,
            after=after,
            balance_before=balance_before,
            balance_after=balance_after,
            state_at_withdraw=state,
        )
