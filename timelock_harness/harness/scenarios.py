"""
Named lifecycle scenarios.

- ``lifecycle``     (A): claim, advance past the delay, withdraw succeeds and zeroes the record.
- ``premature``     (B): claim, withdraw without advancing; withdraw reverts, record unchanged.
- ``invalid-proof`` (C): claim with a proof that does not match the root; claim reverts, no record.

Each scenario deploys its own airdrop. ``run_scenarios`` additionally wraps
every scenario in an ``evm_snapshot`` / ``evm_revert`` pair so the node's
clock and balances are the same at the start of each one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from eth_utils import keccak
from web3 import Web3

from ..airdrop.models import ClaimState, DeploymentDescriptor, WithdrawSuccess
from ..config.settings import HarnessSettings
from ..errors import ConfigurationError, ExpectationFailed
from ..helpers.merkle import MerkleTree, load_allocations
from .lifecycle import LifecycleReport, TimelockClaimHarness

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class ScenarioConfig:
    collateral: str
    release_delay: int = 1
    claim_amount: int = 100
    fund_wei: int = 10**18
    advance_seconds: int = 1
    leaf_encoding: str = "packed"
    allocations: Optional[dict[str, int]] = None

    @classmethod
    def from_settings(cls, settings: HarnessSettings) -> "ScenarioConfig":
        allocations = load_allocations(settings.allocations_path) if settings.allocations_path else None
        return cls(
            # Attaching to a deployed airdrop does not need the collateral reference
            collateral=settings.collateral_address or ZERO_ADDRESS,
            release_delay=settings.release_delay,
            claim_amount=settings.claim_amount,
            fund_wei=Web3.to_wei(settings.fund_amount_eth, "ether"),
            advance_seconds=settings.time_advance_seconds,
            leaf_encoding=settings.leaf_encoding,
            allocations=allocations,
        )

    def tree_for(self, claimant: str) -> MerkleTree:
        allocations = self.allocations or {claimant: self.claim_amount}
        try:
            tree = MerkleTree(allocations, encoding=self.leaf_encoding)
        except ValueError as e:
            raise ConfigurationError(f"Invalid allocation: {e}")
        try:
            tree.leaf_for(claimant)
        except KeyError:
            raise ConfigurationError(f"Claimant {claimant} is not in the allocation")
        return tree

    def descriptor(self, tree: MerkleTree) -> DeploymentDescriptor:
        try:
            return DeploymentDescriptor(tree.root, self.collateral, self.release_delay)
        except ValueError as e:
            raise ConfigurationError(f"Invalid deployment parameters: {e}")


@dataclass
class ScenarioResult:
    name: str
    passed: bool
    message: str
    report: Optional[LifecycleReport] = None
    failures: list[str] = field(default_factory=list)


def _check(failures: list[str], condition: bool, message: str) -> None:
    if not condition:
        failures.append(message)


def scenario_lifecycle(harness: TimelockClaimHarness, config: ScenarioConfig) -> ScenarioResult:
    tree = config.tree_for(harness.claimant)
    amount = tree.amount_for(harness.claimant)
    report = harness.run(
        config.descriptor(tree),
        tree.proof_for(harness.claimant),
        amount,
        fund_wei=config.fund_wei,
        advance_seconds=config.advance_seconds,
    )

    failures: list[str] = []
    _check(failures, report.before.locked_amount == amount, f"locked before withdraw {report.before.locked_amount} != {amount}")
    _check(failures, isinstance(report.withdraw, WithdrawSuccess), f"withdraw reverted: {getattr(report.withdraw, 'error', '')}")
    _check(failures, report.after.locked_amount == 0, f"locked after withdraw {report.after.locked_amount} != 0")
    _check(failures, report.transferred == amount, f"contract paid out {report.transferred} != {amount}")
    return ScenarioResult("lifecycle", not failures, "; ".join(failures) or "withdraw released the full claim", report, failures)


def scenario_premature(harness: TimelockClaimHarness, config: ScenarioConfig) -> ScenarioResult:
    tree = config.tree_for(harness.claimant)
    amount = tree.amount_for(harness.claimant)
    report = harness.run(
        config.descriptor(tree),
        tree.proof_for(harness.claimant),
        amount,
        fund_wei=config.fund_wei,
        advance_seconds=0,
    )

    failures: list[str] = []
    if report.state_at_withdraw is ClaimState.WITHDRAWABLE:
        failures.append(
            f"inconclusive: claim was already withdrawable when withdraw was sent "
            f"(release delay {config.release_delay}s is shorter than the node's block spacing)"
        )
    _check(failures, not report.withdraw.ok, "withdraw succeeded before the release delay")
    _check(failures, report.after.locked_amount == amount, f"locked after premature withdraw {report.after.locked_amount} != {amount}")
    _check(failures, report.transferred == 0, f"contract paid out {report.transferred} before the release delay")
    return ScenarioResult("premature", not failures, "; ".join(failures) or "premature withdraw reverted", report, failures)


def invalid_proof(proof: Sequence[bytes]) -> list[bytes]:
    """A proof that cannot fold to the committed root."""
    return list(proof) + [keccak(text="not-a-member")]


def scenario_invalid_proof(harness: TimelockClaimHarness, config: ScenarioConfig) -> ScenarioResult:
    tree = config.tree_for(harness.claimant)
    amount = tree.amount_for(harness.claimant)
    harness.deploy(config.descriptor(tree))
    harness.fund(config.fund_wei)
    try:
        message = harness.expect_claim_rejected(invalid_proof(tree.proof_for(harness.claimant)), amount)
    except ExpectationFailed as e:
        return ScenarioResult("invalid-proof", False, str(e), failures=[str(e)])
    return ScenarioResult("invalid-proof", True, message)


SCENARIOS: dict[str, Callable[[TimelockClaimHarness, ScenarioConfig], ScenarioResult]] = {
    "lifecycle": scenario_lifecycle,
    "premature": scenario_premature,
    "invalid-proof": scenario_invalid_proof,
}


def run_scenarios(
    harness: TimelockClaimHarness,
    config: ScenarioConfig,
    names: Sequence[str],
    isolate: bool = True,
) -> list[ScenarioResult]:
    """Run ``names`` in order, reverting the node to a snapshot after each."""
    results = []
    for name in names:
        if name not in SCENARIOS:
            raise ValueError(f"Unknown scenario: {name}. Available: {list(SCENARIOS)}")
        snapshot_id = harness.clock.snapshot() if isolate else None
        try:
            logger.info("Scenario %s", name)
            result = SCENARIOS[name](harness, config)
        finally:
            if snapshot_id is not None:
                harness.clock.revert(snapshot_id)
        if result.passed:
            logger.info("PASS %s: %s", name, result.message)
        else:
            logger.error("FAIL %s: %s", name, result.message)
        results.append(result)
    return results
