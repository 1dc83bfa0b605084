"""Property-based tests for the claim/withdraw timelock.

For any allocation containing the claimant and any release delay:
1. withdraw before the delay elapses reverts and leaves the locked amount unchanged
2. after advancing at least the delay, withdraw succeeds exactly once and
   releases the full locked amount
3. reading state without an intervening mutation is idempotent
"""

from hypothesis import given, strategies as st

from fakes import CLAIMANT, COLLATERAL, FakeBackend, FakeChain
from timelock_harness.airdrop.models import DeploymentDescriptor, WithdrawFailure, WithdrawSuccess
from timelock_harness.harness.lifecycle import TimelockClaimHarness
from timelock_harness.helpers.merkle import MerkleTree

amounts = st.integers(min_value=1, max_value=10**18)
delays = st.integers(min_value=1, max_value=365 * 24 * 3600)
other_claimants = st.dictionaries(
    st.binary(min_size=20, max_size=20).map(lambda b: "0x" + b.hex()),
    st.integers(min_value=0, max_value=10**24),
    max_size=8,
)


def _claimed_harness(amount, delay, others):
    chain = FakeChain()
    harness = TimelockClaimHarness(FakeBackend(chain), chain)
    allocations = {k: v for k, v in others.items() if k.lower() != CLAIMANT.lower()}
    allocations[CLAIMANT] = amount
    tree = MerkleTree(allocations)
    harness.deploy(DeploymentDescriptor(tree.root, COLLATERAL, delay))
    harness.fund(amount)
    harness.claim(tree.proof_for(CLAIMANT), amount)
    return harness


class TestTimelockProperties:
    @given(amount=amounts, delay=delays, others=other_claimants, elapsed=st.data())
    def test_withdraw_before_delay_reverts(self, amount, delay, others, elapsed):
        harness = _claimed_harness(amount, delay, others)
        wait = elapsed.draw(st.integers(min_value=0, max_value=delay - 1))
        if wait:
            harness.advance_clock(wait)

        result = harness.withdraw()

        assert isinstance(result, WithdrawFailure)
        assert harness.read_state().locked_amount == amount
        assert harness.contract.balance() == amount

    @given(amount=amounts, delay=delays, others=other_claimants, extra=st.integers(min_value=0, max_value=10**6))
    def test_withdraw_after_delay_succeeds_once(self, amount, delay, others, extra):
        harness = _claimed_harness(amount, delay, others)
        harness.advance_clock(delay + extra)

        first = harness.withdraw()
        second = harness.withdraw()

        assert isinstance(first, WithdrawSuccess)
        assert first.amount == amount
        assert harness.contract.balance() == 0
        assert harness.read_state().locked_amount == 0
        assert isinstance(second, WithdrawFailure)

    @given(amount=amounts, delay=delays, others=other_claimants)
    def test_read_state_is_idempotent(self, amount, delay, others):
        harness = _claimed_harness(amount, delay, others)
        assert harness.read_state() == harness.read_state() == harness.read_state()
