"""Deployment descriptor validation and claim state derivation."""

import pytest

from fakes import COLLATERAL
from timelock_harness.airdrop.models import ClaimRecord, ClaimState, DeploymentDescriptor, WithdrawFailure, WithdrawSuccess

ROOT = bytes(range(32))


class TestDeploymentDescriptor:
    def test_accepts_hex_root_and_lowercase_address(self):
        descriptor = DeploymentDescriptor("0x" + ROOT.hex(), COLLATERAL.lower(), 1)
        assert descriptor.merkle_root == ROOT
        assert descriptor.collateral == COLLATERAL
        assert descriptor.as_constructor_args() == (ROOT, COLLATERAL, 1)

    def test_rejects_short_root(self):
        with pytest.raises(ValueError, match="32 bytes"):
            DeploymentDescriptor(b"\x01" * 31, COLLATERAL, 1)

    def test_rejects_non_hex_root(self):
        with pytest.raises(ValueError, match="not hex"):
            DeploymentDescriptor("0xzz", COLLATERAL, 1)

    def test_rejects_bad_collateral(self):
        with pytest.raises(ValueError, match="not an address"):
            DeploymentDescriptor(ROOT, "mockNFT", 1)

    @pytest.mark.parametrize("delay", [-1, 2**256])
    def test_rejects_out_of_range_delay(self, delay):
        with pytest.raises(ValueError, match="uint256"):
            DeploymentDescriptor(ROOT, COLLATERAL, delay)

    def test_is_immutable(self):
        descriptor = DeploymentDescriptor(ROOT, COLLATERAL, 1)
        with pytest.raises(AttributeError):
            descriptor.release_delay = 2


class TestClaimState:
    @pytest.mark.parametrize(
        "record, now, expected",
        [
            (ClaimRecord(0, 0), 1_000, ClaimState.UNCLAIMED),
            (ClaimRecord(100, 1_000), 1_000, ClaimState.LOCKED),
            (ClaimRecord(100, 1_000), 1_009, ClaimState.LOCKED),
            (ClaimRecord(100, 1_000), 1_010, ClaimState.WITHDRAWABLE),
            (ClaimRecord(0, 1_000), 5_000, ClaimState.WITHDRAWN),
        ],
    )
    def test_state(self, record, now, expected):
        assert record.state(now, release_delay=10) is expected

    def test_exists(self):
        assert not ClaimRecord(0, 0).exists
        assert ClaimRecord(0, 5).exists


def test_withdraw_result_variants():
    assert WithdrawSuccess(tx_hash="0xabc", amount=100).ok
    assert not WithdrawFailure(error="execution reverted").ok
