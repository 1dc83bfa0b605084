"""Shared pytest fixtures and configuration.

This file is automatically loaded by pytest and provides fixtures
accessible to all tests.
"""

import os

import pytest
from hypothesis import HealthCheck, settings

from fakes import COLLATERAL, FakeBackend, FakeChain
from timelock_harness.harness.lifecycle import TimelockClaimHarness
from timelock_harness.harness.scenarios import ScenarioConfig

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)

settings.register_profile(
    "dev",
    max_examples=20,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

settings.register_profile(
    "thorough",
    max_examples=500,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


HARNESS_ENV_VARS = [
    "CHAIN",
    "RPC_URL",
    "PRIVATE_KEY",
    "AIRDROP_ARTIFACT",
    "AIRDROP_CONTRACT_NAME",
    "SOLC_VERSION",
    "AIRDROP_ADDRESS",
    "COLLATERAL_ADDRESS",
    "RELEASE_DELAY",
    "CLAIM_AMOUNT",
    "FUND_AMOUNT_ETH",
    "TIME_ADVANCE_SECONDS",
    "LEAF_ENCODING",
    "TX_TIMEOUT",
    "ALLOCATIONS_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's shell environment out of settings resolution."""
    for name in HARNESS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HARNESS_LOG_DIR", str(tmp_path / "logs"))


@pytest.fixture
def chain():
    return FakeChain()


@pytest.fixture
def backend(chain):
    return FakeBackend(chain)


@pytest.fixture
def harness(backend, chain):
    return TimelockClaimHarness(backend, chain)


@pytest.fixture
def scenario_config():
    return ScenarioConfig(collateral=COLLATERAL, release_delay=1, claim_amount=100, fund_wei=10**18, advance_seconds=1)
