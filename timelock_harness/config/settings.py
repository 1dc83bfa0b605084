"""
Harness settings resolved from the environment.

Values come from process environment variables, optionally seeded from a
``.env`` file. See README for the variable list.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv
from eth_utils import is_address, to_checksum_address

from ..errors import ConfigurationError
from .network import TX_TIMEOUT, get_chain_config, get_dev_private_key, get_rpc_url

DEFAULT_CONTRACT_NAME = "AntiWitchAirdrop"
DEFAULT_SOLC_VERSION = "0.8.20"
LEAF_ENCODINGS = ("packed", "standard")


@dataclass(frozen=True)
class HarnessSettings:
    chain: str
    rpc_url: str
    private_key: str
    artifact_path: Path | None
    contract_name: str
    solc_version: str
    airdrop_address: str | None
    collateral_address: str | None
    release_delay: int
    claim_amount: int
    fund_amount_eth: Decimal
    time_advance_seconds: int
    leaf_encoding: str
    tx_timeout: int
    allocations_path: Path | None = None

    def require_deploy_inputs(self) -> tuple[Path, str]:
        """Return (artifact_path, collateral_address) or raise when deploying is impossible."""
        if self.artifact_path is None:
            raise ConfigurationError("Set AIRDROP_ARTIFACT (or AIRDROP_ADDRESS to attach to a deployed contract)")
        if self.collateral_address is None:
            raise ConfigurationError("Set COLLATERAL_ADDRESS to deploy the airdrop")
        return self.artifact_path, self.collateral_address


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw, 0)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


def _decimal_env(name: str, default: str) -> Decimal:
    raw = os.getenv(name) or default
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")
    if not value.is_finite() or value < 0:
        raise ConfigurationError(f"{name} must be a finite, non-negative number, got {raw}")
    return value


def _address_env(name: str) -> str | None:
    raw = os.getenv(name)
    if not raw:
        return None
    if not is_address(raw):
        raise ConfigurationError(f"{name} is not a valid address: {raw}")
    return to_checksum_address(raw)


def load_settings(env_file: str | None = None) -> HarnessSettings:
    """Build settings from the environment, loading ``env_file`` first when given."""
    if env_file:
        if not Path(env_file).exists():
            raise ConfigurationError(f"env file not found: {env_file}")
        load_dotenv(env_file)

    chain = os.getenv("CHAIN", "anvil").lower()
    try:
        get_chain_config(chain)
    except ValueError as e:
        raise ConfigurationError(str(e))

    private_key = os.getenv("PRIVATE_KEY") or get_dev_private_key(chain)
    if not private_key:
        raise ConfigurationError(f"Set PRIVATE_KEY; {chain} has no deterministic dev account")
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    artifact = os.getenv("AIRDROP_ARTIFACT")
    allocations = os.getenv("ALLOCATIONS_FILE")
    leaf_encoding = os.getenv("LEAF_ENCODING", "packed").lower()
    if leaf_encoding not in LEAF_ENCODINGS:
        raise ConfigurationError(f"LEAF_ENCODING must be one of {LEAF_ENCODINGS}, got {leaf_encoding!r}")

    return HarnessSettings(
        chain=chain,
        rpc_url=get_rpc_url(chain),
        private_key=private_key,
        artifact_path=Path(artifact) if artifact else None,
        contract_name=os.getenv("AIRDROP_CONTRACT_NAME", DEFAULT_CONTRACT_NAME),
        solc_version=os.getenv("SOLC_VERSION", DEFAULT_SOLC_VERSION),
        airdrop_address=_address_env("AIRDROP_ADDRESS"),
        collateral_address=_address_env("COLLATERAL_ADDRESS"),
        release_delay=_int_env("RELEASE_DELAY", 1),
        claim_amount=_int_env("CLAIM_AMOUNT", 100, minimum=1),
        fund_amount_eth=_decimal_env("FUND_AMOUNT_ETH", "1"),
        time_advance_seconds=_int_env("TIME_ADVANCE_SECONDS", 1),
        leaf_encoding=leaf_encoding,
        tx_timeout=_int_env("TX_TIMEOUT", TX_TIMEOUT, minimum=1),
        allocations_path=Path(allocations) if allocations else None,
    )
