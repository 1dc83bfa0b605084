"""
Live-node backend for the harness: web3 contract binding, funding and the
RPC-driven clock, assembled from ``HarnessSettings``.
"""
from __future__ import annotations

import logging
from typing import Optional

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.types import TxReceipt

from ..airdrop.contract import TimelockAirdrop
from ..airdrop.models import DeploymentDescriptor
from ..chain.clock import RpcTestClock
from ..config.network import TX_TIMEOUT, get_chain_id
from ..config.settings import HarnessSettings
from ..errors import ConfigurationError
from ..helpers.artifacts import ContractArtifact, load_artifact
from ..helpers.web3_setup import ensure_connected, get_web3_instance, load_account
from ..setup.fund import fund_contract

logger = logging.getLogger(__name__)


class Web3AirdropBackend:
    """Deploys (or attaches to) the airdrop and funds it from ``account``."""

    def __init__(
        self,
        w3: Web3,
        account: LocalAccount,
        artifact: Optional[ContractArtifact] = None,
        attach_address: Optional[str] = None,
        timeout: int = TX_TIMEOUT,
    ):
        if artifact is None and attach_address is None:
            raise ConfigurationError("Need a compiled artifact to deploy or an address to attach to")
        self.w3 = w3
        self.account = account
        self.artifact = artifact
        self.attach_address = attach_address
        self.timeout = timeout

    @property
    def claimant(self) -> str:
        return self.account.address

    def deploy(self, descriptor: DeploymentDescriptor) -> TimelockAirdrop:
        if self.attach_address is not None:
            logger.info("Attaching to deployed airdrop at %s", self.attach_address)
            abi = self.artifact.abi if self.artifact else None
            return TimelockAirdrop.at(self.w3, self.attach_address, self.account, abi=abi, timeout=self.timeout)
        return TimelockAirdrop.deploy(self.w3, self.account, self.artifact, descriptor, timeout=self.timeout)

    def fund(self, address: str, amount_wei: int) -> TxReceipt:
        return fund_contract(self.w3, self.account, address, amount_wei, timeout=self.timeout)


def build_backend(settings: HarnessSettings) -> tuple[Web3AirdropBackend, RpcTestClock]:
    """Connect to the node described by ``settings`` and return (backend, clock)."""
    w3 = get_web3_instance(settings.rpc_url)
    chain_id = ensure_connected(w3)
    logger.info("Connected to %s (chain id %s)", settings.rpc_url, chain_id)
    if chain_id != get_chain_id(settings.chain):
        logger.warning("Chain id %s does not match the %s profile (%s)", chain_id, settings.chain, get_chain_id(settings.chain))

    account = load_account(settings.private_key)
    artifact = None
    if settings.airdrop_address is None:
        artifact_path, _ = settings.require_deploy_inputs()
        artifact = load_artifact(artifact_path, settings.contract_name, settings.solc_version)
    elif settings.artifact_path is not None:
        artifact = load_artifact(settings.artifact_path, settings.contract_name, settings.solc_version)

    backend = Web3AirdropBackend(
        w3,
        account,
        artifact=artifact,
        attach_address=settings.airdrop_address,
        timeout=settings.tx_timeout,
    )
    return backend, RpcTestClock(w3)
