"""
web3.py binding for the timelock airdrop contract.

The contract itself is an external collaborator: this module only knows its
constructor and the ``claim`` / ``withdraw`` / ``claims`` surface.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import ContractLogicError, Web3Exception
from web3.types import TxReceipt

from ..config.abis import TIMELOCK_AIRDROP_ABI
from ..config.network import TX_TIMEOUT
from ..errors import ConfigurationError, TransactionReverted
from ..helpers.artifacts import ContractArtifact
from ..helpers.transactions import GasConfig, send_transaction
from .models import ClaimRecord, DeploymentDescriptor

logger = logging.getLogger(__name__)


class TimelockAirdrop:
    """A deployed airdrop, bound to the account that sends its transactions."""

    def __init__(
        self,
        w3: Web3,
        contract: Contract,
        account: LocalAccount,
        gas: GasConfig | None = None,
        timeout: int = TX_TIMEOUT,
    ):
        self.w3 = w3
        self.contract = contract
        self.account = account
        self.gas = gas
        self.timeout = timeout

    @property
    def address(self) -> ChecksumAddress:
        return self.contract.address

    # ------------------------------------------------------------------ #
    # Construction                                                       #
    # ------------------------------------------------------------------ #

    @classmethod
    def deploy(
        cls,
        w3: Web3,
        account: LocalAccount,
        artifact: ContractArtifact,
        descriptor: DeploymentDescriptor,
        gas: GasConfig | None = None,
        timeout: int = TX_TIMEOUT,
    ) -> "TimelockAirdrop":
        """Deploy ``artifact`` with the descriptor's constructor arguments."""
        factory = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        try:
            data = factory.constructor(*descriptor.as_constructor_args()).data_in_transaction
        except (TypeError, ValueError, Web3Exception) as e:
            raise ConfigurationError(f"Constructor arguments do not match {artifact.name} ABI: {e}")

        receipt = send_transaction(
            w3, account, {"data": data}, gas=gas, timeout=timeout, label=f"deploy {artifact.name}"
        )
        address = receipt["contractAddress"]
        logger.info("Deployed %s at %s (gas used %s)", artifact.name, address, receipt["gasUsed"])
        return cls(w3, w3.eth.contract(address=address, abi=artifact.abi), account, gas, timeout)

    @classmethod
    def at(
        cls,
        w3: Web3,
        address: str,
        account: LocalAccount,
        abi: list[dict[str, Any]] | None = None,
        gas: GasConfig | None = None,
        timeout: int = TX_TIMEOUT,
    ) -> "TimelockAirdrop":
        """Attach to an already-deployed airdrop."""
        address = to_checksum_address(address)
        if not w3.eth.get_code(address):
            raise ConfigurationError(f"No contract code at {address}; check AIRDROP_ADDRESS and RPC_URL")
        contract = w3.eth.contract(address=address, abi=abi or TIMELOCK_AIRDROP_ABI)
        return cls(w3, contract, account, gas, timeout)

    # ------------------------------------------------------------------ #
    # Contract surface                                                   #
    # ------------------------------------------------------------------ #

    def _transact(self, fn_name: str, args: list[Any]) -> TxReceipt:
        data = self.contract.encode_abi(fn_name, args=args)
        return send_transaction(
            self.w3,
            self.account,
            {"to": self.address, "data": data},
            gas=self.gas,
            timeout=self.timeout,
            label=fn_name,
        )

    def claim(self, proof: Sequence[bytes], amount: int) -> TxReceipt:
        return self._transact("claim", [list(proof), amount])

    def withdraw(self) -> TxReceipt:
        return self._transact("withdraw", [])

    def claims(self, address: str) -> ClaimRecord:
        try:
            locked_amount, timestamp = self.contract.functions.claims(to_checksum_address(address)).call()
        except ContractLogicError as e:
            raise TransactionReverted(f"claims({address}) reverted: {e}")
        return ClaimRecord(locked_amount=int(locked_amount), timestamp=int(timestamp))

    def balance(self) -> int:
        """Native balance held by the contract, in wei."""
        return int(self.w3.eth.get_balance(self.address))
