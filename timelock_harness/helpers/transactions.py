"""
Sign, send and confirm transactions from the harness account.

Every state-changing harness step goes through ``send_transaction`` so
reverts surface the same way: ``ContractLogicError`` raised during gas
estimation and receipts mined with ``status == 0`` both become
``TransactionReverted``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import ContractLogicError
from web3.types import TxParams, TxReceipt

from ..config.network import TX_TIMEOUT
from ..errors import TransactionReverted

logger = logging.getLogger(__name__)

PRIORITY_FEE_GWEI = Decimal("1")
GAS_BUFFER_PERCENT = 20  # headroom over the node's estimate


@dataclass
class GasConfig:
    type: str  # "eip1559" or "legacy"
    max_fee_wei: int | None = None
    prio_fee_wei: int | None = None
    gas_price_wei: int | None = None

    @classmethod
    def from_chain(cls, w3: Web3) -> "GasConfig":
        """Derive fee fields from the latest block (EIP-1559 when the node supports it)."""
        latest = w3.eth.get_block("latest")
        if "baseFeePerGas" in latest:
            prio = Web3.to_wei(PRIORITY_FEE_GWEI, "gwei")
            return cls(type="eip1559", max_fee_wei=int(latest["baseFeePerGas"]) * 2 + prio, prio_fee_wei=prio)
        return cls(type="legacy", gas_price_wei=int(w3.eth.gas_price))

    def as_tx_fields(self) -> dict[str, int]:
        if self.type == "eip1559":
            assert self.max_fee_wei is not None and self.prio_fee_wei is not None
            return {
                "maxFeePerGas": self.max_fee_wei,
                "maxPriorityFeePerGas": self.prio_fee_wei,
            }
        assert self.gas_price_wei is not None
        return {"gasPrice": self.gas_price_wei}

    def max_gas_cost_wei(self, gas_limit: int) -> int:
        price = self.max_fee_wei if self.type == "eip1559" else self.gas_price_wei
        assert price is not None
        return price * gas_limit


def _revert_message(err: ContractLogicError) -> str:
    return getattr(err, "message", None) or str(err) or "execution reverted"


def send_transaction(
    w3: Web3,
    account: LocalAccount,
    tx: TxParams,
    *,
    gas: GasConfig | None = None,
    timeout: int = TX_TIMEOUT,
    label: str = "transaction",
) -> TxReceipt:
    """
    Fill nonce/fees/gas, sign with ``account``, broadcast and wait for the receipt.

    Args:
        w3: Connected Web3 instance
        account: Signing account
        tx: Partial transaction (``to``/``data``/``value``)
        gas: Fee configuration; derived from the latest block when omitted
        timeout: Seconds to wait for the receipt
        label: Name used in log lines and errors

    Returns:
        The mined receipt (status 1)

    Raises:
        TransactionReverted: when gas estimation reverts or the receipt has status 0
    """
    gas = gas or GasConfig.from_chain(w3)
    full: dict[str, Any] = {
        "from": account.address,
        "nonce": w3.eth.get_transaction_count(account.address, "pending"),
        "chainId": w3.eth.chain_id,
        "value": 0,
        **dict(tx),
        **gas.as_tx_fields(),
    }

    if "gas" not in full:
        try:
            estimate = w3.eth.estimate_gas(full)
        except ContractLogicError as e:
            logger.debug("%s reverted during gas estimation: %s", label, e)
            raise TransactionReverted(f"{label} reverted: {_revert_message(e)}")
        full["gas"] = estimate * (100 + GAS_BUFFER_PERCENT) // 100

    signed = account.sign_transaction(full)
    tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
    logger.debug("%s sent: %s", label, Web3.to_hex(tx_hash))

    receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
    if receipt["status"] != 1:
        raise TransactionReverted(f"{label} reverted in block {receipt['blockNumber']}", tx_hash=Web3.to_hex(tx_hash))

    logger.debug("%s mined in block %s (gas used %s)", label, receipt["blockNumber"], receipt["gasUsed"])
    return receipt
