#!/usr/bin/env python3
"""
Fund the airdrop contract with native value from the harness account.

Usage:
    python -m timelock_harness.setup.fund --to 0x... --amount 1
"""
from __future__ import annotations

import argparse
import logging
from decimal import Decimal, InvalidOperation

from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from web3 import Web3
from web3.types import TxReceipt

from ..config.network import TX_TIMEOUT
from ..errors import InsufficientFunds
from ..helpers.transactions import GasConfig, send_transaction

logger = logging.getLogger(__name__)

# Upper bound used for the balance check; a payable receive() costs more than 21000
FUND_GAS_BUDGET = 100_000


def parse_amount_eth(amount_str: str) -> Decimal:
    try:
        v = Decimal(str(amount_str))
        if v <= 0:
            raise ValueError
        return v
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid amount: {amount_str}")


def fund_contract(
    w3: Web3,
    account: LocalAccount,
    to: str,
    amount_wei: int,
    *,
    gas: GasConfig | None = None,
    timeout: int = TX_TIMEOUT,
) -> TxReceipt:
    """
    Transfer ``amount_wei`` of native value from ``account`` to ``to``.

    Raises:
        InsufficientFunds: if the sender cannot cover value plus the gas budget
        TransactionReverted: if the recipient rejects the transfer
    """
    to = to_checksum_address(to)
    gas = gas or GasConfig.from_chain(w3)
    required = amount_wei + gas.max_gas_cost_wei(FUND_GAS_BUDGET)
    balance = int(w3.eth.get_balance(account.address))
    if balance < required:
        raise InsufficientFunds(account.address, balance, required)

    receipt = send_transaction(
        w3, account, {"to": to, "value": amount_wei}, gas=gas, timeout=timeout, label="fund"
    )
    logger.info("Funded %s with %s ETH", to, Web3.from_wei(amount_wei, "ether"))
    return receipt


def main() -> int:
    from ..config.settings import load_settings
    from ..helpers.web3_setup import ensure_connected, get_web3_instance, load_account

    parser = argparse.ArgumentParser(description="Send native value to a contract")
    parser.add_argument("--to", required=True, help="Recipient address")
    parser.add_argument("--amount", default="1", help="Amount in ETH (default 1)")
    parser.add_argument("--env-file", help="Optional .env file")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    settings = load_settings(args.env_file)
    w3 = get_web3_instance(settings.rpc_url)
    ensure_connected(w3)
    account = load_account(settings.private_key)
    amount_wei = Web3.to_wei(parse_amount_eth(args.amount), "ether")
    receipt = fund_contract(w3, account, args.to, amount_wei, timeout=settings.tx_timeout)
    print(f"Funded {args.to}: {Web3.to_hex(receipt['transactionHash'])}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
