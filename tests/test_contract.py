"""TimelockAirdrop binding with the web3 contract and transaction layer mocked out."""

from unittest.mock import MagicMock

import pytest
from eth_account import Account
from web3.exceptions import ContractLogicError

from fakes import CLAIMANT, COLLATERAL
from timelock_harness.airdrop import contract as contract_module
from timelock_harness.airdrop.contract import TimelockAirdrop
from timelock_harness.airdrop.models import ClaimRecord, DeploymentDescriptor
from timelock_harness.config.network import DEV_PRIVATE_KEY
from timelock_harness.errors import ConfigurationError, TransactionReverted
from timelock_harness.helpers.artifacts import ContractArtifact

AIRDROP = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"


@pytest.fixture
def account():
    return Account.from_key(DEV_PRIVATE_KEY)


@pytest.fixture
def sent(monkeypatch):
    calls = []

    def fake_send(w3, account, tx, **kwargs):
        calls.append((tx, kwargs))
        return {"status": 1, "transactionHash": b"\x01" * 32, "contractAddress": AIRDROP, "gasUsed": 1, "blockNumber": 1}

    monkeypatch.setattr(contract_module, "send_transaction", fake_send)
    return calls


@pytest.fixture
def airdrop(account):
    w3 = MagicMock()
    web3_contract = MagicMock()
    web3_contract.address = AIRDROP
    web3_contract.encode_abi.side_effect = lambda name, args: f"encoded:{name}:{args}"
    return TimelockAirdrop(w3, web3_contract, account)


def test_claims_decodes_tuple(airdrop):
    airdrop.contract.functions.claims.return_value.call.return_value = (100, 1_700_000_000)

    assert airdrop.claims(CLAIMANT.lower()) == ClaimRecord(locked_amount=100, timestamp=1_700_000_000)
    airdrop.contract.functions.claims.assert_called_once_with(CLAIMANT)


def test_claims_revert_is_mapped(airdrop):
    airdrop.contract.functions.claims.return_value.call.side_effect = ContractLogicError("execution reverted")
    with pytest.raises(TransactionReverted):
        airdrop.claims(CLAIMANT)


def test_claim_sends_encoded_call(airdrop, sent):
    proof = [b"\x02" * 32]
    airdrop.claim(proof, 100)

    tx, kwargs = sent[0]
    assert tx == {"to": AIRDROP, "data": f"encoded:claim:{[proof, 100]}"}
    assert kwargs["label"] == "claim"


def test_withdraw_propagates_revert(airdrop, monkeypatch):
    def reverting_send(*args, **kwargs):
        raise TransactionReverted("withdraw reverted: tokens still locked")

    monkeypatch.setattr(contract_module, "send_transaction", reverting_send)
    with pytest.raises(TransactionReverted, match="still locked"):
        airdrop.withdraw()


def test_balance(airdrop):
    airdrop.w3.eth.get_balance.return_value = 10**18
    assert airdrop.balance() == 10**18
    airdrop.w3.eth.get_balance.assert_called_once_with(AIRDROP)


def test_deploy_uses_constructor_args(account, sent):
    w3 = MagicMock()
    factory = w3.eth.contract.return_value
    factory.constructor.return_value.data_in_transaction = "0x6080"
    artifact = ContractArtifact(name="AntiWitchAirdrop", abi=[], bytecode="0x6080")
    descriptor = DeploymentDescriptor(b"\x11" * 32, COLLATERAL, 1)

    deployed = TimelockAirdrop.deploy(w3, account, artifact, descriptor)

    factory.constructor.assert_called_once_with(b"\x11" * 32, COLLATERAL, 1)
    assert sent[0][0] == {"data": "0x6080"}
    w3.eth.contract.assert_called_with(address=AIRDROP, abi=[])
    assert deployed.w3 is w3


def test_at_requires_code(account):
    w3 = MagicMock()
    w3.eth.get_code.return_value = b""
    with pytest.raises(ConfigurationError, match="No contract code"):
        TimelockAirdrop.at(w3, AIRDROP, account)


def test_deploy_with_mismatched_abi(account, sent):
    w3 = MagicMock()
    w3.eth.contract.return_value.constructor.side_effect = TypeError("Incorrect argument count")
    artifact = ContractArtifact(name="AntiWitchAirdrop", abi=[], bytecode="0x6080")

    with pytest.raises(ConfigurationError, match="do not match AntiWitchAirdrop ABI"):
        TimelockAirdrop.deploy(w3, account, artifact, DeploymentDescriptor(b"\x11" * 32, COLLATERAL, 1))
    assert sent == []
