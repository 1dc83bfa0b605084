"""RPC clock control against a mocked provider."""

from unittest.mock import MagicMock

import pytest

from timelock_harness.chain.clock import RpcTestClock
from timelock_harness.errors import ClockControlError


@pytest.fixture
def w3():
    w3 = MagicMock()
    w3.provider.make_request.return_value = {"jsonrpc": "2.0", "id": 1, "result": 0}
    w3.eth.get_block.return_value = {"timestamp": 1_700_000_123}
    return w3


def test_increase_time_sends_seconds(w3):
    w3.provider.make_request.return_value = {"jsonrpc": "2.0", "id": 1, "result": 1}
    clock = RpcTestClock(w3)

    assert clock.increase_time(1) == 1
    w3.provider.make_request.assert_called_once_with("evm_increaseTime", [1])


def test_increase_time_parses_hex_result(w3):
    w3.provider.make_request.return_value = {"jsonrpc": "2.0", "id": 1, "result": "0x3c"}
    assert RpcTestClock(w3).increase_time(60) == 60


def test_increase_time_rejects_negative(w3):
    with pytest.raises(ValueError):
        RpcTestClock(w3).increase_time(-1)
    w3.provider.make_request.assert_not_called()


def test_mine_sends_evm_mine(w3):
    RpcTestClock(w3).mine()
    w3.provider.make_request.assert_called_once_with("evm_mine", [])


def test_rpc_error_raises(w3):
    w3.provider.make_request.return_value = {
        "jsonrpc": "2.0",
        "id": 1,
        "error": {"code": -32601, "message": "the method evm_increaseTime does not exist"},
    }
    with pytest.raises(ClockControlError, match="evm_increaseTime") as exc_info:
        RpcTestClock(w3).increase_time(1)
    assert exc_info.value.error["code"] == -32601


def test_now_reads_latest_block(w3):
    assert RpcTestClock(w3).now() == 1_700_000_123
    w3.eth.get_block.assert_called_once_with("latest")


def test_snapshot_and_revert(w3):
    clock = RpcTestClock(w3)
    w3.provider.make_request.return_value = {"jsonrpc": "2.0", "id": 1, "result": "0x1"}
    snapshot_id = clock.snapshot()

    w3.provider.make_request.return_value = {"jsonrpc": "2.0", "id": 2, "result": True}
    assert clock.revert(snapshot_id) is True
    w3.provider.make_request.assert_called_with("evm_revert", ["0x1"])


def test_refused_revert_returns_false(w3):
    w3.provider.make_request.return_value = {"jsonrpc": "2.0", "id": 1, "result": False}
    assert RpcTestClock(w3).revert("0x9") is False
