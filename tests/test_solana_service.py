"""
SolanaService over a mocked solana-py Client.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from solders.pubkey import Pubkey
from solders.signature import Signature

from backend_walletscanner.core.exceptions import BalanceError, TransactionsError
from backend_walletscanner.core.rate_limiter import SlidingWindowRateLimiter
from backend_walletscanner.solana_rpc.models import SignatureInfo
from backend_walletscanner.solana_rpc.service import SolanaService

WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"


def _status(signature: str, slot: int, block_time: int | None = 1_700_000_000, err=None):
    return SimpleNamespace(
        signature=signature,
        slot=slot,
        err=err,
        block_time=block_time,
        memo=None,
        confirmation_status="finalized",
    )


@pytest.fixture
def rpc() -> MagicMock:
    return MagicMock()


@pytest.fixture
def limiter() -> MagicMock:
    return MagicMock(spec=SlidingWindowRateLimiter)


@pytest.fixture
def service(settings, rpc, limiter) -> SolanaService:
    return SolanaService(settings, client=rpc, rate_limiter=limiter)


def test_validate_wallet(service):
    assert service.validate_wallet(f" {WALLET} ") == {"isValid": True, "address": WALLET}
    assert service.validate_wallet("0OIl") == {"isValid": False, "address": "0OIl"}


def test_get_balance(service, rpc, limiter):
    rpc.get_balance.return_value = SimpleNamespace(value=250_000_000)
    assert service.get_balance(WALLET) == {"balance": 0.25, "address": WALLET}
    rpc.get_balance.assert_called_once_with(Pubkey.from_string(WALLET))
    limiter.acquire.assert_called_once()


def test_get_balance_rpc_failure_is_tagged(service, rpc):
    rpc.get_balance.side_effect = RuntimeError("node unavailable")
    with pytest.raises(BalanceError):
        service.get_balance(WALLET)


def test_get_balance_invalid_address_is_tagged(service, rpc):
    with pytest.raises(BalanceError):
        service.get_balance("not-a-wallet")
    rpc.get_balance.assert_not_called()


def test_get_transactions_page(service, rpc):
    rpc.get_signatures_for_address.return_value = SimpleNamespace(
        value=[_status("sig-a", 30), _status("sig-b", 20), _status("sig-c", 10)]
    )
    result = service.get_transactions(WALLET, limit=2)

    args, kwargs = rpc.get_signatures_for_address.call_args
    assert args == (Pubkey.from_string(WALLET),)
    assert kwargs == {"before": None, "limit": 3}
    assert result["hasMore"] is True
    assert result["nextBefore"] == "sig-b"
    assert result["transactions"][0] == {
        "signature": "sig-a",
        "slot": 30,
        "err": None,
        "blockTime": 1_700_000_000,
        "memo": None,
        "confirmationStatus": "finalized",
    }


def test_get_transactions_with_cursor(service, rpc):
    cursor = str(Signature.default())
    rpc.get_signatures_for_address.return_value = SimpleNamespace(value=[_status("sig-z", 1)])
    result = service.get_transactions(WALLET, limit=20, before=cursor)

    assert rpc.get_signatures_for_address.call_args.kwargs["before"] == Signature.default()
    assert result["hasMore"] is False
    assert result["nextBefore"] == "sig-z"


def test_get_transactions_empty(service, rpc):
    rpc.get_signatures_for_address.return_value = SimpleNamespace(value=[])
    result = service.get_transactions(WALLET)
    assert result == {"transactions": [], "address": WALLET, "hasMore": False, "nextBefore": None}


def test_get_transactions_failure_is_tagged(service, rpc):
    rpc.get_signatures_for_address.side_effect = RuntimeError("timeout")
    with pytest.raises(TransactionsError):
        service.get_transactions(WALLET)


def test_signature_info_from_rpc_item():
    info = SignatureInfo.from_rpc_item(
        {
            "signature": "s",
            "slot": "7",
            "err": {"InstructionError": [0, "Custom"]},
            "blockTime": None,
            "confirmationStatus": "Confirmed",
        }
    )
    assert info.slot == 7
    assert info.err == {"InstructionError": [0, "Custom"]}
    assert info.confirmation_status == "confirmed"
    assert info.to_dict()["blockTime"] is None


class _FinalizedStatus:
    def __str__(self) -> str:
        return "TransactionConfirmationStatus.Finalized"


def test_signature_info_enum_status():
    status = _status("s", 1, err="InstructionError")
    status.confirmation_status = _FinalizedStatus()
    info = SignatureInfo.from_rpc_status(status)
    assert info.confirmation_status == "finalized"
    assert info.err == "InstructionError"
