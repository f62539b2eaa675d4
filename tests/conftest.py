"""
Pytest fixtures for wallet scanner tests. No network: provider calls are faked.
"""

from __future__ import annotations

from typing import Any

import pytest

from backend_walletscanner.config import Settings
from backend_walletscanner.helius.models import HeliusTransaction, TransactionPage

# Valid Solana pubkeys (base58, 32 bytes)
VALID_WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
VALID_WALLET_2 = "So11111111111111111111111111111111111111112"
LAMPORTS = 1_000_000_000


@pytest.fixture(autouse=True)
def _isolated_globals():
    """Fresh settings cache and shared rate limiter for every test."""
    from backend_walletscanner.config.settings import get_settings
    from backend_walletscanner.core.rate_limiter import reset_rate_limiter_for_test

    get_settings.cache_clear()
    reset_rate_limiter_for_test()
    yield
    get_settings.cache_clear()
    reset_rate_limiter_for_test()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        helius_api_key="test-key",
        helius_api_url="https://helius.test",
        helius_rpc_url="https://rpc.helius.test/?api-key=test-key",
        solana_rpc_url="https://solana.test",
        rate_limit_requests=1000,
        history_batch_delay_sec=0.0,
        page_delay_sec=0.0,
    )


@pytest.fixture
def make_tx():
    """Factory: HeliusTransaction from a few fields, as the Helius API would send it."""

    def _make(
        signature: str,
        timestamp: int,
        transfers: list[tuple[str, str, int]] | None = None,
        *,
        fee: int = 0,
        fee_payer: str = "",
        tx_type: str = "TRANSFER",
    ) -> HeliusTransaction:
        item: dict[str, Any] = {
            "signature": signature,
            "timestamp": timestamp,
            "fee": fee,
            "feePayer": fee_payer,
            "type": tx_type,
            "source": "SYSTEM_PROGRAM",
            "description": "",
            "slot": 1000 + timestamp,
            "nativeTransfers": [
                {"fromUserAccount": src, "toUserAccount": dst, "amount": amount}
                for src, dst, amount in transfers or []
            ],
            "tokenTransfers": [],
            "transactionError": None,
        }
        return HeliusTransaction.from_api_item(item)

    return _make


class FakeFeed:
    """Newest-first transaction feed honouring the `before` cursor; records every call."""

    def __init__(self, transactions: list[HeliusTransaction]) -> None:
        self.transactions = sorted(transactions, key=lambda t: t.timestamp, reverse=True)
        self.calls: list[tuple[str, str | None, int]] = []

    def fetch_page(self, address: str, before: str | None, limit: int) -> TransactionPage:
        self.calls.append((address, before, limit))
        start = 0
        if before is not None:
            sigs = [t.signature for t in self.transactions]
            start = sigs.index(before) + 1
        return TransactionPage.from_batch(self.transactions[start:start + limit], limit)


@pytest.fixture
def fake_feed_cls():
    return FakeFeed
