"""
HeliusService: response shaping and error tagging over a mocked HeliusClient.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from backend_walletscanner.config import Settings
from backend_walletscanner.core.exceptions import (
    BalanceError,
    ConfigurationError,
    HistoricalBalanceError,
    TokenBalancesError,
    TransactionsByTypeError,
    TransactionsError,
)
from backend_walletscanner.helius.client import HeliusClient, ProviderError
from backend_walletscanner.helius.service import HeliusService

WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
OTHER = "So11111111111111111111111111111111111111112"
LAMPORTS = 1_000_000_000
NOW = 1_700_000_000


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(spec=HeliusClient)


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def service(settings, client, sleeps) -> HeliusService:
    return HeliusService(
        settings,
        client=client,
        clock=lambda: float(NOW),
        sleep=sleeps.append,
    )


def _batch(make_tx, start: int, count: int) -> list:
    return [make_tx(f"sig-{i}", NOW - i * 60) for i in range(start, start + count)]


def test_missing_api_key_is_configuration_error():
    with pytest.raises(ConfigurationError) as exc:
        HeliusService(Settings(helius_api_key=""), client=MagicMock(spec=HeliusClient))
    assert exc.value.to_dict()["error"] == "CONFIGURATION_ERROR"
    assert "HELIUS_API_KEY" in exc.value.message


def test_validate_wallet(service):
    assert service.validate_wallet(WALLET) == {"isValid": True, "address": WALLET}
    assert service.validate_wallet("not-a-wallet") == {"isValid": False, "address": "not-a-wallet"}


def test_get_balance_converts_lamports(service, client):
    client.get_balance_lamports.return_value = 1_500_000_000
    assert service.get_balance(WALLET) == {"balance": 1.5, "address": WALLET}


def test_get_balance_without_result_is_zero(service, client):
    client.get_balance_lamports.return_value = None
    assert service.get_balance(WALLET)["balance"] == 0.0


def test_get_balance_failure_is_tagged(service, client):
    client.get_balance_lamports.side_effect = ProviderError("boom")
    with pytest.raises(BalanceError) as exc:
        service.get_balance(WALLET)
    assert exc.value.to_dict() == {"error": "BALANCE_ERROR", "message": "Failed to fetch balance"}


def test_historical_balance_series(service, client, make_tx, fake_feed_cls):
    feed = fake_feed_cls(
        [
            make_tx("recv", NOW - 3600, [(OTHER, WALLET, LAMPORTS)]),
            make_tx("send", NOW - 1800, [(WALLET, OTHER, LAMPORTS // 2)]),
        ]
    )
    client.fetch_page.side_effect = feed.fetch_page
    client.get_balance_lamports.return_value = 2 * LAMPORTS

    series = service.get_historical_balance(WALLET, "24h")

    assert series.to_dict() == {
        "address": WALLET,
        "dataPoints": [
            {"timestamp": (NOW - 3600) * 1000, "balance": 1.5},
            {"timestamp": (NOW - 1800) * 1000, "balance": 2.5},
            {"timestamp": NOW * 1000, "balance": 2.0},
        ],
    }
    assert feed.calls == [(WALLET, None, 100)]


def test_historical_balance_feed_failure_is_tagged(service, client):
    client.fetch_page.side_effect = ProviderError("helius down")
    with pytest.raises(HistoricalBalanceError) as exc:
        service.get_historical_balance(WALLET, "1w")
    assert isinstance(exc.value.__cause__, ProviderError)


def test_historical_balance_balance_failure_is_tagged(service, client, fake_feed_cls):
    client.fetch_page.side_effect = fake_feed_cls([]).fetch_page
    client.get_balance_lamports.side_effect = ProviderError("rpc down")
    with pytest.raises(HistoricalBalanceError):
        service.get_historical_balance(WALLET)


def test_get_transactions_uses_limit_plus_one(service, client, make_tx):
    client.get_transactions_batch.return_value = _batch(make_tx, 0, 3)
    result = service.get_transactions(WALLET, limit=2)

    client.get_transactions_batch.assert_called_once_with(WALLET, before=None, limit=3)
    assert result["count"] == 2
    assert result["hasMore"] is True
    assert result["nextBefore"] == "sig-1"
    assert [t["signature"] for t in result["transactions"]] == ["sig-0", "sig-1"]


def test_get_transactions_last_page(service, client, make_tx):
    client.get_transactions_batch.return_value = _batch(make_tx, 0, 2)
    result = service.get_transactions(WALLET, limit=5, before="cursor")
    client.get_transactions_batch.assert_called_once_with(WALLET, before="cursor", limit=6)
    assert result["hasMore"] is False
    assert result["count"] == 2


def test_get_transactions_limit_capped(service, client):
    client.get_transactions_batch.return_value = []
    result = service.get_transactions(WALLET, limit=500)
    client.get_transactions_batch.assert_called_once_with(WALLET, before=None, limit=100)
    assert result["nextBefore"] is None


def test_fetch_transactions_reads_until_exhausted(service, client, make_tx, sleeps):
    client.get_transactions_batch.side_effect = [
        _batch(make_tx, 0, 100),
        _batch(make_tx, 100, 100),
        _batch(make_tx, 200, 30),
    ]
    result = service.fetch_transactions(WALLET)

    assert result["count"] == 230
    assert result["hasMore"] is False
    assert result["nextBefore"] is None
    befores = [c.kwargs["before"] for c in client.get_transactions_batch.call_args_list]
    assert befores == [None, "sig-99", "sig-199"]
    assert len(sleeps) == 2


def test_fetch_transactions_stops_at_page_count(service, client, make_tx):
    client.get_transactions_batch.side_effect = [
        _batch(make_tx, 0, 100),
        _batch(make_tx, 100, 100),
    ]
    result = service.fetch_transactions(WALLET, pages=2)
    assert result["count"] == 200
    assert result["hasMore"] is True
    assert result["nextBefore"] == "sig-199"
    assert client.get_transactions_batch.call_count == 2


def test_fetch_transactions_failure_is_tagged(service, client, make_tx):
    client.get_transactions_batch.side_effect = [_batch(make_tx, 0, 100), ProviderError("boom")]
    with pytest.raises(TransactionsError):
        service.fetch_transactions(WALLET)


def test_transactions_grouped_by_type(service, client, make_tx):
    client.get_transactions_batch.return_value = [
        make_tx("a", NOW, tx_type="SWAP"),
        make_tx("b", NOW - 1, tx_type="TRANSFER"),
        make_tx("c", NOW - 2, tx_type="SWAP"),
        make_tx("d", NOW - 3, tx_type=""),
    ]
    result = service.get_transactions_by_type(WALLET)

    assert result["address"] == WALLET
    assert result["totalTransactions"] == 4
    assert {t["type"]: t["count"] for t in result["types"]} == {"SWAP": 2, "TRANSFER": 1, "UNKNOWN": 1}
    assert [t["signature"] for t in result["transactionsByType"]["SWAP"]] == ["a", "c"]


def test_transactions_by_type_fetch_all_ignores_pages(service, client, make_tx):
    client.get_transactions_batch.side_effect = [
        _batch(make_tx, 0, 100),
        _batch(make_tx, 100, 100),
        _batch(make_tx, 200, 1),
    ]
    result = service.get_transactions_by_type(WALLET, fetch_all=True, pages=1)
    assert result["totalTransactions"] == 201


def test_transactions_by_type_failure_is_tagged(service, client):
    client.get_transactions_batch.side_effect = ProviderError("boom")
    with pytest.raises(TransactionsByTypeError) as exc:
        service.get_transactions_by_type(WALLET)
    assert exc.value.code == "TRANSACTIONS_BY_TYPE_ERROR"


def _asset(mint: str, ui_amount: float, price: float | None) -> dict:
    price_info = {"price_per_token": price, "total_price": ui_amount * price} if price else {}
    return {
        "interface": "FungibleToken",
        "id": mint,
        "content": {"metadata": {"name": mint, "symbol": mint[:4]}},
        "token_info": {"balance": int(ui_amount * 100), "decimals": 2, "price_info": price_info},
    }


def test_token_balances_sorted_by_value(service, client):
    client.get_assets_by_owner.return_value = {
        "items": [
            _asset("cheap", 10, 0.1),
            {"interface": "V1_NFT", "id": "nft"},
            _asset("pricey", 2, 50.0),
            _asset("unpriced", 1000, None),
        ],
        "nativeBalance": {"lamports": 3 * LAMPORTS},
    }
    result = service.get_token_balances(WALLET)

    assert result["address"] == WALLET
    assert result["nativeBalance"] == 3.0
    assert result["totalTokens"] == 3
    assert [t["mint"] for t in result["tokens"]] == ["pricey", "cheap", "unpriced"]
    client.get_assets_by_owner.assert_called_once_with(WALLET, api_key=None, page=1)


def test_token_balances_pages_through_full_pages(service, client):
    full_page = [_asset(f"m{i}", 1, None) for i in range(1000)]
    client.get_assets_by_owner.side_effect = [
        {"items": full_page, "nativeBalance": {"lamports": 0}},
        {"items": [_asset("last", 1, 1.0)]},
    ]
    result = service.get_token_balances(WALLET, api_key="override")
    assert result["totalTokens"] == 1001
    assert result["tokens"][0]["mint"] == "last"
    pages = [c.kwargs["page"] for c in client.get_assets_by_owner.call_args_list]
    assert pages == [1, 2]
    assert client.get_assets_by_owner.call_args.kwargs["api_key"] == "override"


def test_token_balances_failure_is_tagged(service, client):
    client.get_assets_by_owner.side_effect = ProviderError("das down")
    with pytest.raises(TokenBalancesError):
        service.get_token_balances(WALLET)


def test_malformed_balance_payload_is_tagged(settings):
    """A getBalance result with a non-numeric value surfaces as BALANCE_ERROR."""
    session = MagicMock()
    resp = MagicMock()
    resp.json.return_value = {"jsonrpc": "2.0", "id": 1, "result": {"value": "oops"}}
    session.request.return_value = resp
    real_client = HeliusClient(settings, session=session, rate_limiter=MagicMock())
    service = HeliusService(settings, client=real_client)

    with pytest.raises(BalanceError) as exc:
        service.get_balance(WALLET)
    assert isinstance(exc.value.__cause__, ProviderError)
