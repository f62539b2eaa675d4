"""
Helius service — wallet lookups shaped for the mobile client.

Responsibilities:
- Validate addresses, fetch the current SOL balance.
- Reconstruct balance history for a time window (analytics.balance_history).
- Page through enhanced transactions, group them by type.
- List fungible token holdings with prices.

Every public method either returns a JSON-ready dict (camelCase keys, as the
client expects) or raises one tagged WalletScannerError subclass; provider
failures never leak partial results.
"""

from __future__ import annotations

import time
from typing import Any, Callable

from backend_walletscanner.analytics import BalanceHistoryReconstructor, HistoricalBalanceSeries
from backend_walletscanner.config import Settings, get_settings
from backend_walletscanner.core.exceptions import (
    BalanceError,
    ConfigurationError,
    HistoricalBalanceError,
    TokenBalancesError,
    TransactionsByTypeError,
    TransactionsError,
    WalletScannerError,
)
from backend_walletscanner.helius.client import (
    DAS_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    HeliusClient,
    ProviderError,
)
from backend_walletscanner.helius.models import HeliusTransaction, TokenInfo
from backend_walletscanner.scanner_logging import get_logger
from backend_walletscanner.utils.wallet_utils import lamports_to_sol, normalize_wallet

logger = get_logger(__name__)

DEFAULT_TRANSACTIONS_LIMIT = 20
MAX_DAS_PAGES = 10
UNKNOWN_TYPE = "UNKNOWN"


class HeliusService:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: HeliusClient | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings or get_settings()
        if not self._settings.helius_api_key:
            raise ConfigurationError(
                "HELIUS_API_KEY environment variable is not set. "
                "Create a .env file in the project root with HELIUS_API_KEY=your_key_here"
            )
        self._client = client or HeliusClient(self._settings)
        self._clock = clock
        self._sleep = sleep

    # -------------------------------------------------------------------------
    # Wallet
    # -------------------------------------------------------------------------

    def validate_wallet(self, address: str) -> dict[str, Any]:
        try:
            return {"isValid": True, "address": normalize_wallet(address)}
        except ValueError:
            return {"isValid": False, "address": address}

    def get_balance(self, address: str) -> dict[str, Any]:
        """Current balance in SOL from Solana RPC; 0 when the node returns no result."""
        try:
            lamports = self._client.get_balance_lamports(address)
        except ProviderError as e:
            logger.error("helius_balance_failed", wallet_id=address, error=str(e))
            raise BalanceError() from e
        balance = lamports_to_sol(lamports) if lamports is not None else 0.0
        return {"balance": balance, "address": address}

    def _current_balance_sol(self, address: str) -> float:
        return float(self.get_balance(address)["balance"])

    def get_historical_balance(
        self, address: str, time_window: str | None = "1m"
    ) -> HistoricalBalanceSeries:
        """Balance-over-time series for the window (24h, 1w, 1m, 1y, all; default 1m)."""
        reconstructor = BalanceHistoryReconstructor(
            self._client.fetch_page,
            self._current_balance_sol,
            page_size=min(self._settings.history_page_size, MAX_PAGE_LIMIT),
            batch_delay_sec=self._settings.history_batch_delay_sec,
            clock=self._clock,
            sleep=self._sleep,
        )
        try:
            return reconstructor.reconstruct(address, time_window)
        except Exception as e:
            logger.exception("helius_historical_balance_failed", wallet_id=address, error=str(e))
            raise HistoricalBalanceError() from e

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @staticmethod
    def _transaction_response(
        address: str,
        transactions: list[HeliusTransaction],
        has_more: bool,
        next_before: str | None,
    ) -> dict[str, Any]:
        return {
            "count": len(transactions),
            "transactions": [tx.to_dict() for tx in transactions],
            "address": address,
            "hasMore": has_more,
            "nextBefore": next_before,
        }

    def get_transactions(
        self,
        address: str,
        *,
        limit: int = DEFAULT_TRANSACTIONS_LIMIT,
        before: str | None = None,
    ) -> dict[str, Any]:
        """
        One page of transactions. Asks for limit + 1 to learn whether more exist,
        so limit is capped one below the provider maximum.
        """
        limit = max(1, min(limit, MAX_PAGE_LIMIT - 1))
        try:
            batch = self._client.get_transactions_batch(address, before=before, limit=limit + 1)
        except ProviderError as e:
            logger.error("helius_transactions_failed", wallet_id=address, error=str(e))
            raise TransactionsError() from e
        has_more = len(batch) > limit
        page = batch[:limit]
        next_before = page[-1].signature if page else None
        return self._transaction_response(address, page, has_more, next_before)

    def fetch_transactions(
        self,
        address: str,
        *,
        pages: int | None = None,
        before: str | None = None,
    ) -> dict[str, Any]:
        """
        Pages of MAX_PAGE_LIMIT transactions until the feed runs out or `pages`
        have been read; pages=None reads the whole history. Waits between
        pages to stay under the provider's rate limit.
        """
        if pages is not None and pages < 1:
            pages = 1
        transactions: list[HeliusTransaction] = []
        cursor = before
        has_more = True
        page = 0
        try:
            while True:
                batch = self._client.get_transactions_batch(
                    address, before=cursor, limit=MAX_PAGE_LIMIT
                )
                page += 1
                transactions.extend(batch)
                has_more = len(batch) >= MAX_PAGE_LIMIT
                if batch:
                    cursor = batch[-1].signature
                logger.info(
                    "helius_transactions_page",
                    wallet_id=address,
                    page=page,
                    batch_size=len(batch),
                    total=len(transactions),
                )
                if not has_more or (pages is not None and page >= pages):
                    break
                self._sleep(self._settings.page_delay_sec)
        except ProviderError as e:
            logger.error("helius_transactions_failed", wallet_id=address, page=page, error=str(e))
            raise TransactionsError() from e
        return self._transaction_response(
            address, transactions, has_more, cursor if has_more else None
        )

    def get_transactions_by_type(
        self,
        address: str,
        *,
        before: str | None = None,
        fetch_all: bool = False,
        pages: int = 1,
    ) -> dict[str, Any]:
        try:
            result = self.fetch_transactions(
                address, pages=None if fetch_all else pages, before=before
            )
        except WalletScannerError as e:
            raise TransactionsByTypeError() from e

        by_type: dict[str, list[dict[str, Any]]] = {}
        for tx in result["transactions"]:
            by_type.setdefault(tx.get("type") or UNKNOWN_TYPE, []).append(tx)

        return {
            "address": address,
            "transactionsByType": by_type,
            "types": [{"type": t, "count": len(txs)} for t, txs in by_type.items()],
            "totalTransactions": result["count"],
        }

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def get_token_balances(self, address: str, api_key: str | None = None) -> dict[str, Any]:
        """Fungible holdings, most valuable first, plus the native SOL balance."""
        tokens: list[TokenInfo] = []
        native_lamports = 0
        try:
            for page in range(1, MAX_DAS_PAGES + 1):
                result = self._client.get_assets_by_owner(address, api_key=api_key, page=page)
                if page == 1:
                    native = result.get("nativeBalance") or {}
                    native_lamports = int(native.get("lamports") or 0)
                items = result.get("items") or []
                for asset in items:
                    token = TokenInfo.from_das_asset(asset)
                    if token is not None:
                        tokens.append(token)
                if len(items) < DAS_PAGE_LIMIT:
                    break
        except (ProviderError, TypeError, ValueError) as e:
            logger.error("helius_token_balances_failed", wallet_id=address, error=str(e))
            raise TokenBalancesError() from e

        tokens.sort(key=lambda t: t.value, reverse=True)
        return {
            "address": address,
            "nativeBalance": lamports_to_sol(native_lamports),
            "tokens": [t.to_dict() for t in tokens],
            "totalTokens": len(tokens),
        }
