"""
Application-level exceptions.

Each service failure surfaces as one tagged error carrying a stable code and a
generic user-facing message; the API renders it as {"error": code, "message": msg}.
"""

from __future__ import annotations

from typing import Any


class WalletScannerError(Exception):
    """Base error with a stable error code for API responses."""

    code = "WALLET_SCANNER_ERROR"
    default_message = "Wallet scanner request failed"

    def __init__(self, message: str | None = None, *, code: str | None = None) -> None:
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message}


class ConfigurationError(WalletScannerError):
    code = "CONFIGURATION_ERROR"
    default_message = "Service is not configured"


class BalanceError(WalletScannerError):
    code = "BALANCE_ERROR"
    default_message = "Failed to fetch balance"


class HistoricalBalanceError(WalletScannerError):
    code = "HISTORICAL_BALANCE_ERROR"
    default_message = "Failed to fetch historical balance"


class TransactionsError(WalletScannerError):
    code = "TRANSACTIONS_ERROR"
    default_message = "Failed to fetch transactions"


class TransactionsByTypeError(WalletScannerError):
    code = "TRANSACTIONS_BY_TYPE_ERROR"
    default_message = "Failed to fetch transactions by type"


class TokenBalancesError(WalletScannerError):
    code = "TOKEN_BALANCES_ERROR"
    default_message = "Failed to fetch token balances"
