"""
Core — shared exceptions and cross-cutting helpers used by the services and
the API server.
"""

from backend_walletscanner.core.exceptions import (
    BalanceError,
    ConfigurationError,
    HistoricalBalanceError,
    TokenBalancesError,
    TransactionsByTypeError,
    TransactionsError,
    WalletScannerError,
)

__all__ = [
    "BalanceError",
    "ConfigurationError",
    "HistoricalBalanceError",
    "TokenBalancesError",
    "TransactionsByTypeError",
    "TransactionsError",
    "WalletScannerError",
]
