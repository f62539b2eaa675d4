"""
Analytics — balance-over-time reconstruction from transaction history.
"""

from backend_walletscanner.analytics.balance_history import (
    BalanceHistoryReconstructor,
    collect_window_transactions,
    reconstruct_balance_points,
)
from backend_walletscanner.analytics.models import BalancePoint, HistoricalBalanceSeries
from backend_walletscanner.analytics.time_window import TimeWindow

__all__ = [
    "BalanceHistoryReconstructor",
    "BalancePoint",
    "HistoricalBalanceSeries",
    "TimeWindow",
    "collect_window_transactions",
    "reconstruct_balance_points",
]
