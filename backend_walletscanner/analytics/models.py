"""
Balance series models.

A HistoricalBalanceSeries is built fresh per request and never mutated; the
API serializes it as {"address": ..., "dataPoints": [{"timestamp", "balance"}]}.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BalancePoint:
    """Balance in SOL at a moment; timestamp is Unix epoch milliseconds."""

    timestamp: int
    balance: float

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, "balance": self.balance}


@dataclass(frozen=True)
class HistoricalBalanceSeries:
    """Chronological (oldest first) balance checkpoints; the last one is the current balance."""

    address: str
    points: tuple[BalancePoint, ...]

    @property
    def current_balance(self) -> float:
        return self.points[-1].balance

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "dataPoints": [p.to_dict() for p in self.points],
        }
