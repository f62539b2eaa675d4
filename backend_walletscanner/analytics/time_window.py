"""Lookback windows for the balance history chart."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum

# Solana mainnet launched in 2020; "all" scans back to this floor.
ALL_TIME_FLOOR = datetime(2020, 1, 1, tzinfo=timezone.utc)
ALL_TIME_FLOOR_MS = int(ALL_TIME_FLOOR.timestamp() * 1000)


class TimeWindow(str, Enum):
    DAY = "24h"
    WEEK = "1w"
    MONTH = "1m"
    YEAR = "1y"
    ALL = "all"

    @classmethod
    def parse(cls, raw: "str | TimeWindow | None") -> "TimeWindow":
        """Map a query value to a window; anything unrecognized means one month."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw or "")
        except ValueError:
            return cls.MONTH

    @property
    def lookback(self) -> timedelta | None:
        """Fixed lookback from now; None for ALL, which uses ALL_TIME_FLOOR."""
        return _LOOKBACKS.get(self)

    def start_ms(self, now_ms: int) -> int:
        lookback = self.lookback
        if lookback is None:
            return ALL_TIME_FLOOR_MS
        return now_ms - int(lookback.total_seconds() * 1000)


_LOOKBACKS: dict[TimeWindow, timedelta] = {
    TimeWindow.DAY: timedelta(hours=24),
    TimeWindow.WEEK: timedelta(days=7),
    TimeWindow.MONTH: timedelta(days=30),
    TimeWindow.YEAR: timedelta(days=365),
}
