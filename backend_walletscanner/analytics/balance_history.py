"""
Balance history reconstruction.

Walks a wallet's transaction history backwards from its current balance to
derive a balance-over-time series:

- Page through the transaction feed (newest first) until the window start is
  passed or the feed is exhausted; keep only transactions inside the window.
- Anchor the series at (now, current balance), fetched independently.
- For each transaction, newest to oldest, undo its native-SOL effect on the
  wallet (transfers in/out, fee if the wallet paid it) to get the balance just
  before it. Results below zero are clamped to zero.

Only native transfers and fees are seen. Rent, program-internal lamport
changes and similar non-transfer mutations are not, so intermediate points
are approximations; the last point is always the supplied current balance.
"""

from __future__ import annotations

import time
from typing import Callable

from backend_walletscanner.analytics.models import BalancePoint, HistoricalBalanceSeries
from backend_walletscanner.analytics.time_window import TimeWindow
from backend_walletscanner.helius.models import HeliusTransaction, TransactionPage
from backend_walletscanner.scanner_logging import get_logger
from backend_walletscanner.utils.wallet_utils import LAMPORTS_PER_SOL, lamports_to_sol

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 100
DEFAULT_BATCH_DELAY_SEC = 0.2

# fetch_page(address, before_signature, limit) -> TransactionPage (newest first)
FetchPage = Callable[[str, "str | None", int], TransactionPage]
# fetch_balance(address) -> current balance in SOL
FetchBalance = Callable[[str], float]


def collect_window_transactions(
    fetch_page: FetchPage,
    address: str,
    window_start_ms: int,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    batch_delay_sec: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> list[HeliusTransaction]:
    """
    Fetch pages sequentially until the oldest record precedes window_start_ms,
    a page comes back short or empty, or the feed reports no more records.
    Supplier errors propagate unchanged.
    """
    collected: list[HeliusTransaction] = []
    before: str | None = None
    pages = 0
    while True:
        page = fetch_page(address, before, page_size)
        batch = page.transactions
        if not batch:
            break
        pages += 1
        oldest_ms = min(tx.timestamp_ms for tx in batch)
        collected.extend(tx for tx in batch if tx.timestamp_ms >= window_start_ms)
        logger.debug(
            "balance_history_page",
            wallet_id=address,
            page=pages,
            batch_size=len(batch),
            kept=len(collected),
            oldest_ms=oldest_ms,
        )
        if len(batch) < page_size or not page.has_more or oldest_ms < window_start_ms:
            break
        cursor = page.next_before or batch[-1].signature
        if cursor == before:
            # feed returned the same page again; stop instead of looping
            logger.warning("balance_history_cursor_stalled", wallet_id=address, before=before)
            break
        before = cursor
        if batch_delay_sec > 0:
            sleep(batch_delay_sec)
    return collected


def reconstruct_balance_points(
    address: str,
    transactions: list[HeliusTransaction],
    current_balance: float,
    now_ms: int,
) -> list[BalancePoint]:
    """
    Return chronological balance points ending with (now_ms, current_balance).

    Each transaction contributes the balance just before it, at its own
    timestamp. Arithmetic runs in lamports so repeated runs are identical.
    Transactions sharing a timestamp collapse into one point holding the
    balance before all of them; a transaction stamped at or after now_ms only
    moves the running balance, so the anchor stays last.
    """
    running = round(current_balance * LAMPORTS_PER_SOL)
    points = [BalancePoint(timestamp=now_ms, balance=current_balance)]
    for tx in sorted(transactions, key=lambda t: t.timestamp, reverse=True):
        running = max(0, running - tx.net_lamport_change(address))
        last = points[-1]
        if tx.timestamp_ms >= last.timestamp:
            if len(points) > 1:
                points[-1] = BalancePoint(timestamp=last.timestamp, balance=lamports_to_sol(running))
            continue
        points.append(BalancePoint(timestamp=tx.timestamp_ms, balance=lamports_to_sol(running)))
    points.reverse()
    return points


class BalanceHistoryReconstructor:
    """
    Builds a HistoricalBalanceSeries from a transaction feed and a balance source.

    Stateless between calls; both suppliers are plain callables so the Helius
    service and tests can plug in their own.
    """

    def __init__(
        self,
        fetch_page: FetchPage,
        fetch_balance: FetchBalance,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        batch_delay_sec: float = DEFAULT_BATCH_DELAY_SEC,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self._fetch_page = fetch_page
        self._fetch_balance = fetch_balance
        self._page_size = page_size
        self._batch_delay_sec = batch_delay_sec
        self._clock = clock
        self._sleep = sleep

    def reconstruct(
        self, address: str, window: "TimeWindow | str | None" = TimeWindow.MONTH
    ) -> HistoricalBalanceSeries:
        time_window = TimeWindow.parse(window)
        now_ms = int(self._clock() * 1000)
        window_start_ms = time_window.start_ms(now_ms)

        transactions = collect_window_transactions(
            self._fetch_page,
            address,
            window_start_ms,
            page_size=self._page_size,
            batch_delay_sec=self._batch_delay_sec,
            sleep=self._sleep,
        )
        current_balance = self._fetch_balance(address)
        points = reconstruct_balance_points(address, transactions, current_balance, now_ms)

        logger.info(
            "balance_history_reconstructed",
            wallet_id=address,
            time_window=time_window.value,
            transactions=len(transactions),
            points=len(points),
        )
        return HistoricalBalanceSeries(address=address, points=tuple(points))
