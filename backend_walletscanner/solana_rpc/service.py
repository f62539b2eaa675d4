"""
Solana service — wallet validation, balance and signature paging via solana-py.
"""

from __future__ import annotations

from typing import Any

from solana.rpc.api import Client
from solders.pubkey import Pubkey
from solders.signature import Signature

from backend_walletscanner.config import Settings, get_settings
from backend_walletscanner.core.exceptions import BalanceError, TransactionsError
from backend_walletscanner.core.rate_limiter import SlidingWindowRateLimiter, get_rate_limiter
from backend_walletscanner.scanner_logging import get_logger
from backend_walletscanner.solana_rpc.models import SignatureInfo
from backend_walletscanner.utils.wallet_utils import lamports_to_sol, normalize_wallet

logger = get_logger(__name__)

MAX_SIGNATURES_LIMIT = 1000


class SolanaService:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: Client | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client or Client(
            self._settings.solana_rpc_url, timeout=self._settings.request_timeout_sec
        )
        self._rate_limiter = rate_limiter or get_rate_limiter()

    def validate_wallet(self, address: str) -> dict[str, Any]:
        try:
            return {"isValid": True, "address": normalize_wallet(address)}
        except ValueError:
            return {"isValid": False, "address": address}

    def get_balance(self, address: str) -> dict[str, Any]:
        try:
            pubkey = Pubkey.from_string(address.strip())
            self._rate_limiter.acquire()
            resp = self._client.get_balance(pubkey)
            lamports = int(resp.value)
        except Exception as e:
            logger.error("solana_balance_failed", wallet_id=address, error=str(e))
            raise BalanceError() from e
        return {"balance": lamports_to_sol(lamports), "address": str(pubkey)}

    def get_transactions(
        self,
        address: str,
        *,
        limit: int = 20,
        before: str | None = None,
    ) -> dict[str, Any]:
        """One page of signatures, newest first; fetches limit + 1 to compute hasMore."""
        limit = max(1, min(limit, MAX_SIGNATURES_LIMIT - 1))
        try:
            pubkey = Pubkey.from_string(address.strip())
            before_sig = Signature.from_string(before) if before else None
            self._rate_limiter.acquire()
            resp = self._client.get_signatures_for_address(
                pubkey, before=before_sig, limit=limit + 1
            )
            infos = [SignatureInfo.from_rpc_status(s) for s in resp.value or []]
        except Exception as e:
            logger.error("solana_transactions_failed", wallet_id=address, error=str(e))
            raise TransactionsError() from e

        has_more = len(infos) > limit
        page = infos[:limit]
        return {
            "transactions": [i.to_dict() for i in page],
            "address": str(pubkey),
            "hasMore": has_more,
            "nextBefore": page[-1].signature if page else None,
        }
