"""
HTTP client for Helius and Solana JSON-RPC.

- Enhanced transactions: GET {HELIUS_API_URL}/v0/addresses/{address}/transactions
  (newest first, `before` signature cursor, at most 100 per page).
- JSON-RPC (getBalance on the Solana endpoint, getAssetsByOwner on the Helius
  RPC endpoint).

Every request passes through the shared rate limiter first. Transport errors,
non-2xx responses, RPC errors and malformed payloads raise ProviderError; there
is no retry here, callers decide what a failure means.
"""

from __future__ import annotations

import threading
from typing import Any

import requests

from backend_walletscanner.config import Settings, get_settings
from backend_walletscanner.config.env import get_helius_rpc_url, mask_secret_url
from backend_walletscanner.core.rate_limiter import SlidingWindowRateLimiter, get_rate_limiter
from backend_walletscanner.helius.models import HeliusTransaction, TransactionPage
from backend_walletscanner.scanner_logging import get_logger

logger = get_logger(__name__)

MAX_PAGE_LIMIT = 100
DAS_PAGE_LIMIT = 1000


class ProviderError(RuntimeError):
    """A Helius or Solana RPC call failed or returned something unusable."""


class HeliusClient:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        session: requests.Session | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._session = session or requests.Session()
        self._rate_limiter = rate_limiter or get_rate_limiter()
        self._timeout = self._settings.request_timeout_sec
        self._rpc_id = 0
        self._rpc_id_lock = threading.Lock()

    @property
    def api_key(self) -> str:
        return self._settings.helius_api_key

    def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        self._rate_limiter.acquire()
        try:
            resp = self._session.request(method, url, timeout=self._timeout, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            logger.warning(
                "provider_request_failed",
                method=method,
                url=mask_secret_url(url),
                error=str(e),
            )
            raise ProviderError(f"{method} {mask_secret_url(url)} failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"{method} {mask_secret_url(url)} returned invalid JSON") from e

    # -------------------------------------------------------------------------
    # Enhanced transactions
    # -------------------------------------------------------------------------

    def get_transactions_batch(
        self,
        address: str,
        *,
        before: str | None = None,
        limit: int = MAX_PAGE_LIMIT,
    ) -> list[HeliusTransaction]:
        """One raw page of enhanced transactions, newest first."""
        url = f"{self._settings.helius_api_url}/v0/addresses/{address}/transactions"
        params: dict[str, Any] = {"api-key": self.api_key, "limit": limit}
        if before:
            params["before"] = before
        data = self._send("GET", url, params=params)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ProviderError("Helius transactions response is not a list")
        try:
            return [HeliusTransaction.from_api_item(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Malformed Helius transaction: {e}") from e

    def fetch_page(self, address: str, before: str | None, limit: int) -> TransactionPage:
        batch = self.get_transactions_batch(address, before=before, limit=limit)
        return TransactionPage.from_batch(batch, limit)

    # -------------------------------------------------------------------------
    # JSON-RPC
    # -------------------------------------------------------------------------

    def _next_id(self) -> int:
        with self._rpc_id_lock:
            self._rpc_id += 1
            return self._rpc_id

    def rpc_call(self, url: str, method: str, params: Any) -> Any:
        """POST a JSON-RPC request; return `result` (may be None); raise on RPC error."""
        body = {"jsonrpc": "2.0", "id": self._next_id(), "method": method, "params": params}
        data = self._send("POST", url, json=body)
        if not isinstance(data, dict):
            raise ProviderError(f"{method}: response is not a JSON object")
        err = data.get("error")
        if err:
            message = err.get("message", err) if isinstance(err, dict) else err
            raise ProviderError(f"{method} RPC error: {message}")
        return data.get("result")

    def get_balance_lamports(self, address: str) -> int | None:
        """getBalance on the Solana RPC endpoint; None when no result came back."""
        result = self.rpc_call(self._settings.solana_rpc_url, "getBalance", [address])
        if not result:
            return None
        value = result.get("value") if isinstance(result, dict) else result
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ProviderError(f"getBalance returned a non-numeric value: {value!r}") from e

    def get_assets_by_owner(
        self,
        address: str,
        *,
        api_key: str | None = None,
        page: int = 1,
        limit: int = DAS_PAGE_LIMIT,
    ) -> dict[str, Any]:
        """DAS getAssetsByOwner including fungible tokens and the native balance."""
        if api_key:
            url = get_helius_rpc_url(api_key)
        else:
            url = self._settings.helius_rpc_url or get_helius_rpc_url(self.api_key)
        params = {
            "ownerAddress": address,
            "page": page,
            "limit": limit,
            "displayOptions": {"showFungible": True, "showNativeBalance": True},
        }
        result = self.rpc_call(url, "getAssetsByOwner", params)
        if not isinstance(result, dict):
            raise ProviderError("getAssetsByOwner returned no result")
        return result
