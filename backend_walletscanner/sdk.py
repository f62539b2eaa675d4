"""
Wallet Scanner API Python client.

Uses the requests library; one method per endpoint the mobile app calls.

Usage:
    from backend_walletscanner.sdk import WalletScannerClient
    client = WalletScannerClient("http://localhost:3000")
    history = client.get_historical_balance("7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU", "1w")
"""

from __future__ import annotations

from typing import Any

import requests


class WalletScannerClientError(Exception):
    """Raised when the API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, response: requests.Response | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class WalletScannerClient:
    """Client for the Wallet Scanner API."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        resp = self._session.request("GET", url, params=params, timeout=self.timeout)
        if not resp.ok:
            detail: Any = resp.text
            if resp.headers.get("content-type", "").startswith("application/json"):
                body = resp.json()
                detail = body.get("message") or body.get("detail") or detail
            raise WalletScannerClientError(
                f"API error: {detail}",
                status_code=resp.status_code,
                response=resp,
            )
        return resp.json()

    def health(self) -> dict[str, str]:
        return self._get("/health")

    # Solana RPC -------------------------------------------------------------

    def validate_wallet(self, address: str) -> dict[str, Any]:
        return self._get(f"/api/solana/validate/{address}")

    def get_balance(self, address: str) -> dict[str, Any]:
        return self._get(f"/api/solana/balance/{address}")

    def get_signatures(self, address: str, limit: int = 20, before: str | None = None) -> dict[str, Any]:
        return self._get(f"/api/solana/transactions/{address}", {"limit": limit, "before": before})

    # Helius -----------------------------------------------------------------

    def get_historical_balance(self, address: str, time_window: str = "1m") -> dict[str, Any]:
        """Balance series: {"address", "dataPoints": [{"timestamp" (ms), "balance" (SOL)}]}."""
        return self._get(f"/api/helius/historical-balance/{address}", {"timeWindow": time_window})

    def get_transactions(
        self, address: str, pages: int = 1, before: str | None = None, limit: int | None = None
    ) -> dict[str, Any]:
        """Whole pages of 100, or one page of `limit` transactions when limit is given."""
        return self._get(
            f"/api/helius/transactions/{address}",
            {"pages": pages, "before": before, "limit": limit},
        )

    def get_all_transactions(self, address: str) -> dict[str, Any]:
        return self._get(f"/api/helius/transactions-all/{address}")

    def get_transactions_by_type(
        self, address: str, pages: int = 1, fetch_all: bool = False
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"pages": pages}
        if fetch_all:
            params["fetchAll"] = "true"
        return self._get(f"/api/helius/transactions-by-type/{address}", params)

    def get_token_balances(self, address: str) -> dict[str, Any]:
        return self._get(f"/api/helius/token-balances/{address}")
