"""
Application settings.

Responsibilities:
- Load configuration from environment variables and .env files.
- Provide defaults for optional settings.
- Expose typed settings (RPC URLs, API port, rate limits, paging) for use
  across the services and the API server.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

from backend_walletscanner.config.env import (
    HELIUS_API_URL,
    env_float,
    env_int,
    env_str,
    get_helius_api_key,
    get_helius_rpc_url,
    get_solana_rpc_url,
    load_scanner_env,
)

DEFAULT_API_PORT = 3000
DEFAULT_REQUEST_TIMEOUT_SEC = 30.0
DEFAULT_RATE_LIMIT_REQUESTS = 10
DEFAULT_RATE_LIMIT_WINDOW_SEC = 1.0
DEFAULT_HISTORY_PAGE_SIZE = 100  # Helius maximum per request
DEFAULT_HISTORY_BATCH_DELAY_SEC = 0.2
DEFAULT_PAGE_DELAY_SEC = 0.3


@dataclass(frozen=True)
class Settings:
    """Typed view of the environment. Build with get_settings() or directly in tests."""

    helius_api_key: str = ""
    helius_api_url: str = HELIUS_API_URL
    helius_rpc_url: str = ""
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    api_host: str = "0.0.0.0"
    api_port: int = DEFAULT_API_PORT
    request_timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC
    rate_limit_requests: int = DEFAULT_RATE_LIMIT_REQUESTS
    rate_limit_window_sec: float = DEFAULT_RATE_LIMIT_WINDOW_SEC
    history_page_size: int = DEFAULT_HISTORY_PAGE_SIZE
    history_batch_delay_sec: float = DEFAULT_HISTORY_BATCH_DELAY_SEC
    page_delay_sec: float = DEFAULT_PAGE_DELAY_SEC
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls) -> "Settings":
        load_scanner_env()
        return cls(
            helius_api_key=get_helius_api_key(),
            helius_api_url=env_str("HELIUS_API_URL", HELIUS_API_URL).rstrip("/"),
            helius_rpc_url=get_helius_rpc_url(),
            solana_rpc_url=get_solana_rpc_url(),
            api_host=env_str("API_HOST", "0.0.0.0"),
            api_port=env_int("PORT", DEFAULT_API_PORT),
            request_timeout_sec=env_float("REQUEST_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SEC),
            rate_limit_requests=env_int("RATE_LIMIT_REQUESTS", DEFAULT_RATE_LIMIT_REQUESTS),
            rate_limit_window_sec=env_float("RATE_LIMIT_WINDOW_SEC", DEFAULT_RATE_LIMIT_WINDOW_SEC),
            history_page_size=env_int("HISTORY_PAGE_SIZE", DEFAULT_HISTORY_PAGE_SIZE),
            history_batch_delay_sec=env_float("HISTORY_BATCH_DELAY_SEC", DEFAULT_HISTORY_BATCH_DELAY_SEC),
            page_delay_sec=env_float("PAGE_DELAY_SEC", DEFAULT_PAGE_DELAY_SEC),
            log_level=env_str("LOG_LEVEL", "INFO").upper(),
            log_format=env_str("LOG_FORMAT", "json").lower(),
        )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the current application settings.

    Cached after the first call; tests call get_settings.cache_clear() after
    changing the environment.
    """
    return Settings.from_env()
