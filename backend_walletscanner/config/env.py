"""
Environment variable loading for the Wallet Scanner backend.

- HELIUS_API_KEY: Helius API key (required by the Helius service)
- HELIUS_API_URL: Helius REST base URL (default https://api.helius.xyz)
- HELIUS_RPC_URL: Helius RPC endpoint for DAS calls (default built from the key)
- SOLANA_RPC_URL: Solana JSON-RPC endpoint (default public mainnet)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_walletscanner/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
HELIUS_API_URL = "https://api.helius.xyz"
HELIUS_MAINNET_URL_TEMPLATE = "https://mainnet.helius-rpc.com/?api-key={key}"


def load_scanner_env() -> None:
    """Load .env from project root. Existing env vars win; safe to call multiple times."""
    if _ENV_PATH.exists():
        load_dotenv(_ENV_PATH, override=False)


def env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


def env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    return float(raw) if raw else default


def get_helius_api_key() -> str:
    load_scanner_env()
    return env_str("HELIUS_API_KEY")


def get_helius_rpc_url(api_key: str | None = None) -> str:
    """
    Resolve the Helius RPC URL used for DAS (token) calls.
    Order: HELIUS_RPC_URL > template filled with the given or configured key.
    """
    load_scanner_env()
    url = env_str("HELIUS_RPC_URL")
    if url and api_key is None:
        return url
    key = api_key if api_key is not None else get_helius_api_key()
    return HELIUS_MAINNET_URL_TEMPLATE.format(key=key)


def get_solana_rpc_url() -> str:
    load_scanner_env()
    return env_str("SOLANA_RPC_URL") or MAINNET_RPC_URL


def mask_secret_url(url: str) -> str:
    """Mask an api-key query parameter so the URL is safe to log."""
    if "api-key=" not in url:
        return url
    head, _, tail = url.partition("api-key=")
    _, amp, rest = tail.partition("&")
    return f"{head}api-key=***{amp}{rest}"
