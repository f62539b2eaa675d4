"""
Configuration for the Wallet Scanner backend.

Settings come from environment variables, optionally loaded from a .env file
at the project root. get_settings() is the single source of truth.
"""

from backend_walletscanner.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
