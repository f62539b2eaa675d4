"""
Structured logging for the Wallet Scanner backend.

JSON logs with timestamp, level, event_type and wallet_id where relevant.
Use get_logger() in all modules.
"""

from backend_walletscanner.scanner_logging.logger import configure_structlog, get_logger

__all__ = ["configure_structlog", "get_logger"]
