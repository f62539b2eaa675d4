"""
Helius package — enhanced-transaction feed, balance lookups and token holdings.

HeliusClient speaks HTTP to Helius and Solana RPC; HeliusService shapes the
results for the API (backend_walletscanner.helius.service).
"""

from backend_walletscanner.helius.models import (
    HeliusTransaction,
    NativeTransfer,
    TokenInfo,
    TokenTransfer,
    TransactionPage,
)

__all__ = [
    "HeliusTransaction",
    "NativeTransfer",
    "TokenInfo",
    "TokenTransfer",
    "TransactionPage",
]
