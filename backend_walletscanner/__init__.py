"""
Backend Wallet Scanner — HTTP backend for the mobile wallet inspection app.

Looks up a Solana wallet's balance, transaction history, balance-over-time
series and token holdings. Forwards to the public Solana RPC endpoint and the
Helius enrichment API; keeps no state of its own.
"""

__version__ = "0.1.0"
