"""
Solana RPC package — balance and signature history straight from a Solana node
(solana-py Client), without Helius enrichment.
"""

from backend_walletscanner.solana_rpc.models import SignatureInfo

__all__ = ["SignatureInfo"]
