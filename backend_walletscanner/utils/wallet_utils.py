"""Wallet validation utilities."""

from solders.pubkey import Pubkey

LAMPORTS_PER_SOL = 1_000_000_000


def normalize_wallet(w: str) -> str:
    """Return the canonical base58 form of w; raises ValueError if invalid."""
    try:
        return str(Pubkey.from_string(w.strip()))
    except Exception as e:
        raise ValueError(f"Invalid Solana wallet address: {w!r}") from e


def lamports_to_sol(lamports: int | float) -> float:
    return lamports / LAMPORTS_PER_SOL
