"""
FastAPI router: /api/solana/* — plain Solana RPC lookups.
"""

from __future__ import annotations

import functools
from typing import Any

from fastapi import APIRouter, Depends, Query

from backend_walletscanner.api_server.models import (
    BalanceResponse,
    SignaturesResponse,
    WalletResponse,
)
from backend_walletscanner.solana_rpc.service import SolanaService

router = APIRouter(prefix="/solana", tags=["solana"])


@functools.lru_cache(maxsize=1)
def get_solana_service() -> SolanaService:
    """Dependency: one SolanaService per process."""
    return SolanaService()


@router.get("/validate/{address}", response_model=WalletResponse)
def validate_wallet(address: str, service: SolanaService = Depends(get_solana_service)) -> Any:
    return service.validate_wallet(address)


@router.get("/balance/{address}", response_model=BalanceResponse)
def get_balance(address: str, service: SolanaService = Depends(get_solana_service)) -> Any:
    return service.get_balance(address)


@router.get("/transactions/{address}", response_model=SignaturesResponse)
def get_transactions(
    address: str,
    limit: int = Query(20, ge=1, le=999),
    before: str | None = Query(None),
    service: SolanaService = Depends(get_solana_service),
) -> Any:
    return service.get_transactions(address, limit=limit, before=before)
