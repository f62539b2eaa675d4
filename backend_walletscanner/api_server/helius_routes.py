"""
FastAPI router: /api/helius/* — Helius-backed wallet lookups.

Query parameter names (timeWindow, fetchAll, apiKey) match what the mobile
client sends.
"""

from __future__ import annotations

import functools
from typing import Any

from fastapi import APIRouter, Depends, Query

from backend_walletscanner.api_server.models import (
    BalanceResponse,
    HistoricalBalanceResponse,
    TokenBalancesResponse,
    TransactionResponse,
    TransactionsByTypeResponse,
    WalletResponse,
)
from backend_walletscanner.helius.service import HeliusService
from backend_walletscanner.scanner_logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/helius", tags=["helius"])


@functools.lru_cache(maxsize=1)
def get_helius_service() -> HeliusService:
    """Dependency: one HeliusService per process; raises ConfigurationError without an API key."""
    return HeliusService()


@router.get("/validate/{address}", response_model=WalletResponse)
def validate_wallet(address: str, service: HeliusService = Depends(get_helius_service)) -> Any:
    return service.validate_wallet(address)


@router.get("/balance/{address}", response_model=BalanceResponse)
def get_balance(address: str, service: HeliusService = Depends(get_helius_service)) -> Any:
    return service.get_balance(address)


@router.get("/historical-balance/{address}", response_model=HistoricalBalanceResponse)
def get_historical_balance(
    address: str,
    time_window: str = Query("1m", alias="timeWindow", description="24h | 1w | 1m | 1y | all"),
    service: HeliusService = Depends(get_helius_service),
) -> Any:
    return service.get_historical_balance(address, time_window).to_dict()


@router.get("/transactions/{address}", response_model=TransactionResponse)
def get_transactions(
    address: str,
    pages: int = Query(1, ge=1),
    before: str | None = Query(None),
    limit: int | None = Query(None, ge=1, le=99, description="Single page of this size instead of whole pages"),
    service: HeliusService = Depends(get_helius_service),
) -> Any:
    logger.info("helius_transactions_requested", wallet_id=address, pages=pages, limit=limit)
    if limit is not None:
        return service.get_transactions(address, limit=limit, before=before)
    return service.fetch_transactions(address, pages=pages, before=before)


@router.get("/transactions-by-type/{address}", response_model=TransactionsByTypeResponse)
def get_transactions_by_type(
    address: str,
    before: str | None = Query(None),
    fetch_all: bool = Query(False, alias="fetchAll"),
    limit: str | None = Query(None, description="'all' is the same as fetchAll=true"),
    pages: int = Query(1, ge=1),
    service: HeliusService = Depends(get_helius_service),
) -> Any:
    fetch_all = fetch_all or (limit or "").strip().lower() == "all"
    logger.info("helius_transactions_by_type_requested", wallet_id=address, fetch_all=fetch_all)
    return service.get_transactions_by_type(
        address, before=before, fetch_all=fetch_all, pages=pages
    )


@router.get("/transactions-all/{address}", response_model=TransactionResponse)
def get_all_transactions(address: str, service: HeliusService = Depends(get_helius_service)) -> Any:
    return service.fetch_transactions(address)


@router.get("/token-balances/{address}", response_model=TokenBalancesResponse)
def get_token_balances(
    address: str,
    api_key: str | None = Query(None, alias="apiKey", description="Override the configured Helius key"),
    service: HeliusService = Depends(get_helius_service),
) -> Any:
    return service.get_token_balances(address, api_key=api_key)
