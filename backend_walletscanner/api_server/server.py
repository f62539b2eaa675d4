"""
FastAPI server — wallet lookups for the mobile client.

Mounts the Solana and Helius routers under /api, answers health checks on /
and /health, and renders service errors as {"error", "message"} bodies.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend_walletscanner import __version__
from backend_walletscanner.api_server.helius_routes import router as helius_router
from backend_walletscanner.api_server.middleware import RequestLoggingMiddleware
from backend_walletscanner.api_server.solana_routes import router as solana_router
from backend_walletscanner.config import get_settings
from backend_walletscanner.config.env import mask_secret_url
from backend_walletscanner.core.exceptions import ConfigurationError, WalletScannerError
from backend_walletscanner.scanner_logging import configure_structlog, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_structlog(settings.log_level, settings.log_format)
    logger.info(
        "api_started",
        solana_rpc_url=mask_secret_url(settings.solana_rpc_url),
        helius_api_url=settings.helius_api_url,
        helius_key_configured=bool(settings.helius_api_key),
        rate_limit_requests=settings.rate_limit_requests,
        rate_limit_window_sec=settings.rate_limit_window_sec,
    )
    yield
    logger.info("api_stopped")


app = FastAPI(
    title="Backend Wallet Scanner API",
    description="Solana wallet balance, history, transactions and token holdings.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(solana_router, prefix="/api")
app.include_router(helius_router, prefix="/api")


@app.get("/")
def root() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}


@app.exception_handler(WalletScannerError)
def wallet_scanner_error_handler(request: Request, exc: WalletScannerError) -> JSONResponse:
    """Service failures are client-visible 400s; missing configuration is a 500."""
    status_code = 500 if isinstance(exc, ConfigurationError) else 400
    if status_code == 500:
        logger.error("api_configuration_error", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def route_summary() -> list[dict[str, Any]]:
    """Mounted API routes (path + methods), for startup logging."""
    out: list[dict[str, Any]] = []
    for route in app.routes:
        methods = getattr(route, "methods", None)
        if methods and route.path.startswith("/api"):
            out.append({"path": route.path, "methods": sorted(methods)})
    return out
