"""
Main entrypoint: FastAPI server for the wallet scanner.

Listens on all interfaces so the mobile app can reach it over the LAN, and logs
both the local and the network URL at startup.

Env: HELIUS_API_KEY, SOLANA_RPC_URL, API_HOST, PORT, LOG_LEVEL, etc.

Equivalent: uvicorn backend_walletscanner.api_server.app:app --host 0.0.0.0 --port 3000
"""

import socket

# Configure structured JSON logging before other imports that may log
from backend_walletscanner.scanner_logging import configure_structlog, get_logger

logger = get_logger("main")


def get_local_ip_address() -> str:
    """First non-loopback IPv4 address of this machine, or 'localhost'."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # No packet is sent; connect() only picks the outbound interface.
        sock.connect(("10.255.255.255", 1))
        return sock.getsockname()[0]
    except OSError:
        return "localhost"
    finally:
        sock.close()


def main() -> None:
    from backend_walletscanner.config import get_settings

    settings = get_settings()
    configure_structlog(settings.log_level, settings.log_format)

    from backend_walletscanner.api_server.app import app
    from backend_walletscanner.api_server.server import route_summary
    import uvicorn

    local_ip = get_local_ip_address()
    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        local_url=f"http://localhost:{settings.api_port}",
        network_url=f"http://{local_ip}:{settings.api_port}",
        routes=len(route_summary()),
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
