"""FastAPI application entry point for the Crowdfund Ledger.

Lifecycle:
    1. Startup: Initialize logging.
    2. Running: Serve REST API + MCP tools on a single Uvicorn process.
    3. Shutdown: Log the final post count.

The ledger is created once per app and lives on ``app.state.ledger``; the
MCP server is mounted at /mcp and shares it.

Run with:
    uv run uvicorn crowdfund_ledger.main:app --reload --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from crowdfund_ledger.config import Settings, get_settings
from crowdfund_ledger.logging_config import get_logger, setup_logging
from crowdfund_ledger.services.ledger_service import CrowdfundLedger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle."""
    settings: Settings = app.state.settings

    setup_logging(
        log_level=settings.app_log_level,
        json_logs=not settings.is_development,
    )
    logger = get_logger(__name__)
    logger.info(
        "app.starting",
        env=settings.app_env,
        debug=settings.app_debug,
        clock_mode=settings.clock_mode,
    )
    logger.info("app.started", host=settings.app_host, port=settings.app_port)

    yield

    logger.info("app.shutting_down", post_count=len(app.state.ledger.get_post_ids()))
    logger.info("app.stopped")


def create_app(
    settings: Settings | None = None,
    ledger: CrowdfundLedger | None = None,
) -> FastAPI:
    """Application factory — creates and configures the FastAPI app."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Crowdfund Ledger",
        description=(
            "Escrow-style crowdfunding ledger. "
            "Pay the creator when the goal is met, refund everyone when it isn't."
        ),
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.app_debug,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    app.state.settings = settings
    app.state.ledger = ledger or CrowdfundLedger.from_settings(settings)

    # --- Middleware ---
    from crowdfund_ledger.api.middleware import setup_middleware

    setup_middleware(app)

    # --- REST API Routes ---
    from crowdfund_ledger.api.routes.health import router as health_router
    from crowdfund_ledger.api.routes.ledger import router as ledger_router
    from crowdfund_ledger.api.routes.posts import router as posts_router

    app.include_router(health_router)
    app.include_router(posts_router)
    app.include_router(ledger_router)

    # --- MCP Server (mounted as sub-application) ---
    from crowdfund_ledger.mcp_server.tools import create_mcp_server

    mcp = create_mcp_server(app.state.ledger)
    app.mount("/mcp", mcp.sse_app())

    return app


# The app instance used by Uvicorn
app = create_app()
