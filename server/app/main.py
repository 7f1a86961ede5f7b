"""FastAPI application entrypoint for the Brave Search tool server."""
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from .config import Settings, settings
from .routers import realtime, sessions
from .services.brave_client import BraveSearchClient
from .services.errors import MissingCredentialError
from .services.orchestration import SearchOrchestrator
from .services.rate_limiter import RateLimiter
from .services.sessions import SessionManager
from .services.tools import SERVER_VERSION, ToolGateway

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Instantiate and configure the FastAPI application.

    The search stack is built in the lifespan so the shared HTTP client is
    opened and closed with the server. `transport` replaces the network layer
    of that client, which tests use to stub the Brave API.
    """

    cfg = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not cfg.brave_api_key:
            logger.error("BRAVE_API_KEY environment variable is required")
            raise MissingCredentialError()

        limiter = RateLimiter(per_second=cfg.rate_limit_per_second, per_month=cfg.rate_limit_per_month)
        async with httpx.AsyncClient(timeout=cfg.request_timeout, transport=transport) as http_client:
            client = BraveSearchClient(
                api_key=cfg.brave_api_key,
                rate_limiter=limiter,
                http_client=http_client,
                base_url=cfg.brave_api_base_url,
            )
            gateway = ToolGateway(SearchOrchestrator(client))
            app.state.gateway = gateway
            app.state.sessions = SessionManager(gateway)
            logger.info("Brave Search tool server ready (%d req/s, %d req/month)", limiter.per_second, limiter.per_month)
            yield

    application = FastAPI(
        title="Brave Search Tool Server",
        description="Web and local search tools over the Brave Search API.",
        version=SERVER_VERSION,
        lifespan=lifespan,
    )
    application.include_router(sessions.router)
    application.include_router(realtime.router)

    @application.get("/")
    async def root() -> dict[str, str]:
        """Lightweight health endpoint for service discovery."""
        return {"service": "brave-search", "status": "ok"}

    return application


app = create_app()


def main() -> None:
    if not settings.brave_api_key:
        logger.error("Error: BRAVE_API_KEY environment variable is required")
        sys.exit(1)

    import uvicorn

    logger.info("Brave Search tool server running at http://localhost:%d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
