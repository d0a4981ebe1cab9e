"""LemonPing HTTP server — FastAPI app factory and uvicorn entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from lemonping import __version__
from lemonping.channels import build_dock
from lemonping.config import Settings, get_settings
from lemonping.webhooks.handlers import WEBHOOK_PATH, register_webhook_routes

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger."""
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT, force=True)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the relay app.

    Args:
        settings: Explicit settings; defaults to the process-wide instance
        transport: Optional httpx transport for outbound calls (tests pass a MockTransport)
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with httpx.AsyncClient(
            timeout=settings.notify_timeout_seconds, transport=transport
        ) as client:
            app.state.http_client = client
            yield

    app = FastAPI(title="LemonPing", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.dock = build_dock(settings)

    @app.get("/")
    async def health():
        """Liveness check."""
        return {"status": "LemonPing is running 🍋", "version": __version__}

    register_webhook_routes(app)
    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)

    logger.info("LemonPing running on port %d", settings.port)
    logger.info("Webhook path: %s", WEBHOOK_PATH)
    if not app.state.dock.active_channels:
        logger.warning("No chat channels configured — sales will only be logged")

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
