"""FastAPI application: wires the refresh pipeline and the push endpoints."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .market import QuoteFetcher, QuoteProvider, create_quote_provider
from .portfolio import (
    CycleScheduler,
    HoldingsRegistry,
    RefreshPipeline,
    SubscriberHub,
    create_stream_router,
    load_holdings,
)

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    provider: QuoteProvider | None = None,
    registry: HoldingsRegistry | None = None,
) -> FastAPI:
    """Build the app. ``provider`` and ``registry`` override the configured ones."""
    settings = settings or Settings.from_env()
    registry = registry or load_holdings(settings.holdings_file)
    provider = provider or create_quote_provider(settings)

    hub = SubscriberHub()
    fetcher = QuoteFetcher(provider, timeout=settings.quote_timeout)
    pipeline = RefreshPipeline(registry, fetcher, hub)
    scheduler = CycleScheduler(pipeline, interval=settings.refresh_interval)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await scheduler.start()
        try:
            yield
        finally:
            await scheduler.stop()
            await provider.close()

    app = FastAPI(title="Portfolio Pulse", lifespan=lifespan)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET"], allow_headers=["*"])
    app.include_router(create_stream_router(hub, scheduler, queue_size=settings.sink_queue_size))

    app.state.settings = settings
    app.state.hub = hub
    app.state.scheduler = scheduler
    app.state.pipeline = pipeline
    return app


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("yfinance").setLevel(logging.WARNING)


def build() -> FastAPI:
    """ASGI factory: ``uvicorn app.main:build --factory``."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return create_app(settings)
