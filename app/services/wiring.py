from __future__ import annotations

import threading

from fastapi import FastAPI

from app.config.settings import Settings
from app.integrations.stock_proxy import StockProxyClient
from app.services.like_registry import LikeRegistry
from app.services.price_resolver import PriceResolver
from app.services.quote_aggregator import QuoteAggregator

_build_lock = threading.Lock()


def configure_services(app: FastAPI, settings: Settings, like_registry: LikeRegistry | None = None) -> None:
    proxy_client = StockProxyClient(
        base_url=settings.STOCK_PROXY_BASE,
        timeout_sec=settings.STOCK_PRICE_TIMEOUT_SEC,
    )
    app.state.like_registry = like_registry or LikeRegistry()
    app.state.price_resolver = PriceResolver.from_proxy_client(
        proxy_client,
        fallback_enabled=settings.STOCK_PRICE_FALLBACK_ENABLED,
    )
    app.state.quote_aggregator = QuoteAggregator(
        price_resolver=app.state.price_resolver,
        like_registry=app.state.like_registry,
    )


def reset_services(app: FastAPI) -> None:
    app.state.like_registry = None
    app.state.price_resolver = None
    app.state.quote_aggregator = None


def ensure_services(app: FastAPI) -> QuoteAggregator:
    """Build the services from ``app.state.get_settings()`` on first use."""
    aggregator = getattr(app.state, "quote_aggregator", None)
    if aggregator is not None:
        return aggregator
    with _build_lock:
        if getattr(app.state, "quote_aggregator", None) is None:
            configure_services(app, app.state.get_settings())
        return app.state.quote_aggregator
