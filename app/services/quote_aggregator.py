from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Sequence

from app.errors import StockSymbolRequiredError, TooManySymbolsError
from app.schemas.quote import (
    ComparisonResponse,
    RelativeStockQuote,
    SingleStockResponse,
    StockQuote,
)
from app.services.identity import anonymize_address
from app.services.like_registry import LikeRegistry, normalize_symbol
from app.services.price_resolver import PriceResolver

_LIKE_TRUE_VALUES = ("true", "on")
MAX_SYMBOLS = 2


def is_like_requested(value: Any) -> bool:
    if value is True:
        return True
    return isinstance(value, str) and value in _LIKE_TRUE_VALUES


def normalize_symbols(symbols: str | Sequence[str] | None) -> list[str]:
    if symbols is None:
        raw: Sequence[str] = []
    elif isinstance(symbols, str):
        raw = [symbols]
    else:
        raw = symbols

    out = [normalize_symbol(s) for s in raw if s is not None and str(s).strip()]
    if not out:
        raise StockSymbolRequiredError("stock query param is required")
    if len(out) > MAX_SYMBOLS:
        raise TooManySymbolsError("at most two stock symbols are supported")
    return out


class QuoteAggregator:
    """Builds stock price responses: one quote, or a pair with relative likes."""

    def __init__(self, *, price_resolver: PriceResolver, like_registry: LikeRegistry) -> None:
        self.price_resolver = price_resolver
        self.like_registry = like_registry

    def _single(self, symbol: str, like_requested: bool, identity: str) -> SingleStockResponse:
        price = self.price_resolver.resolve_price(symbol)
        if like_requested:
            self.like_registry.register_like(symbol, identity)
        return SingleStockResponse(
            stockData=StockQuote(stock=symbol, price=price, likes=self.like_registry.count(symbol))
        )

    def _compare(
        self, symbol_a: str, symbol_b: str, like_requested: bool, identity: str
    ) -> ComparisonResponse:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="price-resolve") as pool:
            future_a = pool.submit(self.price_resolver.resolve_price, symbol_a)
            future_b = pool.submit(self.price_resolver.resolve_price, symbol_b)
            price_a = future_a.result()
            price_b = future_b.result()

        if like_requested:
            self.like_registry.register_like(symbol_a, identity)
            self.like_registry.register_like(symbol_b, identity)

        likes_a = self.like_registry.count(symbol_a)
        likes_b = self.like_registry.count(symbol_b)
        print(
            f"[QUOTE][compare] symbols={symbol_a},{symbol_b} likes={likes_a},{likes_b} "
            f"like_requested={int(like_requested)}",
            flush=True,
        )
        return ComparisonResponse(
            stockData=[
                RelativeStockQuote(stock=symbol_a, price=price_a, rel_likes=likes_a - likes_b),
                RelativeStockQuote(stock=symbol_b, price=price_b, rel_likes=likes_b - likes_a),
            ]
        )

    def aggregate(
        self,
        symbols: str | Sequence[str] | None,
        like_requested: bool,
        caller_address: str | None,
    ) -> SingleStockResponse | ComparisonResponse:
        requested = normalize_symbols(symbols)
        identity = anonymize_address(caller_address)

        if len(requested) == 1:
            return self._single(requested[0], like_requested, identity)
        return self._compare(requested[0], requested[1], like_requested, identity)
