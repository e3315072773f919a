from __future__ import annotations

import math
from typing import Any, List, Optional, Tuple
from urllib.parse import quote

import requests

_PRICE_FIELDS = ("latestPrice", "price", "latest_price", "c")
_NESTED_PRICE_FIELDS = ("latestPrice", "price")

# most specific first, proxy root last
_CANDIDATE_SHAPES = (
    ("v1-quote", "{base}/v1/stock/{symbol}/quote"),
    ("stock-path", "{base}/stock/{symbol}"),
    ("root-query", "{base}/?symbol={symbol}"),
    ("quote-query", "{base}/quote?symbol={symbol}"),
    ("root", "{base}"),
)


def _to_price(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price):
        return None
    return price


def extract_price(body: Any) -> Optional[float]:
    """Pull a numeric price out of a proxy response body.

    Known shapes, in order: a top-level price field, the same fields under a
    nested ``quote`` object, then the body itself as a non-zero number or a numeric string.
    """
    if isinstance(body, dict):
        for field in _PRICE_FIELDS:
            price = _to_price(body.get(field))
            if price is not None:
                return price

        nested = body.get("quote")
        if isinstance(nested, dict):
            for field in _NESTED_PRICE_FIELDS:
                price = _to_price(nested.get(field))
                if price is not None:
                    return price
        return None

    if isinstance(body, (int, float)) and not body:
        # a bare 0 body is an empty answer, not a price
        return None
    if isinstance(body, (int, float, str)):
        return _to_price(body)
    return None


class StockProxyClient:
    """HTTP client for the stock price proxy and its known URL shapes."""

    def __init__(
        self,
        base_url: str,
        session: Optional[Any] = None,
        timeout_sec: float = 3.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests
        self.timeout_sec = timeout_sec

    def shape_names(self) -> List[str]:
        return [name for name, _ in _CANDIDATE_SHAPES]

    def candidate_url(self, shape: str, symbol: str) -> str:
        template = dict(_CANDIDATE_SHAPES)[shape]
        return template.format(base=self.base_url, symbol=quote(str(symbol).upper(), safe=""))

    def candidate_urls(self, symbol: str) -> List[Tuple[str, str]]:
        return [(name, self.candidate_url(name, symbol)) for name, _ in _CANDIDATE_SHAPES]

    def fetch(self, url: str) -> Any:
        response = self.session.get(url, timeout=self.timeout_sec)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError:
            return response.text

    def get_price(self, url: str) -> Optional[float]:
        return extract_price(self.fetch(url))
