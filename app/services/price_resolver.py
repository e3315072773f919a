from __future__ import annotations

import random
import threading
from typing import Callable, Optional, Sequence

from app.errors import UpstreamPriceUnavailableError
from app.integrations.stock_proxy import StockProxyClient
from app.schemas.quote import PriceResolution
from app.services.like_registry import normalize_symbol

PriceSource = Callable[[str], Optional[float]]

SYNTHETIC_SOURCE = "synthetic"
SYNTHETIC_PRICE_CEILING = 1000.0


class ProxyCandidateSource:
    """One URL shape of the stock proxy, queried as an independent source."""

    def __init__(self, client: StockProxyClient, shape: str) -> None:
        self.client = client
        self.shape = shape
        self.name = f"proxy:{shape}"

    def __call__(self, symbol: str) -> float | None:
        return self.client.get_price(self.client.candidate_url(self.shape, symbol))


class PriceResolver:
    """Sequential price lookup over ordered sources with a synthetic last resort."""

    def __init__(
        self,
        sources: Sequence[PriceSource],
        *,
        fallback_enabled: bool = True,
        random_fn: Callable[[], float] | None = None,
    ) -> None:
        self.sources = list(sources)
        self.fallback_enabled = fallback_enabled
        self.random_fn = random_fn or random.random

        self._lock = threading.Lock()
        self.resolutions = 0
        self.candidate_attempts = 0
        self.candidate_failures = 0
        self.upstream_hits = 0
        self.synthetic_fallbacks = 0

    @classmethod
    def from_proxy_client(cls, client: StockProxyClient, **kwargs) -> "PriceResolver":
        sources = [ProxyCandidateSource(client, shape) for shape in client.shape_names()]
        return cls(sources, **kwargs)

    @staticmethod
    def _source_name(source: PriceSource) -> str:
        return str(getattr(source, "name", getattr(source, "__name__", "source")))

    def _count(self, counter: str) -> None:
        with self._lock:
            setattr(self, counter, getattr(self, counter) + 1)

    def _query(self, source: PriceSource, symbol: str) -> float | None:
        self._count("candidate_attempts")
        try:
            price = source(symbol)
        except Exception:
            price = None
        if price is None:
            self._count("candidate_failures")
        return price

    def synthetic_price(self) -> float:
        price = round(self.random_fn() * SYNTHETIC_PRICE_CEILING, 2)
        return min(max(price, 0.0), SYNTHETIC_PRICE_CEILING - 0.01)

    def resolve(self, symbol: str) -> PriceResolution:
        key = normalize_symbol(symbol)
        self._count("resolutions")

        for source in self.sources:
            price = self._query(source, key)
            if price is not None:
                self._count("upstream_hits")
                return PriceResolution(
                    symbol=key,
                    price=price,
                    source=self._source_name(source),
                    synthetic=False,
                )

        if not self.fallback_enabled:
            print(f"[PRICE][upstream_exhausted] symbol={key} candidates={len(self.sources)}", flush=True)
            raise UpstreamPriceUnavailableError("UPSTREAM_PRICE_UNAVAILABLE")

        price = self.synthetic_price()
        self._count("synthetic_fallbacks")
        print(
            f"[PRICE][synthetic_fallback] symbol={key} candidates={len(self.sources)} price={price}",
            flush=True,
        )
        return PriceResolution(symbol=key, price=price, source=SYNTHETIC_SOURCE, synthetic=True)

    def resolve_price(self, symbol: str) -> float:
        return self.resolve(symbol).price

    def metrics(self) -> dict[str, int | bool]:
        with self._lock:
            return {
                "resolutions": self.resolutions,
                "candidate_attempts": self.candidate_attempts,
                "candidate_failures": self.candidate_failures,
                "upstream_hits": self.upstream_hits,
                "synthetic_fallbacks": self.synthetic_fallbacks,
                "fallback_enabled": self.fallback_enabled,
            }
