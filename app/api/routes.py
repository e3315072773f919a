from fastapi import APIRouter, HTTPException, Query, Request

from app.errors import StockSymbolRequiredError, TooManySymbolsError, UpstreamPriceUnavailableError
from app.services.identity import resolve_caller_address
from app.services.quote_aggregator import is_like_requested
from app.services.wiring import ensure_services

router = APIRouter()


def _caller_address(request: Request) -> str:
    client_host = request.client.host if request.client else None
    return resolve_caller_address(request.headers.get('x-forwarded-for'), client_host)


@router.get('/stock-prices')
def get_stock_prices(
    request: Request,
    stock: list[str] | None = Query(default=None),
    stock_array: list[str] | None = Query(default=None, alias='stock[]'),
    like: str | None = None,
):
    aggregator = ensure_services(request.app)
    symbols = (stock or []) + (stock_array or [])
    try:
        result = aggregator.aggregate(
            symbols,
            like_requested=is_like_requested(like),
            caller_address=_caller_address(request),
        )
    except (StockSymbolRequiredError, TooManySymbolsError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UpstreamPriceUnavailableError as exc:
        raise HTTPException(status_code=503, detail='UPSTREAM_PRICE_UNAVAILABLE') from exc
    return result.model_dump()


@router.get('/metrics/quote')
def quote_metrics(request: Request):
    ensure_services(request.app)
    metrics = request.app.state.price_resolver.metrics()
    metrics.update(request.app.state.like_registry.metrics())
    return metrics
