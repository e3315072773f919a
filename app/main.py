from __future__ import annotations

import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.routes import router
from app.config.settings import get_settings
from app.services.wiring import configure_services, ensure_services, reset_services

__all__ = ["app", "configure_services", "ensure_services", "reset_services"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_services(app)
    settings = app.state.get_settings()
    print(
        f"[APP][start] proxy_base={settings.STOCK_PROXY_BASE} "
        f"fallback_enabled={int(settings.STOCK_PRICE_FALLBACK_ENABLED)}",
        flush=True,
    )
    try:
        yield
    finally:
        print("[APP][stop]", flush=True)


app = FastAPI(title="Stock Price Checker", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)
app.include_router(router, prefix="/api")


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    print(f"[APP][unhandled_error] path={request.url.path} error={exc!r}", flush=True)
    print("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), flush=True)
    return JSONResponse(status_code=500, content={"detail": "server error"})


@app.get("/", response_class=PlainTextResponse)
def home():
    return "Stock Price Checker API - /api/stock-prices"


# NOTE: services are built on first use so app import does not read env.
app.state.get_settings = get_settings
reset_services(app)
