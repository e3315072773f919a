import os
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator

DEFAULT_STOCK_PROXY_BASE = "https://stock-price-checker-proxy.freecodecamp.rocks"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class Settings(BaseModel):
    STOCK_PROXY_BASE: str = DEFAULT_STOCK_PROXY_BASE
    STOCK_PRICE_TIMEOUT_SEC: float = Field(default=3.0, gt=0)
    STOCK_PRICE_FALLBACK_ENABLED: bool = True

    @field_validator("STOCK_PROXY_BASE")
    @classmethod
    def normalize_base(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("STOCK_PROXY_BASE must not be empty")
        return value

    @field_validator("STOCK_PRICE_FALLBACK_ENABLED", mode="before")
    @classmethod
    def parse_flag(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ValueError(f"invalid boolean flag: {value!r}")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        raw = {
            "STOCK_PROXY_BASE": os.getenv("STOCK_PROXY_BASE"),
            "STOCK_PRICE_TIMEOUT_SEC": os.getenv("STOCK_PRICE_TIMEOUT_SEC"),
            "STOCK_PRICE_FALLBACK_ENABLED": os.getenv("STOCK_PRICE_FALLBACK_ENABLED"),
        }
        # unset variables fall back to the model defaults
        return cls.model_validate({k: v for k, v in raw.items() if v not in (None, "")})


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
