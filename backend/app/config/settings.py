"""Application configuration and environment helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hindsight.symbols import DEFAULT_EXCHANGE_SUFFIX

DEFAULT_BASE_CURRENCY = "USD"


class AppSettings(BaseSettings):
    """Configuration options for the Hindsight service."""

    model_config = SettingsConfigDict(
        env_prefix="HINDSIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Hindsight Portfolio Backtester")
    base_currency: str = Field(default=DEFAULT_BASE_CURRENCY)
    log_level: str = Field(default="INFO")

    stooq_base_url: str = Field(
        default="https://stooq.com",
        description="Base URL of the Stooq CSV endpoints for history and quotes.",
    )
    stooq_timeout_seconds: float = Field(default=15.0, gt=0)
    symbol_search_url: str = Field(
        default="https://query2.finance.yahoo.com/v1/finance/search",
        description="Endpoint used for ticker autocomplete.",
    )
    symbol_search_limit: int = Field(default=8, ge=1, le=50)

    default_exchange_suffix: str = Field(default=DEFAULT_EXCHANGE_SUFFIX)
    default_drop_threshold_pct: float = Field(default=15.0, ge=1.0, le=100.0)

    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="hindsight")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        hidden = {"telemetry_otlp_endpoint"}
        return {k: ("***" if k in hidden and v else v) for k, v in self.model_dump().items()}


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_BASE_CURRENCY",
    "DEFAULT_EXCHANGE_SUFFIX",
    "get_settings",
]
