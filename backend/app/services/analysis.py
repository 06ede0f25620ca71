"""Fetch market data for a set of positions and run the analytics engine."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Protocol, Sequence

from opentelemetry import trace

from app.config import AppSettings, get_settings
from hindsight.models import AnalysisResult, DailyPriceRecord, Position, Quote
from hindsight.pipeline import AnalysisRequest, analyze
from hindsight.symbols import normalize_ticker
from hindsight.valuation import validate_position

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class MarketDataSource(Protocol):
    """What the service needs from a price provider."""

    async def fetch_history(self, symbol: str) -> list[DailyPriceRecord]:
        ...

    async def fetch_latest_quotes(self, symbols: Sequence[str]) -> dict[str, Quote]:
        ...

    async def fetch_exchange_rate(self) -> float:
        ...


async def _gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Like ``asyncio.gather`` but cancels and awaits the siblings of a failed task."""

    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except Exception:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def _quotes_or_empty(source: MarketDataSource, symbols: list[str]) -> dict[str, Quote]:
    try:
        return await source.fetch_latest_quotes(symbols)
    except RuntimeError as exc:
        logger.warning("Latest quotes unavailable, using last historical closes: %s", exc)
        return {}


async def _rate_or_none(source: MarketDataSource) -> float | None:
    try:
        return await source.fetch_exchange_rate()
    except RuntimeError as exc:
        logger.warning("EUR/USD rate unavailable, EUR amounts treated as USD: %s", exc)
        return None


async def run_analysis(
    positions: Sequence[Position],
    source: MarketDataSource,
    *,
    drop_threshold_pct: float | None = None,
    settings: AppSettings | None = None,
) -> AnalysisResult:
    """Fetch every input concurrently, then compute the analysis in one pass.

    Missing fields fail before any request is made. A failed history fetch
    cancels the fetches still in flight and propagates; failed quote or FX
    fetches fall back as documented in
    :func:`hindsight.valuation.value_position`.
    """

    settings = settings or get_settings()
    for position in positions:
        validate_position(position)

    suffix = settings.default_exchange_suffix
    symbols = list(dict.fromkeys(normalize_ticker(p.ticker, suffix) for p in positions))
    threshold = (
        drop_threshold_pct if drop_threshold_pct is not None else settings.default_drop_threshold_pct
    )

    with tracer.start_as_current_span("hindsight.analysis") as span:
        span.set_attribute("hindsight.positions", len(positions))
        span.set_attribute("hindsight.symbols", len(symbols))
        logger.info("Fetching history for %d symbols", len(symbols))

        histories, quotes, usd_per_eur = await _gather_or_cancel(
            _gather_or_cancel(*(source.fetch_history(symbol) for symbol in symbols)),
            _quotes_or_empty(source, symbols),
            _rate_or_none(source),
        )

        request = AnalysisRequest(
            positions=tuple(positions),
            histories=dict(zip(symbols, histories)),
            quotes=quotes,
            usd_per_eur=usd_per_eur,
            drop_threshold_pct=threshold,
            exchange_suffix=suffix,
        )
        result = analyze(request)
        span.set_attribute("hindsight.months", len(result.monthly_series))

    logger.info(
        "Analysis complete: %d positions, %d months, %d drops",
        len(result.valuations),
        len(result.monthly_series),
        len(result.drops),
    )
    return result


__all__ = ["MarketDataSource", "run_analysis"]
