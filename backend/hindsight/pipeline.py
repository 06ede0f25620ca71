"""Pipeline functions for building the monthly portfolio series and its analyses."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Sequence

from .crises import MARKET_EVENTS, analyze_crises
from .drops import detect_drops
from .extremes import compute_year_extremes
from .fx import usable_rate
from .history import monthly_series
from .models import (
    AnalysisResult,
    CrisisEvent,
    DailyPriceRecord,
    HoldingSeries,
    MonthlyPoint,
    Position,
    PositionValuation,
    Quote,
)
from .symbols import DEFAULT_EXCHANGE_SUFFIX, normalize_ticker
from .valuation import summarize_valuations, validate_position, value_position

logger = logging.getLogger(__name__)

DEFAULT_DROP_THRESHOLD_PCT = 15.0


@dataclass(frozen=True)
class AnalysisRequest:
    """Everything one calculation needs, already fetched.

    ``histories`` and ``quotes`` are keyed by normalized symbol.
    """

    positions: Sequence[Position]
    histories: Mapping[str, Sequence[DailyPriceRecord]]
    quotes: Mapping[str, Quote] = field(default_factory=dict)
    usd_per_eur: float | None = None
    drop_threshold_pct: float = DEFAULT_DROP_THRESHOLD_PCT
    events: Sequence[CrisisEvent] = MARKET_EVENTS
    exchange_suffix: str = DEFAULT_EXCHANGE_SUFFIX

    def symbol_for(self, position: Position) -> str:
        return normalize_ticker(position.ticker, self.exchange_suffix)


def holding_series(
    valuation: PositionValuation,
    history: Sequence[DailyPriceRecord],
    position: Position,
) -> HoldingSeries:
    """Pair a position's month-end closes since its purchase date with its shares."""

    return HoldingSeries(
        symbol=valuation.symbol,
        shares=valuation.shares,
        closes=monthly_series(history, since=position.purchase_date),
    )


def build_monthly_series(holdings: Iterable[HoldingSeries]) -> List[MonthlyPoint]:
    """Aggregate holdings into one monthly portfolio value series.

    A holding only contributes in months it has a close for, so each position
    enters the sum from its own purchase month. Months summing to zero or less
    are left out.
    """

    holdings = list(holdings)
    months = sorted({month for holding in holdings for month in holding.closes})

    values: List[tuple[str, float]] = []
    for month in months:
        value = 0.0
        for holding in holdings:
            close = holding.closes.get(month)
            if close is not None:
                value += holding.shares * close
        if value > 0:
            values.append((month, value))

    series: List[MonthlyPoint] = []
    for index, (month, value) in enumerate(values):
        change = None
        if index > 0:
            previous = values[index - 1][1]
            if previous > 0:
                change = value / previous - 1
        series.append(MonthlyPoint(month=month, value_usd=value, month_over_month_change=change))
    return series


def analyze(request: AnalysisRequest) -> AnalysisResult:
    """Run the whole calculation.

    Positions are validated before anything is valued; any error aborts the
    run and no partial result is produced.
    """

    for position in request.positions:
        validate_position(position)

    usd_per_eur = usable_rate(request.usd_per_eur)
    valuations: List[PositionValuation] = []
    holdings: List[HoldingSeries] = []
    for position in request.positions:
        symbol = request.symbol_for(position)
        history = request.histories.get(symbol, ())
        valuation = value_position(
            position,
            history,
            request.quotes.get(symbol),
            usd_per_eur,
            exchange_suffix=request.exchange_suffix,
        )
        valuations.append(valuation)
        holdings.append(holding_series(valuation, history, position))

    series = build_monthly_series(holdings)
    logger.debug(
        "Valued %d positions into %d monthly points", len(valuations), len(series)
    )

    return AnalysisResult(
        valuations=valuations,
        totals=summarize_valuations(valuations, usd_per_eur),
        monthly_series=series,
        drops=detect_drops(series, request.drop_threshold_pct),
        year_extremes=compute_year_extremes(series, usd_per_eur),
        crisis_performances=analyze_crises(series, request.events),
        usd_per_eur=usd_per_eur,
    )


__all__ = [
    "DEFAULT_DROP_THRESHOLD_PCT",
    "AnalysisRequest",
    "holding_series",
    "build_monthly_series",
    "analyze",
]
