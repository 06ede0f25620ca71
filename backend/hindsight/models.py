"""Domain models used by the Hindsight portfolio analytics engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Mapping, Optional, Sequence


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"


@dataclass(frozen=True)
class DailyPriceRecord:
    """One trading day of market data for a single asset."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: Optional[float] = None


@dataclass(frozen=True)
class Quote:
    """Latest quote for a symbol; ``close`` is missing when the feed reports N/D."""

    symbol: str
    close: Optional[float]
    raw: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Position:
    """A hypothetical purchase entered by the user."""

    id: int
    ticker: str
    amount: Optional[float]
    currency: Currency = Currency.USD
    purchase_date: Optional[date] = None


@dataclass(frozen=True)
class PositionValuation:
    """Share count and current value derived for one position."""

    position_id: int
    symbol: str
    purchase_date_used: date
    purchase_close: float
    amount_usd: float
    amount_original: float
    currency: Currency
    shares: float
    latest_price: float
    latest_price_source: str
    current_value_usd: float


@dataclass(frozen=True)
class PortfolioTotals:
    """Portfolio level sums over all position valuations."""

    invested_usd: float
    invested_original_eur: float
    invested_original_usd: float
    current_value_usd: float
    current_value_eur: Optional[float]
    pl_usd: float
    pl_pct: float


@dataclass(frozen=True)
class HoldingSeries:
    """Month-end closes of one position paired with its share count."""

    symbol: str
    shares: float
    closes: Mapping[str, float]


@dataclass(frozen=True)
class MonthlyPoint:
    month: str
    value_usd: float
    month_over_month_change: Optional[float] = None


@dataclass(frozen=True)
class YearExtreme:
    year: str
    min_value_usd: float
    min_month: str
    max_value_usd: float
    max_month: str
    min_value_eur: Optional[float] = None
    max_value_eur: Optional[float] = None


@dataclass(frozen=True)
class CrisisEvent:
    """A fixed historical market-stress window, months as ``YYYY-MM``."""

    id: str
    name: str
    start_month: str
    end_month: str


@dataclass(frozen=True)
class CrisisPerformance:
    """Portfolio behaviour inside one crisis window.

    Every measurement is ``None`` when the window lies outside the available
    data. ``recovery_month`` is ``None`` when the pre-drawdown peak was never
    regained in the series.
    """

    id: str
    name: str
    start_month: str
    end_month: str
    start_value: Optional[float] = None
    end_value: Optional[float] = None
    abs_change: Optional[float] = None
    pct_change: Optional[float] = None
    max_drawdown: Optional[float] = None
    peak_value: Optional[float] = None
    peak_month: Optional[str] = None
    trough_value: Optional[float] = None
    trough_month: Optional[str] = None
    recovery_month: Optional[str] = None
    months_to_recovery_from_start: Optional[int] = None
    months_to_recovery_from_trough: Optional[int] = None


@dataclass(frozen=True)
class AnalysisResult:
    valuations: Sequence[PositionValuation]
    totals: PortfolioTotals
    monthly_series: Sequence[MonthlyPoint]
    drops: Sequence[MonthlyPoint]
    year_extremes: Sequence[YearExtreme]
    crisis_performances: Sequence[CrisisPerformance]
    usd_per_eur: Optional[float] = None
