"""Schemas for portfolio analysis requests and results."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from hindsight.models import AnalysisResult, Currency, Position


class PositionInput(BaseModel):
    """A purchase as entered by the user; missing fields are reported by the engine."""

    id: int
    ticker: str = ""
    amount: float | None = None
    currency: Currency = Currency.USD
    purchase_date: date | None = None

    def to_position(self) -> Position:
        return Position(
            id=self.id,
            ticker=self.ticker,
            amount=self.amount,
            currency=self.currency,
            purchase_date=self.purchase_date,
        )


class AnalysisRequestSchema(BaseModel):
    positions: list[PositionInput] = Field(default_factory=list)
    drop_threshold_pct: float | None = Field(default=None, ge=1.0, le=100.0)


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PositionValuationSchema(_FromAttributes):
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


class PortfolioTotalsSchema(_FromAttributes):
    invested_usd: float
    invested_original_eur: float
    invested_original_usd: float
    current_value_usd: float
    current_value_eur: float | None = None
    pl_usd: float
    pl_pct: float


class MonthlyPointSchema(_FromAttributes):
    month: str
    value_usd: float
    month_over_month_change: float | None = None


class YearExtremeSchema(_FromAttributes):
    year: str
    min_value_usd: float
    min_month: str
    max_value_usd: float
    max_month: str
    min_value_eur: float | None = None
    max_value_eur: float | None = None


class CrisisPerformanceSchema(_FromAttributes):
    id: str
    name: str
    start_month: str
    end_month: str
    start_value: float | None = None
    end_value: float | None = None
    abs_change: float | None = None
    pct_change: float | None = None
    max_drawdown: float | None = None
    peak_value: float | None = None
    peak_month: str | None = None
    trough_value: float | None = None
    trough_month: str | None = None
    recovery_month: str | None = None
    months_to_recovery_from_start: int | None = None
    months_to_recovery_from_trough: int | None = None


class AnalysisResponse(_FromAttributes):
    valuations: list[PositionValuationSchema]
    totals: PortfolioTotalsSchema
    monthly_series: list[MonthlyPointSchema]
    drops: list[MonthlyPointSchema]
    year_extremes: list[YearExtremeSchema]
    crisis_performances: list[CrisisPerformanceSchema]
    usd_per_eur: float | None = None

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls.model_validate(result, from_attributes=True)


__all__ = [
    "PositionInput",
    "AnalysisRequestSchema",
    "PositionValuationSchema",
    "PortfolioTotalsSchema",
    "MonthlyPointSchema",
    "YearExtremeSchema",
    "CrisisPerformanceSchema",
    "AnalysisResponse",
]
