"""Core package for the Hindsight portfolio analytics engine."""

from .errors import AnalysisError, InvalidPriceError, MissingFieldError, NoTradingDayError
from .models import (
    AnalysisResult,
    CrisisEvent,
    CrisisPerformance,
    Currency,
    DailyPriceRecord,
    MonthlyPoint,
    Position,
    PositionValuation,
    Quote,
    YearExtreme,
)
from .pipeline import AnalysisRequest, analyze, build_monthly_series

__all__ = [
    "AnalysisError",
    "InvalidPriceError",
    "MissingFieldError",
    "NoTradingDayError",
    "AnalysisResult",
    "CrisisEvent",
    "CrisisPerformance",
    "Currency",
    "DailyPriceRecord",
    "MonthlyPoint",
    "Position",
    "PositionValuation",
    "Quote",
    "YearExtreme",
    "AnalysisRequest",
    "analyze",
    "build_monthly_series",
]
