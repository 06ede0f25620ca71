"""Pydantic schemas exposed by the API."""

from .analysis import (
    AnalysisRequestSchema,
    AnalysisResponse,
    CrisisPerformanceSchema,
    MonthlyPointSchema,
    PortfolioTotalsSchema,
    PositionInput,
    PositionValuationSchema,
    YearExtremeSchema,
)
from .symbols import SymbolSuggestionSchema

__all__ = [
    "AnalysisRequestSchema",
    "AnalysisResponse",
    "CrisisPerformanceSchema",
    "MonthlyPointSchema",
    "PortfolioTotalsSchema",
    "PositionInput",
    "PositionValuationSchema",
    "YearExtremeSchema",
    "SymbolSuggestionSchema",
]
