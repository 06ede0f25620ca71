"""Errors raised by the analytics engine.

Each error carries a single message suitable for showing to the user; any of
them aborts the whole calculation.
"""
from __future__ import annotations


class AnalysisError(ValueError):
    """Base class for calculation failures."""


class MissingFieldError(AnalysisError):
    """A position lacks its ticker, amount or purchase date."""


class NoTradingDayError(AnalysisError):
    """The purchase date lies after every available trading day."""


class InvalidPriceError(AnalysisError):
    """A purchase or current price is zero, negative or not a finite number."""


__all__ = [
    "AnalysisError",
    "MissingFieldError",
    "NoTradingDayError",
    "InvalidPriceError",
]
