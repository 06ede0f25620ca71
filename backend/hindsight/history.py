"""Lookups over one asset's daily price history."""
from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Sequence

from .errors import NoTradingDayError
from .models import DailyPriceRecord


def month_key(d: date) -> str:
    """Return the ``YYYY-MM`` key for ``d``.

    Keys are zero padded, so sorting them as strings gives chronological order.
    """

    return f"{d.year:04d}-{d.month:02d}"


def close_on_or_after(history: Sequence[DailyPriceRecord], target: date) -> DailyPriceRecord:
    """Return the first record dated on or after ``target``.

    ``history`` must be ascending by date. A purchase on a weekend or holiday
    therefore executes on the next trading day.
    """

    for record in history:
        if record.date >= target:
            return record
    raise NoTradingDayError(f"No trading day on or after {target.isoformat()}")


def monthly_series(
    history: Iterable[DailyPriceRecord],
    since: date | None = None,
) -> Dict[str, float]:
    """Return the last available close of every month in ``history``.

    Records dated before ``since`` are skipped. Later records of a month
    overwrite earlier ones, so the input must be ascending. The returned
    mapping has no guaranteed order.
    """

    closes: Dict[str, float] = {}
    for record in history:
        if since is not None and record.date < since:
            continue
        closes[month_key(record.date)] = record.close
    return closes


__all__ = ["month_key", "close_on_or_after", "monthly_series"]
