"""Per-year minimum and maximum portfolio values."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

from .fx import FXRateProvider
from .models import MonthlyPoint, YearExtreme


@dataclass
class _YearRange:
    min_value: float
    min_month: str
    max_value: float
    max_month: str


def compute_year_extremes(
    series: Iterable[MonthlyPoint],
    usd_per_eur: float | None = None,
) -> List[YearExtreme]:
    """Reduce a monthly series to one :class:`YearExtreme` per calendar year.

    Points are scanned in the given order; on ties the first month seen is
    kept. EUR figures use the single ``usd_per_eur`` rate when provided.
    """

    ranges: Dict[str, _YearRange] = {}
    for point in series:
        year = point.month[:4]
        current = ranges.get(year)
        if current is None:
            ranges[year] = _YearRange(point.value_usd, point.month, point.value_usd, point.month)
            continue
        if point.value_usd < current.min_value:
            current.min_value = point.value_usd
            current.min_month = point.month
        if point.value_usd > current.max_value:
            current.max_value = point.value_usd
            current.max_month = point.month

    fx = FXRateProvider(usd_per_eur)
    return [
        YearExtreme(
            year=year,
            min_value_usd=item.min_value,
            min_month=item.min_month,
            max_value_usd=item.max_value,
            max_month=item.max_month,
            min_value_eur=fx.to_eur(item.min_value),
            max_value_eur=fx.to_eur(item.max_value),
        )
        for year, item in sorted(ranges.items())
    ]


__all__ = ["compute_year_extremes"]
