"""Portfolio behaviour during historical market-stress windows.

For every :class:`CrisisEvent` the analyzer reports the change across the
window, the worst peak-to-point drawdown inside it, and the first month in the
*whole* series (recoveries usually happen after the window closes) at which
the pre-drawdown peak was reached again.
"""
from __future__ import annotations

from typing import List, Sequence

from .models import CrisisEvent, CrisisPerformance, MonthlyPoint

MARKET_EVENTS: tuple[CrisisEvent, ...] = (
    CrisisEvent(id="dotcom", name="Dot-com bubble", start_month="2000-03", end_month="2002-10"),
    CrisisEvent(id="gfc", name="2008 financial crisis", start_month="2007-10", end_month="2009-03"),
    CrisisEvent(id="covid", name="COVID-19 crash", start_month="2020-02", end_month="2020-04"),
    CrisisEvent(
        id="inflation2022",
        name="2022 inflation bear market",
        start_month="2021-11",
        end_month="2022-10",
    ),
)


def months_between(start: str, end: str) -> int:
    """Calendar months from ``start`` to ``end``, both ``YYYY-MM``."""

    start_year, start_month = (int(part) for part in start.split("-"))
    end_year, end_month = (int(part) for part in end.split("-"))
    return (end_year - start_year) * 12 + (end_month - start_month)


def _find_recovery(
    series: Sequence[MonthlyPoint], trough_month: str, peak: float
) -> str | None:
    index = next((i for i, point in enumerate(series) if point.month == trough_month), None)
    if index is None:
        return None
    for point in series[index + 1 :]:
        if point.value_usd >= peak:
            return point.month
    return None


def analyze_crisis(event: CrisisEvent, series: Sequence[MonthlyPoint]) -> CrisisPerformance:
    """Measure one crisis window against the full monthly series."""

    in_range = [p for p in series if event.start_month <= p.month <= event.end_month]
    if not in_range:
        return CrisisPerformance(
            id=event.id,
            name=event.name,
            start_month=event.start_month,
            end_month=event.end_month,
        )

    start_value = in_range[0].value_usd
    end_value = in_range[-1].value_usd
    abs_change = end_value - start_value
    pct_change = abs_change / start_value if start_value > 0 else None

    running_peak = in_range[0].value_usd
    running_peak_month = in_range[0].month
    peak = running_peak
    peak_month = running_peak_month
    trough_value = in_range[0].value_usd
    trough_month = in_range[0].month
    worst_drawdown = 0.0
    for point in in_range:
        if point.value_usd > running_peak:
            running_peak = point.value_usd
            running_peak_month = point.month
        if running_peak > 0:
            drawdown = point.value_usd / running_peak - 1
            if drawdown < worst_drawdown:
                worst_drawdown = drawdown
                trough_value = point.value_usd
                trough_month = point.month
                peak = running_peak
                peak_month = running_peak_month

    if worst_drawdown == 0.0:
        # No decline inside the window: recovery is measured against the
        # highest value reached in it.
        peak = running_peak
        peak_month = running_peak_month

    recovery_month = _find_recovery(series, trough_month, peak)

    months_from_start = None
    months_from_trough = None
    if recovery_month is not None:
        months_from_start = months_between(event.start_month, recovery_month)
        months_from_trough = months_between(trough_month, recovery_month)

    return CrisisPerformance(
        id=event.id,
        name=event.name,
        start_month=event.start_month,
        end_month=event.end_month,
        start_value=start_value,
        end_value=end_value,
        abs_change=abs_change,
        pct_change=pct_change,
        max_drawdown=worst_drawdown,
        peak_value=peak,
        peak_month=peak_month,
        trough_value=trough_value,
        trough_month=trough_month,
        recovery_month=recovery_month,
        months_to_recovery_from_start=months_from_start,
        months_to_recovery_from_trough=months_from_trough,
    )


def analyze_crises(
    series: Sequence[MonthlyPoint],
    events: Sequence[CrisisEvent] = MARKET_EVENTS,
) -> List[CrisisPerformance]:
    return [analyze_crisis(event, series) for event in events]


__all__ = ["MARKET_EVENTS", "months_between", "analyze_crisis", "analyze_crises"]
