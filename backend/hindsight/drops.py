"""Month-over-month drop detection."""
from __future__ import annotations

import math
from typing import Iterable, List

from .models import MonthlyPoint


def detect_drops(series: Iterable[MonthlyPoint], threshold_pct: float) -> List[MonthlyPoint]:
    """Return the points that fell by at least ``threshold_pct`` percent.

    The sign of ``threshold_pct`` is ignored (15 and -15 both mean a 15% fall).
    Points keep their order in ``series``.
    """

    if not math.isfinite(threshold_pct):
        raise ValueError(f"Drop threshold must be a finite number, got {threshold_pct!r}")
    limit = -abs(threshold_pct) / 100
    return [
        point
        for point in series
        if point.month_over_month_change is not None and point.month_over_month_change <= limit
    ]


__all__ = ["detect_drops"]
