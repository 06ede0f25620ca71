"""FX conversion helpers."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .models import Currency


def usable_rate(rate: float | None) -> float | None:
    """Return ``rate`` when it is a finite positive number, otherwise ``None``."""

    if rate is None or not math.isfinite(rate) or rate <= 0:
        return None
    return rate


@dataclass(frozen=True)
class FXRateProvider:
    """Convert between USD and EUR with one current rate (USD per EUR).

    The same rate is applied to every date, so historical values converted to
    EUR are an approximation.
    """

    usd_per_eur: float | None = None

    def to_usd(self, amount: float, currency: Currency | str) -> float:
        """Return ``amount`` expressed in USD.

        EUR amounts without a usable rate are returned unchanged, i.e. treated
        as if they were already USD.
        """

        if Currency(currency) is Currency.USD:
            return amount
        rate = usable_rate(self.usd_per_eur)
        if rate is None:
            return amount
        return amount * rate

    def to_eur(self, value_usd: float) -> float | None:
        """Return ``value_usd`` in EUR, or ``None`` when no rate is available."""

        rate = usable_rate(self.usd_per_eur)
        if rate is None:
            return None
        return value_usd / rate


__all__ = ["FXRateProvider", "usable_rate"]
