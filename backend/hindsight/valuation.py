"""Position valuation: share counts, current values and portfolio totals."""
from __future__ import annotations

import math
from typing import Iterable, Sequence

from .errors import InvalidPriceError, MissingFieldError
from .fx import FXRateProvider
from .history import close_on_or_after
from .models import (
    Currency,
    DailyPriceRecord,
    PortfolioTotals,
    Position,
    PositionValuation,
    Quote,
)
from .symbols import DEFAULT_EXCHANGE_SUFFIX, normalize_ticker

PRICE_SOURCE_QUOTE = "quote"
PRICE_SOURCE_HISTORY = "history"


def _is_valid_price(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def validate_position(position: Position) -> None:
    """Raise :class:`MissingFieldError` when a required field is absent."""

    if not (position.ticker or "").strip():
        raise MissingFieldError(f"Position {position.id}: ticker is required")
    amount = position.amount
    if amount is None or not math.isfinite(amount) or amount <= 0:
        raise MissingFieldError(f"Position {position.id}: a positive amount is required")
    if position.purchase_date is None:
        raise MissingFieldError(f"Position {position.id}: purchase date is required")


def value_position(
    position: Position,
    history: Sequence[DailyPriceRecord],
    quote: Quote | None = None,
    usd_per_eur: float | None = None,
    *,
    exchange_suffix: str = DEFAULT_EXCHANGE_SUFFIX,
) -> PositionValuation:
    """Convert an entered purchase into shares and a current USD value.

    A missing or non-finite quote falls back to the last historical close. A
    quote that is present but zero or negative is an :class:`InvalidPriceError`.
    """

    validate_position(position)
    symbol = normalize_ticker(position.ticker, exchange_suffix)

    purchase = close_on_or_after(history, position.purchase_date)
    if not _is_valid_price(purchase.close):
        raise InvalidPriceError(
            f"{symbol}: invalid close {purchase.close!r} on {purchase.date.isoformat()}"
        )

    currency = Currency(position.currency)
    amount_usd = FXRateProvider(usd_per_eur).to_usd(position.amount, currency)
    shares = amount_usd / purchase.close

    latest_price = quote.close if quote is not None else None
    source = PRICE_SOURCE_QUOTE
    if latest_price is None or not math.isfinite(latest_price):
        latest_price = history[-1].close
        source = PRICE_SOURCE_HISTORY
    if not _is_valid_price(latest_price):
        raise InvalidPriceError(f"{symbol}: invalid current price {latest_price!r} ({source})")

    return PositionValuation(
        position_id=position.id,
        symbol=symbol,
        purchase_date_used=purchase.date,
        purchase_close=purchase.close,
        amount_usd=amount_usd,
        amount_original=position.amount,
        currency=currency,
        shares=shares,
        latest_price=latest_price,
        latest_price_source=source,
        current_value_usd=shares * latest_price,
    )


def summarize_valuations(
    valuations: Iterable[PositionValuation],
    usd_per_eur: float | None = None,
) -> PortfolioTotals:
    """Sum valuations into portfolio totals.

    ``invested_original_eur`` only adds the entered amounts of EUR positions,
    without conversion, so it is not the EUR equivalent of ``invested_usd``.
    """

    invested_usd = 0.0
    invested_original_eur = 0.0
    invested_original_usd = 0.0
    current_value_usd = 0.0
    for valuation in valuations:
        invested_usd += valuation.amount_usd
        current_value_usd += valuation.current_value_usd
        if valuation.currency is Currency.EUR:
            invested_original_eur += valuation.amount_original
        else:
            invested_original_usd += valuation.amount_original

    pl_usd = current_value_usd - invested_usd
    pl_pct = (pl_usd / invested_usd) * 100 if invested_usd > 0 else 0.0
    return PortfolioTotals(
        invested_usd=invested_usd,
        invested_original_eur=invested_original_eur,
        invested_original_usd=invested_original_usd,
        current_value_usd=current_value_usd,
        current_value_eur=FXRateProvider(usd_per_eur).to_eur(current_value_usd),
        pl_usd=pl_usd,
        pl_pct=pl_pct,
    )


__all__ = [
    "PRICE_SOURCE_QUOTE",
    "PRICE_SOURCE_HISTORY",
    "validate_position",
    "value_position",
    "summarize_valuations",
]
