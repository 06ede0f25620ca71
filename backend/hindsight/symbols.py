"""Ticker symbol helpers."""
from __future__ import annotations

DEFAULT_EXCHANGE_SUFFIX = ".US"


def normalize_ticker(ticker: str | None, suffix: str = DEFAULT_EXCHANGE_SUFFIX) -> str:
    """Return the canonical symbol for a user-entered ticker.

    ``" msft "`` becomes ``"MSFT.US"``; tickers that already carry an exchange
    suffix (``"SAP.DE"``) keep it.
    """

    symbol = (ticker or "").strip().upper()
    if not symbol or "." in symbol:
        return symbol
    return f"{symbol}{suffix.upper()}"


__all__ = ["DEFAULT_EXCHANGE_SUFFIX", "normalize_ticker"]
