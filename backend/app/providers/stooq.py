"""Stooq client used to fetch daily history, latest quotes and the EUR/USD rate."""

from __future__ import annotations

import io
import logging
import math
from typing import Any, AsyncIterator, Iterable

import httpx
import pandas as pd

from app.config import get_settings
from hindsight.models import DailyPriceRecord, Quote

logger = logging.getLogger(__name__)

HISTORY_PATH = "/q/d/l/"
QUOTE_PATH = "/q/l/"
QUOTE_FIELDS = "sd2t2ohlcv"
QUOTE_COLUMNS = ["Symbol", "Date", "Time", "Open", "High", "Low", "Close", "Volume"]
FX_SYMBOL = "EURUSD"

_HISTORY_REQUIRED = {"Date", "Open", "High", "Low", "Close"}


class StooqError(RuntimeError):
    """Raised when Stooq is unreachable or returns an unusable payload."""


def _as_number(value: Any) -> float | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text == "N/D" or text.upper() == "NAN":
        return None
    try:
        number = float(text.replace(",", "."))
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_history_csv(text: str, symbol: str) -> list[DailyPriceRecord]:
    """Parse a Stooq daily CSV into ascending :class:`DailyPriceRecord` rows."""

    try:
        frame = pd.read_csv(io.StringIO(text))
    except (ValueError, pd.errors.ParserError) as exc:
        raise StooqError(f"Unreadable history payload for {symbol}") from exc

    missing = _HISTORY_REQUIRED - set(frame.columns)
    if missing:
        raise StooqError(f"History for {symbol} lacks columns: {', '.join(sorted(missing))}")

    frame["Date"] = pd.to_datetime(frame["Date"], format="%Y-%m-%d", errors="coerce")
    for column in ("Open", "High", "Low", "Close", "Volume"):
        if column in frame.columns:
            frame[column] = pd.to_numeric(frame[column], errors="coerce")
        else:
            frame[column] = float("nan")
    frame = frame.dropna(subset=["Date", "Close"]).sort_values("Date")

    return [
        DailyPriceRecord(
            date=row.Date.date(),
            open=float(row.Open),
            high=float(row.High),
            low=float(row.Low),
            close=float(row.Close),
            volume=None if pd.isna(row.Volume) else float(row.Volume),
        )
        for row in frame.itertuples(index=False)
    ]


def parse_quotes_csv(text: str) -> dict[str, Quote]:
    """Parse a Stooq quote CSV into quotes keyed by upper-case symbol."""

    try:
        frame = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    except (ValueError, pd.errors.ParserError) as exc:
        raise StooqError("Unreadable quote payload") from exc
    if "Symbol" not in frame.columns or "Close" not in frame.columns:
        raise StooqError("Quote payload lacks Symbol/Close columns")

    quotes: dict[str, Quote] = {}
    for raw in frame.to_dict(orient="records"):
        symbol = str(raw.get("Symbol") or "").strip().upper()
        if not symbol:
            continue
        quotes[symbol] = Quote(symbol=symbol, close=_as_number(raw.get("Close")), raw=raw)
    return quotes


class StooqClient:
    """Async Stooq client; pass ``client`` to share or stub the HTTP transport."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout_seconds: float | None = None,
        client: Any | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.stooq_base_url).rstrip("/")
        self.timeout = timeout_seconds or settings.stooq_timeout_seconds
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    async def _get_csv(self, path: str, params: dict[str, str]) -> str:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.get(url, params=params, timeout=self.timeout)
        except httpx.HTTPError as exc:  # pragma: no cover - network failure handling
            raise StooqError(f"Failed to reach Stooq: {exc}") from exc
        if response.status_code >= 400:
            raise StooqError(f"Stooq error {response.status_code} for {params.get('s')}")
        text = response.text
        if not text.strip() or text.lstrip().lower().startswith("no data"):
            raise StooqError(f"Stooq returned no data for {params.get('s')}")
        return text

    async def fetch_history(self, symbol: str) -> list[DailyPriceRecord]:
        """Return the full daily history of ``symbol``, oldest first."""

        text = await self._get_csv(HISTORY_PATH, {"s": symbol.lower(), "i": "d"})
        records = parse_history_csv(text, symbol)
        if not records:
            raise StooqError(f"Stooq returned no data for {symbol}")
        logger.debug("Fetched %d daily rows for %s", len(records), symbol)
        return records

    async def fetch_latest_quotes(self, symbols: Iterable[str]) -> dict[str, Quote]:
        """Return the latest quote of each symbol in a single request."""

        wanted = [s.lower() for s in symbols]
        if not wanted:
            return {}
        params = {"s": ",".join(wanted), "f": QUOTE_FIELDS, "h": "", "e": "csv"}
        return parse_quotes_csv(await self._get_csv(QUOTE_PATH, params))

    async def fetch_exchange_rate(self) -> float:
        """Return the current EUR/USD rate expressed as USD per EUR."""

        quote = (await self.fetch_latest_quotes([FX_SYMBOL])).get(FX_SYMBOL)
        if quote is None or quote.close is None or quote.close <= 0:
            raise StooqError("EUR/USD quote unavailable")
        return quote.close

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


async def get_stooq_client() -> AsyncIterator[StooqClient]:
    """FastAPI dependency yielding a client that is closed after the request."""

    client = StooqClient()
    try:
        yield client
    finally:
        await client.aclose()


__all__ = [
    "StooqClient",
    "StooqError",
    "get_stooq_client",
    "parse_history_csv",
    "parse_quotes_csv",
]
