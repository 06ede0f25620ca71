"""Ticker autocomplete backed by the Yahoo Finance search endpoint."""

from __future__ import annotations

from typing import Any

import httpx

from app.config import get_settings
from app.schemas.symbols import SymbolSuggestionSchema

MIN_QUERY_LENGTH = 2
_HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; hindsight/0.1)"}


class SymbolSearchError(RuntimeError):
    """Raised when the symbol search service fails."""


async def search_symbols(
    query: str,
    *,
    base_url: str | None = None,
    limit: int | None = None,
    timeout_seconds: float = 10.0,
    client: Any | None = None,
) -> list[SymbolSuggestionSchema]:
    """Return ticker suggestions for free text such as a company name."""

    text = (query or "").strip()
    if len(text) < MIN_QUERY_LENGTH:
        return []

    settings = get_settings()
    url = base_url or settings.symbol_search_url
    params = {
        "q": text,
        "quotesCount": limit or settings.symbol_search_limit,
        "newsCount": 0,
    }
    try:
        if client is not None:
            response = await client.get(url, params=params, headers=_HEADERS)
        else:
            async with httpx.AsyncClient(timeout=timeout_seconds) as http:
                response = await http.get(url, params=params, headers=_HEADERS)
    except httpx.HTTPError as exc:  # pragma: no cover - network failure handling
        raise SymbolSearchError(f"Failed to reach symbol search: {exc}") from exc

    if response.status_code >= 400:
        raise SymbolSearchError(f"Symbol search error {response.status_code}")

    try:
        payload = response.json()
    except ValueError as exc:
        raise SymbolSearchError("Symbol search returned invalid JSON payload") from exc

    matches = payload.get("quotes", []) if isinstance(payload, dict) else []
    if not isinstance(matches, list):
        raise SymbolSearchError("Symbol search response is not a list of quotes")

    results: list[SymbolSuggestionSchema] = []
    for item in matches:
        if not isinstance(item, dict):
            continue
        symbol = str(item.get("symbol") or "").strip().upper()
        if not symbol:
            continue
        name = item.get("longname") or item.get("shortname") or symbol
        results.append(
            SymbolSuggestionSchema(
                symbol=symbol,
                name=str(name),
                exchange=item.get("exchDisp") or item.get("exchange"),
                type=item.get("quoteType") or item.get("typeDisp"),
            )
        )
    return results


__all__ = ["MIN_QUERY_LENGTH", "SymbolSearchError", "search_symbols"]
