"""Ticker autocomplete endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from app.providers.yahoo_search import SymbolSearchError, search_symbols as search_yahoo
from app.schemas.symbols import SymbolSuggestionSchema

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/search", response_model=list[SymbolSuggestionSchema])
async def search_symbols(
    query: str = Query(..., min_length=1, max_length=64, description="Ticker or company keywords"),
) -> list[SymbolSuggestionSchema]:
    try:
        results = await search_yahoo(query)
    except SymbolSearchError as exc:
        logger.error("Symbol search failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    logger.info("Returning %d matches for query: %s", len(results), query)
    return results
