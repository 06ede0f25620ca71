"""Portfolio backtest endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.providers.stooq import StooqClient, StooqError, get_stooq_client
from app.schemas.analysis import AnalysisRequestSchema, AnalysisResponse
from app.services.analysis import run_analysis
from hindsight.errors import AnalysisError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=AnalysisResponse)
async def create_analysis(
    payload: AnalysisRequestSchema,
    client: StooqClient = Depends(get_stooq_client),
) -> AnalysisResponse:
    positions = [item.to_position() for item in payload.positions]
    try:
        result = await run_analysis(
            positions,
            client,
            drop_threshold_pct=payload.drop_threshold_pct,
        )
    except AnalysisError as exc:
        logger.info("Analysis rejected: %s", exc)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except StooqError as exc:
        logger.error("Price history fetch failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return AnalysisResponse.from_result(result)
