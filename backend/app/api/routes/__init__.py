"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .analysis import router as analysis_router
from .symbols import router as symbols_router

api_router = APIRouter()
api_router.include_router(analysis_router, prefix="/analysis", tags=["analysis"])
api_router.include_router(symbols_router, prefix="/symbols", tags=["symbols"])

__all__ = ["api_router"]
