from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SymbolSuggestionSchema(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "symbol": "MSFT",
                "name": "Microsoft Corporation",
                "exchange": "NMS",
                "type": "EQUITY",
            }
        }
    )

    symbol: str = Field(..., examples=["MSFT"])
    name: str
    exchange: Optional[str] = None
    type: Optional[str] = None


__all__ = ["SymbolSuggestionSchema"]
