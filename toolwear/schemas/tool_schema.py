"""
Tool Pydantic models

Request validation and response serialization for tools, production and
swaps. JSON keys are camelCase; snake_case is accepted on input.
"""

import uuid
from datetime import datetime, tzinfo
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from toolwear.models import SwapEvent, Tool
from toolwear.services.production_ledger import production_history
from toolwear.services.wear_classifier import classify
from toolwear.utils.dates import ensure_utc, format_display_date, format_display_datetime, to_local


class CamelModel(BaseModel):
    """Base model serialising with camelCase keys"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ToolCreate(CamelModel):
    """Request body for creating a tool"""

    mold_id: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Mold the tool is mounted on",
        examples=["MOLDE-A"]
    )

    tool_id: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Tool label within the mold",
        examples=["FER-A1"]
    )

    useful_life: int = Field(
        ...,
        description="Capacity in pieces (must be positive)",
        examples=[100000]
    )

    notes: Optional[str] = Field(
        default="",
        description="Free-text notes"
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "moldId": "MOLDE-A",
                "toolId": "FER-A1",
                "usefulLife": 100000,
                "notes": "Ferramenta de precisão."
            }
        }
    )


class ProductionUpdate(CamelModel):
    """Request body for recording production"""

    pieces: int = Field(..., description="Pieces produced (must be positive)", examples=[1000])
    date: Optional[str] = Field(
        default=None,
        description="Production day as DD/MM/YYYY; defaults to today in plant time",
        examples=["21/08/2025"]
    )


class ProductionEntryRead(CamelModel):
    date: str = Field(..., description="Production day (DD/MM/YYYY)")
    pieces: int


class ToolRead(CamelModel):
    """Tool response model"""

    id: uuid.UUID
    mold_id: str
    tool_id: str
    useful_life: int
    accumulated_production: int
    condition: str = Field(..., description="OK, WARN or REPLACE")
    status_label: str = Field(..., description="Dashboard label of the condition")
    warning: bool
    notes: str
    is_active: bool
    last_update: str = Field(..., description="Last modification day (DD/MM/YYYY, plant time)")
    created_at: datetime
    updated_at: datetime
    production_history: List[ProductionEntryRead] = Field(default_factory=list)

    @classmethod
    def from_model(cls, tool: Tool, tz: tzinfo) -> "ToolRead":
        """Build the view; condition and warning are recomputed from the counters."""
        condition = classify(tool.accumulated_production, tool.useful_life)
        return cls(
            id=tool.id,
            mold_id=tool.mold_id,
            tool_id=tool.tool_id,
            useful_life=tool.useful_life,
            accumulated_production=tool.accumulated_production,
            condition=condition.value,
            status_label=condition.label,
            warning=condition.value != "OK",
            notes=tool.notes or "",
            is_active=tool.is_active,
            last_update=format_display_date(to_local(tool.updated_at, tz).date()),
            created_at=ensure_utc(tool.created_at),
            updated_at=ensure_utc(tool.updated_at),
            production_history=[
                ProductionEntryRead(date=format_display_date(entry.production_date), pieces=entry.pieces)
                for entry in production_history(tool)
            ],
        )


class SwapEventRead(CamelModel):
    """Swap history response model"""

    date: str = Field(..., description="Swap instant as DD/MM/YYYY HH:MM:SS (plant time)")
    swap_timestamp: datetime
    mold_id: str
    tool_id: str
    production_before_swap: int

    @classmethod
    def from_model(cls, swap: SwapEvent, tz: tzinfo) -> "SwapEventRead":
        return cls(
            date=format_display_datetime(swap.swap_timestamp, tz),
            swap_timestamp=ensure_utc(swap.swap_timestamp),
            mold_id=swap.mold_id,
            tool_id=swap.tool_id,
            production_before_swap=swap.production_before_swap,
        )


class MessageResponse(BaseModel):
    message: str
