"""
Pydantic schemas for request validation and response serialization.
"""

from .tool_schema import (
    CamelModel,
    MessageResponse,
    ProductionEntryRead,
    ProductionUpdate,
    SwapEventRead,
    ToolCreate,
    ToolRead,
)
from .mold_schema import MoldCommentCreate, MoldCommentRead, ScrapCreate, ScrapRead
from .dashboard_schema import ChartsRead, DashboardRead, KpisRead

__all__ = [
    "CamelModel",
    "MessageResponse",
    "ProductionEntryRead",
    "ProductionUpdate",
    "SwapEventRead",
    "ToolCreate",
    "ToolRead",
    "MoldCommentCreate",
    "MoldCommentRead",
    "ScrapCreate",
    "ScrapRead",
    "ChartsRead",
    "DashboardRead",
    "KpisRead",
]
