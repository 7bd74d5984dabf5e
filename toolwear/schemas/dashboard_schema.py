"""
Dashboard Pydantic models
"""

from datetime import datetime, tzinfo
from typing import Dict, List, Tuple

from pydantic import Field

from toolwear.schemas.tool_schema import CamelModel, SwapEventRead, ToolRead
from toolwear.services.aggregation import Dashboard, DashboardCharts, DashboardKpis


class KpisRead(CamelModel):
    tools_in_alert: int = Field(..., description="Active tools whose condition is not OK")
    production_this_month: int = Field(..., description="Pieces recorded in the reference month")
    swaps_this_month: int = Field(..., description="Swaps performed in the reference month")

    @classmethod
    def from_result(cls, kpis: DashboardKpis) -> "KpisRead":
        return cls(
            tools_in_alert=kpis.tools_in_alert,
            production_this_month=kpis.production_this_month,
            swaps_this_month=kpis.swaps_this_month,
        )


class ChartsRead(CamelModel):
    status_counts: Dict[str, int] = Field(..., description="Active tools per condition")
    top5_production_by_mold: List[Tuple[str, int]] = Field(
        ...,
        description="[moldId, accumulated production] pairs, highest first"
    )
    scrap_by_mold: Dict[str, int]
    swaps_by_month_and_mold: Dict[str, Dict[str, List[str]]] = Field(
        ...,
        description='{"MM/YYYY": {moldId: [toolId, ...]}}'
    )
    max_scrap: int

    @classmethod
    def from_result(cls, charts: DashboardCharts) -> "ChartsRead":
        return cls(
            status_counts=charts.status_counts,
            top5_production_by_mold=charts.top5_production_by_mold,
            scrap_by_mold=charts.scrap_by_mold,
            swaps_by_month_and_mold=charts.swaps_by_month_and_mold,
            max_scrap=charts.max_scrap,
        )


class DashboardRead(CamelModel):
    """Everything the dashboard page renders from a single call"""

    reference: datetime
    kpis: KpisRead
    charts: ChartsRead
    tools: List[ToolRead]
    swap_history: List[SwapEventRead]
    scrap_data: Dict[str, Dict[str, int]]

    @classmethod
    def from_result(cls, dashboard: Dashboard, tz: tzinfo) -> "DashboardRead":
        return cls(
            reference=dashboard.reference,
            kpis=KpisRead.from_result(dashboard.kpis),
            charts=ChartsRead.from_result(dashboard.charts),
            tools=[ToolRead.from_model(tool, tz) for tool in dashboard.tools],
            swap_history=[SwapEventRead.from_model(swap, tz) for swap in dashboard.swap_history],
            scrap_data=dashboard.scrap_data,
        )
