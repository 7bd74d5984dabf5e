"""
Dashboard API routes

KPIs and chart datasets recomputed from the current records on every call.
"""

from datetime import datetime, tzinfo
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from toolwear.api.deps import get_plant_tz
from toolwear.core.database import get_db
from toolwear.schemas import ChartsRead, DashboardRead, KpisRead
from toolwear.services import DashboardService

router = APIRouter()

REFERENCE_DESCRIPTION = "Instant that defines the current month (ISO 8601, default now; naive means UTC)"


@router.get(
    "",
    response_model=DashboardRead,
    summary="Full dashboard: KPIs, charts, tools, swap history and scrap",
)
async def get_dashboard(
    reference: Optional[datetime] = Query(None, description=REFERENCE_DESCRIPTION, examples=["2025-08-21T12:00:00Z"]),
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> DashboardRead:
    dashboard = await DashboardService(db, tz).get_dashboard(reference)
    return DashboardRead.from_result(dashboard, tz)


@router.get(
    "/kpis",
    response_model=KpisRead,
    summary="Dashboard KPIs",
)
async def get_dashboard_kpis(
    reference: Optional[datetime] = Query(None, description=REFERENCE_DESCRIPTION, examples=["2025-08-21T12:00:00Z"]),
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> KpisRead:
    kpis = await DashboardService(db, tz).get_kpis(reference)
    return KpisRead.from_result(kpis)


@router.get(
    "/charts",
    response_model=ChartsRead,
    summary="Dashboard chart datasets",
)
async def get_dashboard_charts(
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> ChartsRead:
    charts = await DashboardService(db, tz).get_charts()
    return ChartsRead.from_result(charts)
