"""
Dashboard aggregation engine

Derives KPIs and chart datasets from the current tool set, the swap history
and the scrap history. Nothing is cached: every call recomputes from the
records it is given, and the functions below only read their inputs.

Month comparisons use the plant's local calendar: production entries
already carry local dates, swap instants are converted before bucketing,
and the day of month never matters.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from toolwear.config.dashboard_config import DashboardConfig
from toolwear.models import ScrapEntry, SwapEvent, Tool, ToolCondition
from toolwear.repositories import ToolRecordStore
from toolwear.services.production_ledger import production_history
from toolwear.services.scrap_ledger import group_scrap_by_month
from toolwear.services.wear_classifier import classify
from toolwear.utils.dates import format_month_year, to_local, utcnow


@dataclass
class DashboardKpis:
    tools_in_alert: int
    production_this_month: int
    swaps_this_month: int


@dataclass
class DashboardCharts:
    status_counts: Dict[str, int]
    top5_production_by_mold: List[Tuple[str, int]]
    scrap_by_mold: Dict[str, int]
    swaps_by_month_and_mold: Dict[str, Dict[str, List[str]]]
    max_scrap: int


@dataclass
class Dashboard:
    reference: datetime
    kpis: DashboardKpis
    charts: DashboardCharts
    tools: List[Tool] = field(default_factory=list)
    swap_history: List[SwapEvent] = field(default_factory=list)
    scrap_data: Dict[str, Dict[str, int]] = field(default_factory=dict)


# ----------------------------------------------------------------------
# KPIs
# ----------------------------------------------------------------------

def current_condition(tool: Tool) -> ToolCondition:
    """Condition recomputed from the tool's counters, never read from the cache column."""
    return classify(tool.accumulated_production, tool.useful_life)


def count_tools_in_alert(tools: Iterable[Tool]) -> int:
    return sum(1 for tool in tools if current_condition(tool) is not ToolCondition.OK)


def production_in_month(tools: Iterable[Tool], year: int, month: int) -> int:
    """Pieces recorded by the given tools on any day of (year, month)."""
    total = 0
    for tool in tools:
        for entry in production_history(tool):
            if entry.production_date.year == year and entry.production_date.month == month:
                total += entry.pieces
    return total


def count_swaps_in_month(swaps: Iterable[SwapEvent], year: int, month: int, tz: tzinfo) -> int:
    count = 0
    for swap in swaps:
        local = to_local(swap.swap_timestamp, tz)
        if local.year == year and local.month == month:
            count += 1
    return count


# ----------------------------------------------------------------------
# Charts
# ----------------------------------------------------------------------

def count_by_condition(tools: Iterable[Tool]) -> Dict[str, int]:
    """Tools per condition; every condition is present, zero-filled."""
    counts: Dict[str, int] = OrderedDict((condition.value, 0) for condition in ToolCondition)
    for tool in tools:
        counts[current_condition(tool).value] += 1
    return counts


def top_production_by_mold(
    tools: Iterable[Tool],
    limit: int = DashboardConfig.TOP_PRODUCTION_LIMIT,
) -> List[Tuple[str, int]]:
    """
    Accumulated production summed per mold, highest first.

    Ties are ordered by mold id so the ranking is deterministic.
    """
    totals: Dict[str, int] = OrderedDict()
    for tool in tools:
        totals[tool.mold_id] = totals.get(tool.mold_id, 0) + tool.accumulated_production
    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit]


def scrap_totals_by_mold(entries: Iterable[ScrapEntry]) -> Dict[str, int]:
    """Scrap summed per mold across all months, highest first then by mold id."""
    totals: Dict[str, int] = {}
    for entry in entries:
        totals[entry.mold_id] = totals.get(entry.mold_id, 0) + entry.quantity
    return OrderedDict(sorted(totals.items(), key=lambda item: (-item[1], item[0])))


def swaps_by_month_and_mold(swaps: Sequence[SwapEvent], tz: tzinfo) -> Dict[str, Dict[str, List[str]]]:
    """
    {"MM/YYYY": {mold_id: [tool_id, ...]}}.

    ``swaps`` is expected most recent first (as the swap history is served);
    buckets and the tool lists inside them keep that order.
    """
    grouped: Dict[str, Dict[str, List[str]]] = OrderedDict()
    for swap in swaps:
        month_key = format_month_year(to_local(swap.swap_timestamp, tz))
        grouped.setdefault(month_key, OrderedDict()).setdefault(swap.mold_id, []).append(swap.tool_id)
    return grouped


def max_scrap(scrap_by_mold: Dict[str, int]) -> int:
    """Largest per-mold scrap total, never below the chart floor."""
    return max(list(scrap_by_mold.values()) + [DashboardConfig.MIN_MAX_SCRAP])


# ----------------------------------------------------------------------
# Assembly
# ----------------------------------------------------------------------

def build_kpis(
    tools: Sequence[Tool],
    swaps: Sequence[SwapEvent],
    reference: datetime,
    tz: tzinfo,
) -> DashboardKpis:
    local_reference = to_local(reference, tz)
    year, month = local_reference.year, local_reference.month
    return DashboardKpis(
        tools_in_alert=count_tools_in_alert(tools),
        production_this_month=production_in_month(tools, year, month),
        swaps_this_month=count_swaps_in_month(swaps, year, month, tz),
    )


def build_charts(
    tools: Sequence[Tool],
    swaps: Sequence[SwapEvent],
    scrap_entries: Sequence[ScrapEntry],
    tz: tzinfo,
) -> DashboardCharts:
    scrap_by_mold = scrap_totals_by_mold(scrap_entries)
    return DashboardCharts(
        status_counts=count_by_condition(tools),
        top5_production_by_mold=top_production_by_mold(tools),
        scrap_by_mold=scrap_by_mold,
        swaps_by_month_and_mold=swaps_by_month_and_mold(swaps, tz),
        max_scrap=max_scrap(scrap_by_mold),
    )


def build_dashboard(
    tools: Sequence[Tool],
    swaps: Sequence[SwapEvent],
    scrap_entries: Sequence[ScrapEntry],
    reference: datetime,
    tz: tzinfo,
) -> Dashboard:
    """
    Compute every KPI and chart for the month containing ``reference``.

    Args:
        tools: tools with production history loaded; inactive ones are ignored
        swaps: full swap history, most recent first
        scrap_entries: full scrap history
        reference: instant that defines "this month" (naive means UTC)
        tz: plant timezone
    """
    active = [tool for tool in tools if tool.is_active]
    return Dashboard(
        reference=reference,
        kpis=build_kpis(active, swaps, reference, tz),
        charts=build_charts(active, swaps, scrap_entries, tz),
        tools=active,
        swap_history=list(swaps),
        scrap_data=group_scrap_by_month(scrap_entries),
    )


class DashboardService:
    """Loads the current records and runs the aggregation (one instance per request)"""

    def __init__(self, session: AsyncSession, tz: tzinfo):
        self.store = ToolRecordStore(session)
        self.tz = tz

    async def get_dashboard(self, reference: Optional[datetime] = None) -> Dashboard:
        tools = await self.store.list_active_tools()
        swaps = await self.store.list_swap_history()
        scrap_entries = await self.store.list_scrap()
        return build_dashboard(tools, swaps, scrap_entries, reference or utcnow(), self.tz)

    async def get_kpis(self, reference: Optional[datetime] = None) -> DashboardKpis:
        tools = await self.store.list_active_tools()
        swaps = await self.store.list_swap_history()
        return build_kpis(tools, swaps, reference or utcnow(), self.tz)

    async def get_charts(self) -> DashboardCharts:
        tools = await self.store.list_active_tools()
        swaps = await self.store.list_swap_history()
        scrap_entries = await self.store.list_scrap()
        return build_charts(tools, swaps, scrap_entries, self.tz)
