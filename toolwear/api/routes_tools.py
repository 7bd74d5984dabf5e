"""
Tool API routes

Tool lifecycle, production, swaps, mold comments and scrap. Static paths
are declared before the ``/{tool_pk}`` routes so they are never captured
as a tool id.
"""

from datetime import tzinfo
from typing import Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from toolwear.api.deps import get_plant_tz, resolve_display_date
from toolwear.core.database import get_db
from toolwear.schemas import (
    MessageResponse,
    MoldCommentCreate,
    MoldCommentRead,
    ProductionUpdate,
    ScrapCreate,
    ScrapRead,
    SwapEventRead,
    ToolCreate,
    ToolRead,
)
from toolwear.services import (
    MoldCommentService,
    ProductionLedger,
    ScrapLedger,
    SwapManager,
    ToolRegistry,
)

router = APIRouter()


@router.get(
    "",
    response_model=List[ToolRead],
    summary="List active tools",
)
async def list_active_tools(
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> List[ToolRead]:
    tools = await ToolRegistry(db).list_active_tools()
    return [ToolRead.from_model(tool, tz) for tool in tools]


@router.post(
    "",
    response_model=ToolRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a tool",
    responses={
        400: {"description": "Missing label or non-positive useful life"},
        409: {"description": "An active tool already uses this mold and tool label"},
    },
)
async def create_tool(
    payload: ToolCreate,
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> ToolRead:
    tool = await ToolRegistry(db).create_tool(
        mold_id=payload.mold_id,
        tool_id=payload.tool_id,
        useful_life=payload.useful_life,
        notes=payload.notes,
    )
    return ToolRead.from_model(tool, tz)


# ----------------------------------------------------------------------
# Swap history
# ----------------------------------------------------------------------

@router.get(
    "/swap-history",
    response_model=List[SwapEventRead],
    summary="List swap history (most recent first)",
)
async def list_swap_history(
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> List[SwapEventRead]:
    swaps = await SwapManager(db).list_swap_history()
    return [SwapEventRead.from_model(swap, tz) for swap in swaps]


# ----------------------------------------------------------------------
# Mold comments
# ----------------------------------------------------------------------

@router.post(
    "/mold-comments",
    response_model=MoldCommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment to a mold",
)
async def add_mold_comment(
    payload: MoldCommentCreate,
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> MoldCommentRead:
    comment = await MoldCommentService(db).add_comment(
        payload.mold_id,
        payload.comment,
        resolve_display_date(payload.date, tz),
    )
    return MoldCommentRead.from_model(comment)


@router.get(
    "/mold-comments/{mold_id}",
    response_model=Dict[str, List[str]],
    summary="Get comments of a mold grouped by date",
)
async def get_mold_comments(
    mold_id: str,
    db: AsyncSession = Depends(get_db),
) -> Dict[str, List[str]]:
    return await MoldCommentService(db).get_comments(mold_id)


# ----------------------------------------------------------------------
# Scrap
# ----------------------------------------------------------------------

@router.post(
    "/scrap",
    response_model=ScrapRead,
    summary="Record monthly scrap for a mold (replaces any previous count)",
    responses={400: {"description": "Malformed month or non-positive quantity"}},
)
async def record_scrap(
    payload: ScrapCreate,
    db: AsyncSession = Depends(get_db),
) -> ScrapRead:
    entry = await ScrapLedger(db).record_scrap(payload.mold_id, payload.month_year, payload.quantity)
    return ScrapRead.from_model(entry)


@router.get(
    "/scrap",
    response_model=Dict[str, Dict[str, int]],
    summary="Get scrap grouped by month and mold",
)
async def get_scrap_data(
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Dict[str, int]]:
    return await ScrapLedger(db).scrap_by_month()


# ----------------------------------------------------------------------
# Single tool
# ----------------------------------------------------------------------

@router.put(
    "/{tool_pk}/production",
    response_model=ToolRead,
    summary="Record production for a tool",
    responses={
        400: {"description": "Non-positive pieces or malformed date"},
        404: {"description": "Tool not found or inactive"},
    },
)
async def record_production(
    tool_pk: str,
    payload: ProductionUpdate,
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> ToolRead:
    tool = await ProductionLedger(db).record_production(
        tool_pk,
        payload.pieces,
        resolve_display_date(payload.date, tz),
    )
    return ToolRead.from_model(tool, tz)


@router.put(
    "/{tool_pk}/swap",
    response_model=ToolRead,
    summary="Swap a tool",
    responses={404: {"description": "Tool not found or inactive"}},
)
async def swap_tool(
    tool_pk: str,
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> ToolRead:
    tool = await SwapManager(db).swap_tool(tool_pk)
    return ToolRead.from_model(tool, tz)


@router.put(
    "/{tool_pk}/retire",
    response_model=ToolRead,
    summary="Retire a tool",
    responses={404: {"description": "Tool not found or already inactive"}},
)
async def retire_tool(
    tool_pk: str,
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> ToolRead:
    tool = await ToolRegistry(db).retire_tool(tool_pk)
    return ToolRead.from_model(tool, tz)


@router.delete(
    "/{tool_pk}",
    response_model=MessageResponse,
    summary="Delete a tool and its production history",
    responses={404: {"description": "Tool not found"}},
)
async def delete_tool(
    tool_pk: str,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await ToolRegistry(db).delete_tool(tool_pk)
    return MessageResponse(message="Tool deleted")
