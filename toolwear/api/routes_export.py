"""
Data export routes

CSV download of the swap history.
"""

import csv
import io
from datetime import tzinfo

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from toolwear.api.deps import get_plant_tz
from toolwear.core.database import get_db
from toolwear.services import SwapManager
from toolwear.utils.dates import format_display_datetime, local_today

router = APIRouter()

SWAP_HISTORY_COLUMNS = ["date", "mold_id", "tool_id", "production_before_swap"]


@router.get(
    "/swap-history.csv",
    summary="Export swap history as CSV",
    description="""
    Download every recorded swap, most recent first.

    ## CSV format

    - **date**: swap instant, DD/MM/YYYY HH:MM:SS in plant time
    - **mold_id**: mold the tool was mounted on
    - **tool_id**: tool label
    - **production_before_swap**: pieces accumulated when the tool was swapped

    ```bash
    curl -o swaps.csv "http://localhost:8000/api/tools/swap-history.csv"
    ```
    """,
    responses={
        200: {
            "description": "CSV file",
            "content": {
                "text/csv": {
                    "example": "date,mold_id,tool_id,production_before_swap\n20/08/2025 08:00:00,MOLDE-B,FER-B1-NEW,180000"
                }
            },
        }
    },
)
async def export_swap_history_csv(
    db: AsyncSession = Depends(get_db),
    tz: tzinfo = Depends(get_plant_tz),
) -> Response:
    swaps = await SwapManager(db).list_swap_history()

    csv_buffer = io.StringIO()
    csv_writer = csv.writer(csv_buffer)
    csv_writer.writerow(SWAP_HISTORY_COLUMNS)
    for swap in swaps:
        csv_writer.writerow([
            format_display_datetime(swap.swap_timestamp, tz),
            swap.mold_id,
            swap.tool_id,
            swap.production_before_swap,
        ])

    csv_content = csv_buffer.getvalue()
    csv_buffer.close()

    filename = f"swap_history_{local_today(tz).isoformat()}.csv"

    # UTF-8 BOM for spreadsheet tools
    return Response(
        content=csv_content.encode("utf-8-sig"),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
