"""
Mold comment and scrap Pydantic models
"""

from typing import Optional

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from toolwear.models import MoldComment, ScrapEntry
from toolwear.schemas.tool_schema import CamelModel
from toolwear.utils.dates import format_display_date, format_month_year


class MoldCommentCreate(CamelModel):
    """Request body for a mold comment"""

    mold_id: str = Field(..., min_length=1, max_length=100, description="Mold annotated")
    comment: str = Field(..., min_length=1, description="Comment text")
    date: Optional[str] = Field(
        default=None,
        description="Day the comment refers to (DD/MM/YYYY); defaults to today in plant time"
    )


class ScrapCreate(CamelModel):
    """Request body for recording monthly scrap"""

    mold_id: str = Field(..., min_length=1, max_length=100, description="Mold")
    month_year: str = Field(..., description="Month as MM/YYYY", examples=["08/2025"])
    quantity: int = Field(..., description="Rejected units (must be positive)")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "moldId": "MOLDE-A",
                "monthYear": "08/2025",
                "quantity": 150
            }
        }
    )


class MoldCommentRead(CamelModel):
    mold_id: str
    comment: str
    date: str = Field(..., description="DD/MM/YYYY")

    @classmethod
    def from_model(cls, comment: MoldComment) -> "MoldCommentRead":
        return cls(
            mold_id=comment.mold_id,
            comment=comment.comment,
            date=format_display_date(comment.comment_date),
        )


class ScrapRead(CamelModel):
    mold_id: str
    month_year: str
    quantity: int

    @classmethod
    def from_model(cls, entry: ScrapEntry) -> "ScrapRead":
        return cls(
            mold_id=entry.mold_id,
            month_year=format_month_year(entry.month_start),
            quantity=entry.quantity,
        )
