"""
Tool and production ledger models

A tool is a wearing part mounted on a mold, tracked by its own wear counter.
Each production update appends one ProductionEntry owned by the tool.
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import List

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import ENUM, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from toolwear.config.constants import CONDITION_LABELS
from toolwear.core.database import Base
from toolwear.utils.dates import utcnow


class ToolCondition(str, Enum):
    """Wear classification of a tool"""
    OK = "OK"             # below 70% of useful life
    WARN = "WARN"         # 70% to 80%
    REPLACE = "REPLACE"   # 80% or more

    @property
    def label(self) -> str:
        return CONDITION_LABELS[self.value]


class Tool(Base):
    """
    Tool model

    (mold_id, tool_id) identifies a tool only while it is active; retired
    tools keep their labels for audit, so the pair is unique among active
    rows only (see ix_tools_mold_tool_active).
    """
    __tablename__ = "tools"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Tool record ID"
    )

    mold_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Mold the tool is mounted on"
    )

    tool_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Tool label within the mold"
    )

    useful_life: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Capacity in pieces"
    )

    accumulated_production: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Pieces produced since the last swap"
    )

    # Cached classification, rewritten on every change of accumulated_production
    condition: Mapped[ToolCondition] = mapped_column(
        ENUM(ToolCondition, name="tool_condition_enum"),
        nullable=False,
        default=ToolCondition.OK,
        comment="Wear condition"
    )

    warning: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="True whenever condition is not OK"
    )

    notes: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Free-text notes"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Inactive tools are kept for audit only"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="Creation time"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        comment="Last modification time"
    )

    production_entries: Mapped[List["ProductionEntry"]] = relationship(
        "ProductionEntry",
        back_populates="tool",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductionEntry.id",
        lazy="select"
    )

    def __repr__(self) -> str:
        return (
            f"<Tool(id={self.id}, mold_id='{self.mold_id}', tool_id='{self.tool_id}', "
            f"accumulated_production={self.accumulated_production}/{self.useful_life}, "
            f"condition={self.condition})>"
        )


class ProductionEntry(Base):
    """
    Production ledger row

    Append-only; several entries on the same day stay distinct. Rows are
    purged when their tool is swapped and cascade-deleted with the tool.
    """
    __tablename__ = "production_entries"

    # Autoincrement key doubles as the call order of the ledger
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Entry ID"
    )

    tool_pk: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("tools.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning tool record"
    )

    pieces: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Pieces produced"
    )

    production_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Production day in plant local time"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="Entry creation time"
    )

    tool: Mapped["Tool"] = relationship(
        "Tool",
        back_populates="production_entries",
        lazy="select"
    )

    def __repr__(self) -> str:
        return (
            f"<ProductionEntry(id={self.id}, tool_pk={self.tool_pk}, "
            f"pieces={self.pieces}, production_date={self.production_date})>"
        )


# At most one active tool per (mold_id, tool_id); retired rows are exempt
Index(
    "ix_tools_mold_tool_active",
    Tool.mold_id,
    Tool.tool_id,
    unique=True,
    postgresql_where=Tool.is_active,
    sqlite_where=Tool.is_active,
)
Index("ix_production_entries_tool_date", ProductionEntry.tool_pk, ProductionEntry.production_date)
