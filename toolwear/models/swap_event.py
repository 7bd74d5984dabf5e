"""
Swap event model

Immutable record of a tool swap. Not linked to the tools table: the event
outlives deletion of the tool and reuse of its labels.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from toolwear.core.database import Base
from toolwear.utils.dates import utcnow


class SwapEvent(Base):
    """Snapshot of a tool's production at the moment it was swapped"""
    __tablename__ = "swap_events"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Swap event ID"
    )

    mold_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Mold at swap time"
    )

    tool_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Tool label at swap time"
    )

    production_before_swap: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Accumulated production when the tool was swapped"
    )

    swap_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="Swap instant (UTC)"
    )

    def __repr__(self) -> str:
        return (
            f"<SwapEvent(id={self.id}, mold_id='{self.mold_id}', tool_id='{self.tool_id}', "
            f"production_before_swap={self.production_before_swap}, "
            f"swap_timestamp={self.swap_timestamp})>"
        )


Index("ix_swap_events_swap_timestamp", SwapEvent.swap_timestamp)
