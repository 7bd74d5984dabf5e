"""
Scrap entry model
"""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from toolwear.core.database import Base
from toolwear.utils.dates import utcnow


class ScrapEntry(Base):
    """
    Rejected units attributed to a mold for one calendar month

    One row per (mold_id, month_start); a second submission for the same
    month replaces the quantity.
    """
    __tablename__ = "scrap_entries"
    __table_args__ = (
        UniqueConstraint("mold_id", "month_start", name="uq_scrap_entries_mold_month"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mold_id: Mapped[str] = mapped_column(String(100), nullable=False, comment="Mold")
    month_start: Mapped[date] = mapped_column(Date, nullable=False, comment="First day of the month")
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, comment="Rejected units")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return (
            f"<ScrapEntry(id={self.id}, mold_id='{self.mold_id}', "
            f"month_start={self.month_start}, quantity={self.quantity})>"
        )
