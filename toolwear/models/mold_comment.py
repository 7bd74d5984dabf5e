"""
Mold comment model
"""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from toolwear.core.database import Base
from toolwear.utils.dates import utcnow


class MoldComment(Base):
    """Append-only free-text annotation on a mold for a given day"""
    __tablename__ = "mold_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mold_id: Mapped[str] = mapped_column(String(100), nullable=False, comment="Mold annotated")
    comment: Mapped[str] = mapped_column(Text, nullable=False, comment="Comment text")
    comment_date: Mapped[date] = mapped_column(Date, nullable=False, comment="Day the comment refers to")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<MoldComment(id={self.id}, mold_id='{self.mold_id}', comment_date={self.comment_date})>"


Index("ix_mold_comments_mold_id", MoldComment.mold_id)
