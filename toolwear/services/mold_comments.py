"""
Mold comments

Append-only operator notes on a mold, grouped by the day they refer to.
"""

from collections import OrderedDict
from datetime import date
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from toolwear.core.errors import InvalidInputError
from toolwear.core.logging import get_logger
from toolwear.models import MoldComment
from toolwear.repositories import ToolRecordStore
from toolwear.utils.dates import format_display_date

logger = get_logger(__name__)


class MoldCommentService:
    """Adds and reads mold comments"""

    def __init__(self, session: AsyncSession):
        self.store = ToolRecordStore(session)

    async def add_comment(self, mold_id: str, text: str, comment_date: date) -> MoldComment:
        """
        Append a comment to a mold.

        Raises:
            InvalidInputError: empty mold id, empty text or missing date
        """
        if not mold_id or not str(mold_id).strip():
            raise InvalidInputError("moldId is required")
        if not text or not str(text).strip():
            raise InvalidInputError("comment is required")
        if not isinstance(comment_date, date):
            raise InvalidInputError("comment date is required")

        comment = await self.store.comments.add(
            MoldComment(mold_id=str(mold_id).strip(), comment=str(text).strip(), comment_date=comment_date)
        )
        await self.store.commit()

        logger.info("Mold comment added", mold_id=comment.mold_id, comment_date=str(comment_date))
        return comment

    async def get_comments(self, mold_id: str) -> Dict[str, List[str]]:
        """{"DD/MM/YYYY": [text, ...]} with the newest comment first."""
        grouped: Dict[str, List[str]] = OrderedDict()
        for comment in await self.store.list_comments(mold_id):
            grouped.setdefault(format_display_date(comment.comment_date), []).append(comment.comment)
        return grouped
