"""Database model definitions"""

from .tool import Tool, ToolCondition, ProductionEntry
from .swap_event import SwapEvent
from .mold_comment import MoldComment
from .scrap_entry import ScrapEntry

__all__ = ["Tool", "ToolCondition", "ProductionEntry", "SwapEvent", "MoldComment", "ScrapEntry"]
