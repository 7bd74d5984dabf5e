"""
Service layer

The tool wear engine: classification, production and scrap ledgers, swaps,
tool lifecycle, mold comments and dashboard aggregation.
"""

from .wear_classifier import classify, classify_with_warning
from .production_ledger import ProductionLedger, production_history
from .swap_manager import SwapManager
from .scrap_ledger import ScrapLedger
from .tool_registry import ToolRegistry
from .mold_comments import MoldCommentService
from .aggregation import Dashboard, DashboardService, build_dashboard

__all__ = [
    'classify',
    'classify_with_warning',
    'ProductionLedger',
    'production_history',
    'SwapManager',
    'ScrapLedger',
    'ToolRegistry',
    'MoldCommentService',
    'Dashboard',
    'DashboardService',
    'build_dashboard',
]
