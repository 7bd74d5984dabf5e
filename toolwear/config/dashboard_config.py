"""
Dashboard aggregation configuration
"""


class DashboardConfig:
    """Limits and floors applied when building dashboard charts"""

    # Number of molds kept in the production ranking chart
    TOP_PRODUCTION_LIMIT = 5

    # Lower bound for maxScrap so chart normalisation never divides by zero
    MIN_MAX_SCRAP = 1
