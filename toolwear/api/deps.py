"""
Shared route dependencies.
"""

from datetime import date, tzinfo
from typing import Optional

from toolwear.core.config import get_settings
from toolwear.utils.dates import local_today, parse_display_date


def get_plant_tz() -> tzinfo:
    """Plant timezone used for every date shown or parsed at the API boundary."""
    return get_settings().tzinfo


def resolve_display_date(value: Optional[str], tz: tzinfo) -> date:
    """Parse an optional "DD/MM/YYYY" body field, falling back to today in plant time."""
    if value is None or not value.strip():
        return local_today(tz)
    return parse_display_date(value)
