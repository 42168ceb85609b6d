"""
Utils package initialization.
"""
from aadhaar_insight.utils.formatters import (
    format_deviation,
    format_millions,
    format_crores,
    format_daily_load,
    format_percentage,
)
from aadhaar_insight.utils.constants import (
    ALI_STATUSES,
    NOT_AVAILABLE,
)

__all__ = [
    "format_deviation",
    "format_millions",
    "format_crores",
    "format_daily_load",
    "format_percentage",
    "ALI_STATUSES",
    "NOT_AVAILABLE",
]
