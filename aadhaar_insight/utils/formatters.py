"""
Display formatting helpers for derived metrics.
"""
from typing import Optional

from aadhaar_insight.utils.constants import NOT_AVAILABLE


def format_deviation(deviation_pct: Optional[float]) -> str:
    """
    Format a deviation percentage with one decimal.

    Args:
        deviation_pct: Deviation in percent, or None when undefined

    Returns:
        e.g. "20.0%", "-12.5%" or "N/A"
    """
    if deviation_pct is None:
        return NOT_AVAILABLE
    return f"{deviation_pct:.1f}%"


def format_millions(value: float) -> str:
    """Format a population count as millions, e.g. 900000000 -> '900.0M'."""
    return f"{value / 1_000_000:.1f}M"


def format_crores(value: float) -> str:
    """Format a crore amount the way the budget card shows it."""
    return f"₹{value:.0f} Cr"


def format_daily_load(daily_load: float) -> str:
    """Format throughput in thousands per day."""
    return f"{daily_load / 1000:.0f}K / DAY"


def format_percentage(value: float, decimals: int = 0) -> str:
    return f"{value:.{decimals}f}%"
