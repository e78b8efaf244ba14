"""Date labels shown next to entries (en-US style, no zero padding)."""

from datetime import datetime


def format_date(value: datetime) -> str:
    """``3/7/2025`` style label."""
    return f"{value.month}/{value.day}/{value.year}"


def format_time(value: datetime) -> str:
    """``09:05 PM`` style label."""
    return value.strftime("%I:%M %p")
