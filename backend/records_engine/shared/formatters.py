"""
Formatting helpers for attempt values in user-facing messages.
"""

from .constants import DNF, DNS, EventFormat


def format_centiseconds(centiseconds: int) -> str:
    """Format a time in centiseconds.

    1234    → "12.34"
    60000   → "10:00.00"
    360000  → "1:00:00"
    """
    if centiseconds == DNF:
        return "DNF"
    if centiseconds == DNS:
        return "DNS"

    hours, remainder = divmod(centiseconds, 360000)
    minutes, remainder = divmod(remainder, 6000)
    seconds, cs = divmod(remainder, 100)

    # Decimals are not shown for times of an hour or longer
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    if minutes:
        return f"{minutes}:{seconds:02d}.{cs:02d}"
    return f"{seconds}.{cs:02d}"


def format_result_value(value: int, event_format: str, is_average: bool = False) -> str:
    """Format a best or average for log and error messages."""
    if value <= 0:
        return format_centiseconds(value) if value in (DNF, DNS) else "-"
    if event_format == EventFormat.TIME:
        return format_centiseconds(value)
    if event_format == EventFormat.NUMBER and is_average:
        # Number averages are stored multiplied by 100
        return f"{value / 100:.2f}"
    return str(value)
