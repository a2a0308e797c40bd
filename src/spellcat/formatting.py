"""Display formatting for dates and durations."""
from datetime import datetime


def format_date(moment: datetime) -> str:
    """Format as DD/MM/YYYY."""
    return moment.strftime("%d/%m/%Y")


def format_datetime(moment: datetime) -> str:
    """Format as DD/MM/YYYY, HH:MM."""
    return moment.strftime("%d/%m/%Y, %H:%M")


def format_duration(seconds: int) -> str:
    """Format a number of seconds as ``"3m 5s"`` or ``"45s"``."""
    minutes, remaining = divmod(int(seconds), 60)
    if minutes > 0:
        return f"{minutes}m {remaining}s"
    return f"{remaining}s"
