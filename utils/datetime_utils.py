# -*- coding: utf-8 -*-
"""
DateTime Utilities

Centralized birth date/time handling: calendar checks, 12h/24h
conversion, wire formatting and the epoch used for timezone lookups.
"""

import calendar
from datetime import datetime, date, timezone
from typing import Optional


def days_in_month(year: int, month: int) -> int:
    """
    Number of days in the given month, honouring leap years.

    Examples:
        >>> days_in_month(2024, 2)
        29
        >>> days_in_month(2023, 2)
        28
    """
    return calendar.monthrange(year, month)[1]


def is_real_date(year: Optional[int], month: Optional[int], day: Optional[int]) -> bool:
    """Check that (year, month, day) denotes an actual calendar date."""
    if year is None or month is None or day is None:
        return False
    if month < 1 or month > 12 or year < 1:
        return False
    return 1 <= day <= days_in_month(year, month)


def to_24_hour(hour12: int, meridiem: str) -> int:
    """
    Convert a 12-hour clock reading to 24-hour.

    Examples:
        >>> to_24_hour(12, "AM")
        0
        >>> to_24_hour(12, "PM")
        12
        >>> to_24_hour(2, "PM")
        14
    """
    if meridiem == "AM":
        return 0 if hour12 == 12 else hour12
    return 12 if hour12 == 12 else hour12 + 12


def format_wire_date(year: int, month: int, day: int) -> str:
    """Format a birth date the way the backend expects it (YYYY-MM-DD)."""
    return f"{year:04d}-{month:02d}-{day:02d}"


def format_wire_time(hour24: int, minute: int) -> str:
    """Format a birth time the way the backend expects it (HH:MM, 24h)."""
    return f"{hour24:02d}:{minute:02d}"


def birth_epoch_seconds(year: int, month: int, day: int, wall_time: str) -> int:
    """
    Epoch seconds for a birth date combined with a wall-clock time.

    The wall-clock reading is interpreted as UTC so the value does not
    depend on the machine running the wizard.

    Args:
        year, month, day: Birth date
        wall_time: "HH:MM" in 24-hour form

    Examples:
        >>> birth_epoch_seconds(1990, 3, 5, "12:00")
        636638400
    """
    hour, minute = (int(part) for part in wall_time.split(":"))
    moment = datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
    return int(moment.timestamp())


def format_date_display(year: int, month: int, day: int) -> str:
    """Format a birth date for display ("March 5, 1990")."""
    return f"{calendar.month_name[month]} {day}, {year}"


def format_time_display(hour12: int, minute: int, meridiem: str) -> str:
    """Format a birth time for display ("2:30 PM")."""
    return f"{hour12}:{minute:02d} {meridiem}"


def current_year() -> int:
    """Current calendar year."""
    return date.today().year
