from __future__ import annotations

from datetime import date, datetime, timedelta

MONTH_NAMES = [
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
]

# Indexed by date.weekday() (Monday == 0).
DAY_NAMES = ["Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Ahad"]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month_key(value: str) -> date:
    """Parse YYYY-MM month key into the first day of that month."""
    return datetime.strptime(value, "%Y-%m").date()


def month_key(value: date) -> str:
    return value.strftime("%Y-%m")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_week(value: date) -> date:
    """Monday of the week containing ``value``; Sunday belongs to the preceding Monday."""
    return value - timedelta(days=value.weekday())


def end_of_week(value: date) -> date:
    return start_of_week(value) + timedelta(days=6)


def shift_months(value: date, amount: int) -> date:
    """First day of the month ``amount`` months after ``value`` (negative goes back)."""
    index = value.year * 12 + (value.month - 1) + amount
    return date(index // 12, index % 12 + 1, 1)


def format_long_day(value: date) -> str:
    """``Senin, 3 Juni 2024``."""
    return f"{DAY_NAMES[value.weekday()]}, {value.day} {MONTH_NAMES[value.month - 1]} {value.year}"


def format_day_month_short(value: date) -> str:
    """``3 Jun``."""
    return f"{value.day} {MONTH_NAMES[value.month - 1][:3]}"


def format_day_month_year_short(value: date) -> str:
    """``3 Jun 2024``."""
    return f"{format_day_month_short(value)} {value.year}"


def format_long_date(value: date) -> str:
    """``3 Juni 2024``."""
    return f"{value.day} {MONTH_NAMES[value.month - 1]} {value.year}"


def format_month_year(value: date) -> str:
    """``Juni 2024``."""
    return f"{MONTH_NAMES[value.month - 1]} {value.year}"


def format_day_slash(value: date) -> str:
    """``Senin, 3/6``; used in weekly lists and the attendance book."""
    return f"{DAY_NAMES[value.weekday()]}, {value.day}/{value.month}"
