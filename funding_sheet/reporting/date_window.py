"""Calendar month windows in Unix seconds (local time)."""

from dataclasses import dataclass
from datetime import datetime, timedelta

MONTHS = [
    "JAN",
    "FEB",
    "MAR",
    "APR",
    "MAY",
    "JUN",
    "JUL",
    "AUG",
    "SEP",
    "OCT",
    "NOV",
    "DEC",
]


@dataclass(frozen=True)
class DateWindow:
    year: int
    month: int  # 1-based
    first_day: int  # local midnight of day 1
    last_day: int  # 23:59:59 of the last day, inclusive

    @property
    def label(self) -> str:
        return month_label(self.month)

    def as_params(self) -> dict[str, int]:
        return {"start_time": self.first_day, "end_time": self.last_day}


def month_label(month: int) -> str:
    """1 -> "JAN", 12 -> "DEC"."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    return MONTHS[month - 1]


def resolve_window(
    year: int | None = None,
    month: int | None = None,
    now: datetime | None = None,
) -> DateWindow:
    """Window covering the whole of year/month; missing parts default to now."""
    current = now or datetime.now()
    year = year if year is not None else current.year
    month = month if month is not None else current.month

    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")

    start = datetime(year, month, 1)
    next_start = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    end = next_start - timedelta(seconds=1)

    return DateWindow(
        year=year,
        month=month,
        first_day=int(start.timestamp()),
        last_day=int(end.timestamp()),
    )
