"""
Visit Week Calendar Utility

Monday-start week arithmetic for weekly comparisons and visit planning.
Sunday belongs to the week that started the previous Monday.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Tuple, Union

DateLike = Union[date, datetime]

# Plannable days, Monday (1) through Saturday (6).
VISIT_DAY_NAMES = {
    1: "Senin",
    2: "Selasa",
    3: "Rabu",
    4: "Kamis",
    5: "Jumat",
    6: "Sabtu",
}

END_OF_DAY = time(23, 59, 59, 999000)


def to_date(value: DateLike) -> date:
    """Strip time-of-day from a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def day_bounds(start: DateLike, end: DateLike) -> Tuple[datetime, datetime]:
    """Return (start 00:00:00.000, end 23:59:59.999) for the calendar days given."""
    return (
        datetime.combine(to_date(start), time.min),
        datetime.combine(to_date(end), END_OF_DAY),
    )


@dataclass(frozen=True)
class WeekWindow:
    """Inclusive Monday..Sunday date range."""
    start: date
    end: date

    def contains(self, value: DateLike) -> bool:
        return self.start <= to_date(value) <= self.end

    def previous(self) -> "WeekWindow":
        start = self.start - timedelta(days=7)
        return WeekWindow(start=start, end=start + timedelta(days=6))


class WeekCalendar:
    """
    Calculator for Monday-start weeks.

    Usage:
        window = WeekCalendar.week_of(date(2025, 6, 15))  # a Sunday
        window.start  # date(2025, 6, 9), the Monday six days prior
    """

    @staticmethod
    def week_start(today: DateLike) -> date:
        day = to_date(today)
        # date.weekday(): Mon=0 .. Sun=6
        return day - timedelta(days=day.weekday())

    @classmethod
    def week_of(cls, today: DateLike) -> WeekWindow:
        start = cls.week_start(today)
        return WeekWindow(start=start, end=start + timedelta(days=6))

    @classmethod
    def visit_days(cls, today: DateLike) -> List[Tuple[int, str, date, bool]]:
        """
        The six plannable days of the current week.

        Returns:
            List of (day_index, day_name, calendar_date, is_today) tuples
        """
        day = to_date(today)
        monday = cls.week_start(day)
        days = []
        for index, name in VISIT_DAY_NAMES.items():
            current = monday + timedelta(days=index - 1)
            days.append((index, name, current, current == day))
        return days

    @staticmethod
    def days_between(start: DateLike, end: DateLike) -> int:
        """Whole days from start to end after normalizing both to midnight."""
        return (to_date(end) - to_date(start)).days
