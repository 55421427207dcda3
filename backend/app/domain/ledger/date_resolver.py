"""
Date Resolver.

Parses user supplied date strings and turns calendar periods into
half-open [start, end) ranges of local-midnight datetimes.

Resolution order for a period summary:
1. `month` (YYYY-MM) if given
2. `year` (YYYY) if given
3. The current month
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from backend.app.core.exceptions import InvalidDateFormatError

DAY_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")
_YEAR_PATTERN = re.compile(r"^\d{4}$")


@dataclass(frozen=True)
class Period:
    """A labelled half-open time range."""
    label: str
    start: datetime
    end: datetime


def _first_of_next_month(moment: datetime) -> datetime:
    if moment.month == 12:
        return moment.replace(year=moment.year + 1, month=1)
    return moment.replace(month=moment.month + 1)


class DateResolver:

    @staticmethod
    def parse_day(value: str, message: str = "Format tanggal salah. Gunakan YYYY-MM-DD") -> datetime:
        """
        Parse a `YYYY-MM-DD` string into local midnight.

        Raises:
            InvalidDateFormatError: If the string is not a real calendar day
                in exactly that format.
        """
        if not value or not _DAY_PATTERN.match(value):
            raise InvalidDateFormatError(message)
        try:
            return datetime.strptime(value, DAY_FORMAT)
        except ValueError:
            raise InvalidDateFormatError(message)

    @staticmethod
    def day_range(start: datetime, end: datetime) -> Period:
        """Range covering every instant from `start` through the whole `end` day."""
        return Period(
            label=f"{start.strftime(DAY_FORMAT)}..{end.strftime(DAY_FORMAT)}",
            start=start,
            end=end + timedelta(days=1),
        )

    @staticmethod
    def month_range(value: str) -> Period:
        """[first-of-month, first-of-next-month) for a `YYYY-MM` string."""
        message = "Format bulan salah. Gunakan YYYY-MM"
        if not value or not _MONTH_PATTERN.match(value):
            raise InvalidDateFormatError(message)
        try:
            start = datetime.strptime(value, MONTH_FORMAT)
            end = _first_of_next_month(start)
        except ValueError:
            raise InvalidDateFormatError(message)
        return Period(label=value, start=start, end=end)

    @staticmethod
    def year_range(value: str) -> Period:
        """[first-of-year, first-of-next-year) for a `YYYY` string."""
        if not value or not _YEAR_PATTERN.match(value) or not 1 <= int(value) < 9999:
            raise InvalidDateFormatError("Format tahun salah. Gunakan YYYY")
        year = int(value)
        return Period(label=value, start=datetime(year, 1, 1), end=datetime(year + 1, 1, 1))

    @staticmethod
    def current_month_range(today: Optional[date] = None) -> Period:
        """Range of the month containing `today` (defaults to the local date)."""
        today = today or date.today()
        start = datetime(today.year, today.month, 1)
        return Period(label=start.strftime(MONTH_FORMAT), start=start, end=_first_of_next_month(start))

    @staticmethod
    def resolve_period(
        month: Optional[str] = None,
        year: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Period:
        """Pick month, else year, else current month. Never combines the two."""
        if month:
            return DateResolver.month_range(month)
        if year:
            return DateResolver.year_range(year)
        return DateResolver.current_month_range(today)
