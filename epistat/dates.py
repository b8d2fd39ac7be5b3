"""
Dates and date ranges
=====================

`DATE_FORMAT` is the `M/d/yyyy` pattern used by the dataset and by dates typed
into the CLI. It is passed explicitly to whatever parses dates.

`DateRange` is an inclusive interval of calendar days. Summaries attach one to
every group so a reader knows which days a value covers.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta

# strptime accepts 1/5/2021 as well as 01/05/2021 for this pattern
DATE_FORMAT = "%m/%d/%Y"


def parse_date(text: str, date_format: str = DATE_FORMAT) -> date:
    """Parse a user supplied date, raising ValueError with the expected format."""
    try:
        return datetime.strptime(text.strip(), date_format).date()
    except ValueError:
        raise ValueError(f"Invalid date {text!r}, expected format {date_format}") from None


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of days, `end >= start`."""
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start is None or self.end is None:
            raise ValueError("Start date and end date must not be missing")
        if self.end < self.start:
            raise ValueError("End date cannot be before start date")

    @classmethod
    def from_anchor(cls, anchor: date, number_of_days: int, is_start: bool = True) -> "DateRange":
        """Build a range of `number_of_days` days that starts (or ends) on `anchor`."""
        if anchor is None or number_of_days <= 0:
            raise ValueError("Date must not be missing and number of days must be positive")
        span = timedelta(days=number_of_days - 1)
        if is_start:
            return cls(anchor, anchor + span)
        return cls(anchor - span, anchor)

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __str__(self) -> str:
        if self.start == self.end:
            return self.start.isoformat()
        return f"{self.start.isoformat()} - {self.end.isoformat()}"
