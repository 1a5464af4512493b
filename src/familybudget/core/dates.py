#!/usr/bin/env python3
"""
Date Primitives

FinancialDate wraps a calendar date with consistent formatting, and DateRange
describes a reporting period that can be split into bounded sub-ranges for
APIs that reject long period filters.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, timedelta

DEFAULT_CHUNK_DAYS = 7


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, date_format).date())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def __str__(self) -> str:
        return self.to_iso_string()

    def __lt__(self, other: "FinancialDate") -> bool:
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        return self.date >= other.date


class PeriodChunks:
    """
    Restartable sequence of (start, end) sub-ranges covering a DateRange.

    Every iteration starts over from the beginning of the range. Each pair is
    inclusive on both ends and spans at most ``max_days`` calendar days.
    """

    def __init__(self, start: date, end: date, max_days: int = DEFAULT_CHUNK_DAYS):
        if max_days < 1:
            raise ValueError(f"max_days must be at least 1, got {max_days}")
        self.start = start
        self.end = end
        self.max_days = max_days

    def __iter__(self) -> Iterator[tuple[date, date]]:
        if self.start > self.end:
            return
        current = self.start
        while True:
            if (self.end - current).days < self.max_days:
                yield current, self.end
                return
            chunk_end = current + timedelta(days=self.max_days - 1)
            yield current, chunk_end
            current = chunk_end + timedelta(days=1)

    def __len__(self) -> int:
        days = (self.end - self.start).days + 1
        if days <= 0:
            return 0
        return -(-days // self.max_days)

    def __repr__(self) -> str:
        return f"PeriodChunks(start={self.start!r}, end={self.end!r}, max_days={self.max_days})"


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range for a report."""

    start: date
    end: date

    @classmethod
    def month_to_date(cls, today: date | None = None) -> "DateRange":
        """From the first of the current month up to and including today."""
        if today is None:
            today = date.today()
        return cls(start=today.replace(day=1), end=today)

    @property
    def days(self) -> int:
        """Number of calendar days covered (zero for an inverted range)."""
        return max((self.end - self.start).days + 1, 0)

    def chunks(self, max_days: int = DEFAULT_CHUNK_DAYS) -> PeriodChunks:
        """Split into contiguous sub-ranges of at most ``max_days`` days."""
        return PeriodChunks(self.start, self.end, max_days)

    def month_label(self) -> str:
        """Human label for the month the range starts in, e.g. 'January 2025'."""
        return self.start.strftime("%B %Y")

    def month_key(self) -> str:
        """File-name key for the month the range starts in, e.g. '2025-01'."""
        return self.start.strftime("%Y-%m")

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"
