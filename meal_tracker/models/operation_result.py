"""
Result objects for store operations and query parameters.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass
class OperationResult:
    """
    Outcome of a save or delete against a repository.

    Attributes:
        ok: True if the operation succeeded
        message: Human-readable outcome or error
        record_id: Identifier of the affected record, if any
    """
    ok: bool
    message: str = ""
    record_id: Optional[str] = None

    @classmethod
    def success(cls, message: str = "", record_id: Optional[str] = None) -> 'OperationResult':
        """Build a successful result."""
        return cls(True, message, record_id)

    @classmethod
    def failure(cls, message: str, record_id: Optional[str] = None) -> 'OperationResult':
        """Build a failed result."""
        return cls(False, message, record_id)

    def __bool__(self) -> bool:
        return self.ok


class TimeRange(Enum):
    """Preset statistics windows."""

    WEEK = 7
    MONTH = 30
    YEAR = 365

    @property
    def days(self) -> int:
        """Window length in days."""
        return self.value

    @property
    def label(self) -> str:
        """Display label ("Week", "Month", "Year")."""
        return self.name.capitalize()

    @property
    def axis_format(self) -> str:
        """strftime format for chart axis labels."""
        return {
            TimeRange.WEEK: "%a",
            TimeRange.MONTH: "%d",
            TimeRange.YEAR: "%b",
        }[self]

    @classmethod
    def parse(cls, text: str) -> int:
        """
        Parse a window name or day count.

        Args:
            text: "week", "month", "year" (any case) or a positive integer

        Returns:
            Number of days

        Raises:
            ValueError: If text is neither a preset nor a positive integer
        """
        token = text.strip()
        for member in cls:
            if token.lower() == member.name.lower():
                return member.days

        try:
            days = int(token)
        except ValueError:
            raise ValueError(f"Unknown time range: '{text}' (use week, month, year or a number of days)")

        if days <= 0:
            raise ValueError(f"Time range must be positive, got {days}")
        return days

    @classmethod
    def axis_format_for(cls, days: int) -> str:
        """Axis label format for an arbitrary window length."""
        if days <= cls.WEEK.days:
            return cls.WEEK.axis_format
        if days <= cls.MONTH.days:
            return cls.MONTH.axis_format
        return cls.YEAR.axis_format
