"""
Timesheet record model and CSV serialization.
"""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class Shift(StrEnum):
    """Shift choices offered by the form."""

    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    NIGHT = "Night"


@dataclass(frozen=True, kw_only=True)
class AttendanceRecord:
    """
    One timesheet entry, created per save and never stored locally.

    Attributes:
        date: Calendar day of the entry.
        name: Employee name.
        shift: Shift label.
        hours: Hours worked, kept as entered.
    """

    date: date
    name: str
    shift: str
    hours: str

    def to_csv_line(self) -> str:
        """
        Serialize to ``YYYY-MM-DD,"<name>","<shift>",<hours>`` plus newline.

        Embedded double quotes are written as-is.
        """
        return f'{self.date.isoformat()},"{self.name}","{self.shift}",{self.hours}\n'
