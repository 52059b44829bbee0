from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from ..core.constants import PERCENTAGE_PRECISION
from ..core.enums import AttendanceStatus


def attendance_percentage(present: int, total: int) -> float:
    """present / total * 100 rounded to one decimal; 0.0 when there is nothing to count."""
    if total <= 0:
        return 0.0
    return round(present / total * 100, PERCENTAGE_PRECISION)


@dataclass(frozen=True)
class AttendanceStats:
    present: int = 0
    absent: int = 0
    late: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.late

    @property
    def percentage(self) -> float:
        return attendance_percentage(self.present, self.total)

    @classmethod
    def from_statuses(cls, statuses: Iterable[AttendanceStatus]) -> "AttendanceStats":
        counts = Counter(statuses)
        return cls(
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
            late=counts[AttendanceStatus.LATE],
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "percentage": self.percentage,
        }
