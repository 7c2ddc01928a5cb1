from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.enums import ProgressType


@dataclass(frozen=True)
class ProgressRecord:
    progress_id: int
    student_id: int
    month_key: str
    progress_type: ProgressType
    value: str

    @classmethod
    def from_row(cls, row: dict) -> "ProgressRecord":
        return cls(
            progress_id=int(row["id"]),
            student_id=int(row["student_id"]),
            month_key=str(row["month_key"]),
            progress_type=ProgressType(row["progress_type"]),
            value=str(row["value"]),
        )

    @property
    def numeric_value(self) -> float:
        try:
            number = float(self.value)
        except ValueError:
            return 0.0
        return number if math.isfinite(number) else 0.0


@dataclass(frozen=True)
class ProgressEntry:
    student_id: int
    month_key: str
    progress_type: ProgressType
    value: str
