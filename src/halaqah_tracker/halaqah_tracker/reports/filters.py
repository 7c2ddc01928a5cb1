from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterable, Mapping, Optional

from ..attendance.model import AttendanceRecord

ALL = "all"

# Query-string names accepted by AttendanceFilter.from_args.
_ARG_NAMES = {
    "date_start": ("start", "date_start"),
    "date_end": ("end", "date_end"),
    "cohort": ("cohort", "marhalah"),
    "class_label": ("class", "kelas", "class_label"),
    "role": ("role", "peran"),
    "status": ("status",),
    "name": ("name", "q"),
}


def _constraint(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.lower() == ALL:
        return None
    return value


@dataclass(frozen=True)
class AttendanceFilter:
    """Conjunction of optional constraints; ``None`` means unconstrained."""

    date_start: Optional[str] = None
    date_end: Optional[str] = None
    cohort: Optional[str] = None
    class_label: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, _constraint(getattr(self, f.name)))

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "AttendanceFilter":
        values = {}
        for field_name, names in _ARG_NAMES.items():
            values[field_name] = next((args.get(n) for n in names if args.get(n) is not None), None)
        return cls(**values)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def matches(self, record: AttendanceRecord) -> bool:
        # ISO dates compare correctly as strings.
        if self.date_start and record.session_date < self.date_start:
            return False
        if self.date_end and record.session_date > self.date_end:
            return False
        if self.cohort and record.cohort != self.cohort:
            return False
        if self.class_label and record.class_label != self.class_label:
            return False
        if self.role and record.role.value != self.role:
            return False
        if self.status and record.status.value != self.status:
            return False
        if self.name and self.name.lower() not in record.name.lower():
            return False
        return True


def apply_filter(records: Iterable[AttendanceRecord], criteria: AttendanceFilter) -> list[AttendanceRecord]:
    return [r for r in records if criteria.matches(r)]
