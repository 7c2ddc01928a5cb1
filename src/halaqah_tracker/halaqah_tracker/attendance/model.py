from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus, Role, TimeSlot


@dataclass(frozen=True)
class AttendanceRecord:
    """One attendance event.

    ``name``, ``cohort`` and ``class_label`` are copied from the roster when the
    row is written, so reports show the person as they were on that day.
    """

    record_id: int
    session_date: str
    slot: TimeSlot
    person_id: int
    role: Role
    name: str
    cohort: str
    class_label: str
    status: AttendanceStatus
    group_id: int

    @classmethod
    def from_row(cls, row: dict) -> "AttendanceRecord":
        return cls(
            record_id=int(row["id"]),
            session_date=str(row["session_date"]),
            slot=TimeSlot(row["slot"]),
            person_id=int(row["person_id"]),
            role=Role(row["role"]),
            name=str(row["name"]),
            cohort=str(row["cohort"]),
            class_label=str(row["class_label"]),
            status=AttendanceStatus(row["status"]),
            group_id=int(row["group_id"]),
        )

    @property
    def person_key(self) -> tuple[str, int]:
        return (self.role.value, self.person_id)


@dataclass(frozen=True)
class AttendanceEntry:
    """Input for one person in a session submission."""

    person_id: int
    role: Role
    group_id: int
    status: AttendanceStatus = AttendanceStatus.HADIR

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceEntry":
        return cls(
            person_id=int(data["person_id"]),
            role=Role(data["role"]),
            group_id=int(data["group_id"]),
            status=AttendanceStatus(data.get("status") or AttendanceStatus.HADIR.value),
        )

