from __future__ import annotations

from src.halaqah_tracker.halaqah_tracker.attendance.model import AttendanceRecord
from src.halaqah_tracker.halaqah_tracker.core.enums import AttendanceStatus, Role, TimeSlot


def make_record(
    record_id: int,
    *,
    name: str = "Ahmad",
    person_id: int = 1,
    role: Role = Role.SANTRI,
    cohort: str = "Aliyah",
    class_label: str = "1A",
    status: AttendanceStatus = AttendanceStatus.HADIR,
    session_date: str = "2024-06-03",
    slot: TimeSlot = TimeSlot.SHUBUH,
    group_id: int = 1,
) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=record_id,
        session_date=session_date,
        slot=slot,
        person_id=person_id,
        role=role,
        name=name,
        cohort=cohort,
        class_label=class_label,
        status=status,
        group_id=group_id,
    )


def as_row(record: AttendanceRecord) -> dict:
    return {
        "id": record.record_id,
        "session_date": record.session_date,
        "slot": record.slot.value,
        "person_id": record.person_id,
        "role": record.role.value,
        "name": record.name,
        "cohort": record.cohort,
        "class_label": record.class_label,
        "status": record.status.value,
        "group_id": record.group_id,
    }
