from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.enums import AttendanceStatus, Role, TimeSlot
from ..core.exceptions import NotFoundError, ValidationError
from ..groups.model import Group
from ..store.base import ATTENDANCE, STUDENTS, TEACHERS, RecordStore
from .model import AttendanceEntry, AttendanceRecord

logger = logging.getLogger(__name__)

_ROSTER_BY_ROLE = {
    Role.SANTRI: STUDENTS,
    Role.MUSAMMI: TEACHERS,
}


def _parse_slot(slot) -> TimeSlot:
    if not slot or str(slot).lower() == "all":
        raise ValidationError("Silakan pilih waktu absensi yang spesifik.")
    try:
        return TimeSlot(slot)
    except ValueError as exc:
        raise ValidationError(f"Waktu absensi tidak dikenal: {slot}") from exc


def _parse_status(status) -> AttendanceStatus:
    try:
        return AttendanceStatus(status)
    except ValueError as exc:
        raise ValidationError(f"Status absensi tidak dikenal: {status}") from exc


def _parse_date(value) -> str:
    if not value:
        raise ValidationError("Tanggal wajib diisi.")
    try:
        return parse_iso_date(str(value)).isoformat()
    except ValueError as exc:
        raise ValidationError(f"Format tanggal tidak valid: {value}") from exc


def session_entries(groups: Iterable[Group], overrides: Optional[dict] = None) -> list[AttendanceEntry]:
    """Everyone in ``groups`` (musammi first, then santri), defaulting to Hadir.

    ``overrides`` maps ``(role, person_id)`` to a status chosen for that person.
    """
    overrides = overrides or {}
    entries = []
    for group in groups:
        people = [(Role.MUSAMMI, group.teacher_id)] + [(Role.SANTRI, m.person_id) for m in group.members]
        for role, person_id in people:
            status = overrides.get((role, person_id), AttendanceStatus.HADIR)
            entries.append(AttendanceEntry(person_id=person_id, role=role, group_id=group.group_id, status=status))
    return entries


class AttendanceService:
    def __init__(self, store: RecordStore):
        self._store = store

    def _snapshot_person(self, role: Role, person_id: int) -> dict:
        rows = self._store.query(_ROSTER_BY_ROLE[role], {"id": int(person_id)})
        if not rows:
            raise NotFoundError(f"{role.value} #{person_id} tidak ditemukan")
        return rows[0]

    def record_session(self, session_date, slot, entries: Iterable[AttendanceEntry]) -> list[AttendanceRecord]:
        slot = _parse_slot(slot)
        session_date = _parse_date(session_date)
        entries = list(entries)
        if not entries:
            raise ValidationError("Tidak ada data absensi untuk disimpan.")

        # All lookups happen before the first insert.
        rows = []
        for entry in entries:
            person = self._snapshot_person(entry.role, entry.person_id)
            rows.append(
                {
                    "session_date": session_date,
                    "slot": slot.value,
                    "person_id": int(entry.person_id),
                    "role": entry.role.value,
                    "name": person["name"],
                    "cohort": person["cohort"],
                    "class_label": person["class_label"],
                    "status": AttendanceStatus(entry.status).value,
                    "group_id": int(entry.group_id),
                }
            )
        saved = [AttendanceRecord.from_row(self._store.insert(ATTENDANCE, row)) for row in rows]
        logger.info("recorded %d attendance rows for %s %s", len(saved), session_date, slot.value)
        return saved

    def get_record(self, record_id: int) -> AttendanceRecord:
        rows = self._store.query(ATTENDANCE, {"id": int(record_id)})
        if not rows:
            raise NotFoundError(f"Absensi #{record_id} tidak ditemukan")
        return AttendanceRecord.from_row(rows[0])

    def edit_record(self, record_id: int, *, status=None, session_date=None, slot=None) -> AttendanceRecord:
        fields = {}
        if status is not None:
            fields["status"] = _parse_status(status).value
        if session_date is not None:
            fields["session_date"] = _parse_date(session_date)
        if slot is not None:
            fields["slot"] = _parse_slot(slot).value
        if fields:
            self._store.update(ATTENDANCE, int(record_id), fields)
        return self.get_record(record_id)

    def delete_record(self, record_id: int) -> None:
        self.get_record(record_id)
        self._store.delete(ATTENDANCE, int(record_id))

    def delete_batch(self, session_date, slot) -> int:
        deleted = self._store.delete_where(
            ATTENDANCE,
            {"session_date": _parse_date(session_date), "slot": _parse_slot(slot).value},
        )
        logger.info("deleted %d attendance rows for %s %s", deleted, session_date, slot)
        return deleted

    def list_records(self) -> list[AttendanceRecord]:
        return [AttendanceRecord.from_row(r) for r in self._store.query(ATTENDANCE)]

    def list_for_group(self, group_id: int) -> list[AttendanceRecord]:
        return [AttendanceRecord.from_row(r) for r in self._store.query(ATTENDANCE, {"group_id": int(group_id)})]
