from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..common.validators import require_any, require_non_empty, require_selected
from ..core.enums import Role, TimeSlot
from ..core.exceptions import NotFoundError, ValidationError
from ..roster.model import Person
from ..store.base import ATTENDANCE, GROUP_MEMBERS, GROUPS, STUDENTS, TEACHERS, RecordStore
from .model import Group, GroupType, encode_slots

logger = logging.getLogger(__name__)


class GroupService:
    def __init__(self, store: RecordStore):
        self._store = store

    def _get_row(self, group_id: int) -> dict:
        rows = self._store.query(GROUPS, {"id": int(group_id)})
        if not rows:
            raise NotFoundError(f"Halaqah #{group_id} tidak ditemukan")
        return rows[0]

    def _require_teacher(self, teacher_id) -> Person:
        require_selected(teacher_id, "Pilih Musammi' terlebih dahulu.")
        rows = self._store.query(TEACHERS, {"id": int(teacher_id)})
        if not rows:
            raise NotFoundError(f"Musammi #{teacher_id} tidak ditemukan")
        return Person.from_row(rows[0], Role.MUSAMMI)

    def _students_for_cohort(self, student_ids: Iterable[int], cohort: str) -> list[Person]:
        students = []
        for sid in student_ids:
            rows = self._store.query(STUDENTS, {"id": int(sid)})
            if not rows:
                raise NotFoundError(f"Santri #{sid} tidak ditemukan")
            person = Person.from_row(rows[0], Role.SANTRI)
            if person.cohort != cohort:
                raise ValidationError(f"Santri {person.name} bukan marhalah {cohort}.")
            students.append(person)
        return students

    @staticmethod
    def _parse_group_type(group_type: Optional[str]) -> GroupType:
        return GroupType(require_non_empty(group_type, "Nama jenis halaqah baru"))

    def create_group(
        self,
        *,
        name: str,
        teacher_id: int,
        cohort: str,
        group_type: str,
        student_ids: Iterable[int] = (),
        slots: Optional[list[TimeSlot]] = None,
    ) -> Group:
        name = require_non_empty(name, "Nama halaqah")
        teacher = self._require_teacher(teacher_id)
        cohort = require_non_empty(cohort, "Marhalah")
        gtype = self._parse_group_type(group_type)
        members = self._students_for_cohort(list(student_ids), cohort)
        slots = [TimeSlot(s) for s in slots] if slots else gtype.default_slots()

        row = self._store.insert(
            GROUPS,
            {
                "name": name,
                "teacher_id": teacher.person_id,
                "cohort": cohort,
                "group_type": gtype.value,
                "slots": encode_slots(slots),
            },
        )
        for student in members:
            self._store.insert(GROUP_MEMBERS, {"group_id": row["id"], "student_id": student.person_id})
        logger.info("halaqah %s created with %d members", row["id"], len(members))
        return Group.from_row(row, teacher=teacher, members=sorted(members, key=lambda p: p.name.lower()))

    def update_group(self, group_id: int, *, teacher_id=None, group_type: Optional[str] = None) -> Group:
        self._get_row(group_id)
        fields = {}
        if teacher_id not in (None, ""):
            fields["teacher_id"] = self._require_teacher(teacher_id).person_id
        if group_type is not None:
            fields["group_type"] = self._parse_group_type(group_type).value
        if fields:
            self._store.update(GROUPS, int(group_id), fields)
        return self.get_group(group_id)

    def add_members(self, group_id: int, student_ids: Iterable[int]) -> list[Person]:
        row = self._get_row(group_id)
        student_ids = require_any(list(student_ids), "Pilih minimal satu santri.")
        existing = {m["student_id"] for m in self._store.query(GROUP_MEMBERS, {"group_id": int(group_id)})}
        added = []
        for student in self._students_for_cohort(student_ids, str(row["cohort"])):
            if student.person_id in existing:
                continue
            self._store.insert(GROUP_MEMBERS, {"group_id": int(group_id), "student_id": student.person_id})
            existing.add(student.person_id)
            added.append(student)
        return added

    def remove_member(self, group_id: int, student_id: int) -> int:
        self._get_row(group_id)
        return self._store.delete_where(GROUP_MEMBERS, {"group_id": int(group_id), "student_id": int(student_id)})

    def delete_group(self, group_id: int) -> None:
        """Delete a halaqah together with its membership links and attendance history.

        Order matters: links, then attendance rows, then the group row. The steps
        are separate store calls; a failure midway leaves orphaned rows that a
        repeated call cleans up.
        """
        self._get_row(group_id)
        links = self._store.delete_where(GROUP_MEMBERS, {"group_id": int(group_id)})
        logger.info("halaqah %s: removed %d member links", group_id, links)
        rows = self._store.delete_where(ATTENDANCE, {"group_id": int(group_id)})
        logger.info("halaqah %s: removed %d attendance rows", group_id, rows)
        self._store.delete(GROUPS, int(group_id))
        logger.info("halaqah %s deleted", group_id)

    def _hydrate(self, row: dict, teachers: dict, students: dict) -> Group:
        member_ids = [m["student_id"] for m in self._store.query(GROUP_MEMBERS, {"group_id": row["id"]})]
        members = [students[sid] for sid in member_ids if sid in students]
        members.sort(key=lambda p: p.name.lower())
        return Group.from_row(row, teacher=teachers.get(int(row["teacher_id"])), members=members)

    def get_group(self, group_id: int) -> Group:
        row = self._get_row(group_id)
        return self._hydrate(row, self._teacher_index(), self._student_index())

    def list_groups(self) -> list[Group]:
        teachers = self._teacher_index()
        students = self._student_index()
        return [self._hydrate(r, teachers, students) for r in self._store.query(GROUPS, order_by="name")]

    def _teacher_index(self) -> dict[int, Person]:
        return {int(r["id"]): Person.from_row(r, Role.MUSAMMI) for r in self._store.query(TEACHERS)}

    def _student_index(self) -> dict[int, Person]:
        return {int(r["id"]): Person.from_row(r, Role.SANTRI) for r in self._store.query(STUDENTS)}
