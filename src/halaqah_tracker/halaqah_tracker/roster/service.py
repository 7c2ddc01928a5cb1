from __future__ import annotations

from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..store.base import CLASS_SUPERVISORS, STUDENTS, TEACHERS, RecordStore
from .model import ClassSupervisor, Person

_COLLECTION_BY_ROLE = {
    Role.SANTRI: STUDENTS,
    Role.MUSAMMI: TEACHERS,
}


class RosterService:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_people(self, role: Role) -> list[Person]:
        rows = self._store.query(_COLLECTION_BY_ROLE[Role(role)], order_by="name")
        return [Person.from_row(r, Role(role)) for r in rows]

    def list_students(self) -> list[Person]:
        return self.list_people(Role.SANTRI)

    def list_teachers(self) -> list[Person]:
        return self.list_people(Role.MUSAMMI)

    def get_person(self, role: Role, person_id: int) -> Person:
        rows = self._store.query(_COLLECTION_BY_ROLE[Role(role)], {"id": int(person_id)})
        if not rows:
            raise NotFoundError(f"{Role(role).value} #{person_id} tidak ditemukan")
        return Person.from_row(rows[0], Role(role))

    def add_person(
        self,
        role: Role,
        *,
        name: str,
        cohort: str,
        class_label: str,
        code: Optional[str] = None,
    ) -> Person:
        row = self._store.insert(
            _COLLECTION_BY_ROLE[Role(role)],
            {
                "code": (code or "").strip() or None,
                "name": require_non_empty(name, "Nama"),
                "cohort": require_non_empty(cohort, "Marhalah"),
                "class_label": require_non_empty(class_label, "Kelas"),
            },
        )
        return Person.from_row(row, Role(role))

    def add_student(self, **fields) -> Person:
        return self.add_person(Role.SANTRI, **fields)

    def add_teacher(self, **fields) -> Person:
        return self.add_person(Role.MUSAMMI, **fields)

    def list_supervisors(self) -> list[ClassSupervisor]:
        return [ClassSupervisor.from_row(r) for r in self._store.query(CLASS_SUPERVISORS, order_by="name")]

    def find_supervisor(self, cohort: str, class_label: str) -> Optional[ClassSupervisor]:
        rows = self._store.query(CLASS_SUPERVISORS, {"cohort": cohort, "class_label": class_label})
        return ClassSupervisor.from_row(rows[0]) if rows else None

    def count_students(self, cohort: str, class_label: str) -> int:
        return len(self._store.query(STUDENTS, {"cohort": cohort, "class_label": class_label}))

    def add_supervisor(
        self,
        *,
        name: str,
        cohort: str,
        class_label: str,
        phone: Optional[str] = None,
    ) -> ClassSupervisor:
        row = self._store.insert(
            CLASS_SUPERVISORS,
            {
                "name": require_non_empty(name, "Nama wali kelas"),
                "cohort": require_non_empty(cohort, "Marhalah"),
                "class_label": require_non_empty(class_label, "Kelas"),
                "phone": (phone or "").strip() or None,
            },
        )
        return ClassSupervisor.from_row(row)
