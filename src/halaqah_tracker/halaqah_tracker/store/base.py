from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

STUDENTS = "students"
TEACHERS = "teachers"
CLASS_SUPERVISORS = "class_supervisors"
GROUPS = "groups"
GROUP_MEMBERS = "group_members"
ATTENDANCE = "attendance"
PROGRESS = "progress"

COLLECTIONS = (
    STUDENTS,
    TEACHERS,
    CLASS_SUPERVISORS,
    GROUPS,
    GROUP_MEMBERS,
    ATTENDANCE,
    PROGRESS,
)


class RecordStore(Protocol):
    """Narrow CRUD boundary over the entity collections.

    Rows are plain dicts; ``where`` is a conjunction of column equality checks.
    """

    def query(
        self,
        collection: str,
        where: Optional[Mapping[str, Any]] = None,
        *,
        order_by: Optional[str] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def insert(self, collection: str, record: Mapping[str, Any]) -> dict:
        raise NotImplementedError

    def update(self, collection: str, record_id: int, fields: Mapping[str, Any]) -> None:
        """Raises NotFoundError when ``record_id`` is absent."""

        raise NotImplementedError

    def delete(self, collection: str, record_id: int) -> None:
        raise NotImplementedError

    def delete_where(self, collection: str, where: Mapping[str, Any]) -> int:
        raise NotImplementedError
