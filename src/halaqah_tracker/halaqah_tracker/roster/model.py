from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Person:
    """Santri or Musammi; identity is (role, person_id)."""

    person_id: int
    role: Role
    name: str
    cohort: str
    class_label: str
    code: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict, role: Role) -> "Person":
        return cls(
            person_id=int(row["id"]),
            role=role,
            name=str(row["name"]),
            cohort=str(row["cohort"]),
            class_label=str(row["class_label"]),
            code=row.get("code"),
        )


@dataclass(frozen=True)
class ClassSupervisor:
    supervisor_id: int
    name: str
    cohort: str
    class_label: str
    phone: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "ClassSupervisor":
        return cls(
            supervisor_id=int(row["id"]),
            name=str(row["name"]),
            cohort=str(row["cohort"]),
            class_label=str(row["class_label"]),
            phone=row.get("phone") or None,
        )
