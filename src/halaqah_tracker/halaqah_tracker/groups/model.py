from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import ALL_TIME_SLOTS, GROUP_TYPE_MORNING, WELL_KNOWN_GROUP_TYPES
from ..core.enums import TimeSlot
from ..roster.model import Person


@dataclass(frozen=True)
class GroupType:
    """Halaqah category: one of the well-known types or a user-defined label."""

    value: str

    @property
    def is_well_known(self) -> bool:
        return self.value in WELL_KNOWN_GROUP_TYPES

    def default_slots(self) -> list[TimeSlot]:
        if self.value == GROUP_TYPE_MORNING:
            return [TimeSlot.DHUHA]
        return [TimeSlot.SHUBUH, TimeSlot.ASHAR, TimeSlot.ISYA]

    def __str__(self) -> str:
        return self.value


def encode_slots(slots: list[TimeSlot]) -> str:
    return ",".join(TimeSlot(s).value for s in slots)


def decode_slots(raw: Optional[str]) -> list[TimeSlot]:
    wanted = {part.strip() for part in (raw or "").split(",") if part.strip()}
    return [s for s in ALL_TIME_SLOTS if s.value in wanted]


@dataclass(frozen=True)
class Group:
    group_id: int
    name: str
    teacher_id: int
    cohort: str
    group_type: GroupType
    slots: list[TimeSlot]
    teacher: Optional[Person] = None
    members: list[Person] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: dict, *, teacher: Optional[Person] = None, members=None) -> "Group":
        return cls(
            group_id=int(row["id"]),
            name=str(row["name"]),
            teacher_id=int(row["teacher_id"]),
            cohort=str(row["cohort"]),
            group_type=GroupType(str(row["group_type"])),
            slots=decode_slots(row.get("slots")),
            teacher=teacher,
            members=list(members or []),
        )

    @property
    def key(self) -> str:
        return str(self.group_id)
