"""Grouping of attendance records into recap views.

Every function here is pure: the input list is never mutated and each record
lands in exactly one group per view, so per-status sums over the groups equal
the per-status counts of the input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..core.constants import ALL_COHORTS, ALL_STATUSES, ALL_TIME_SLOTS, CLASSES_BY_COHORT, COHORT_ORDER
from ..core.enums import AttendanceStatus, TimeSlot


@dataclass
class StatusTally:
    hadir: int = 0
    izin: int = 0
    sakit: int = 0
    alpa: int = 0
    terlambat: int = 0
    total: int = 0

    def add(self, status: AttendanceStatus) -> None:
        attr = AttendanceStatus(status).name.lower()
        setattr(self, attr, getattr(self, attr) + 1)
        self.total += 1

    def count(self, status: AttendanceStatus) -> int:
        return getattr(self, AttendanceStatus(status).name.lower())

    @property
    def absent(self) -> int:
        """Everything that is not Hadir."""
        return self.total - self.hadir

    def as_dict(self) -> dict:
        out = {s.value: self.count(s) for s in ALL_STATUSES}
        out["Total"] = self.total
        return out


def tally(records: Iterable[AttendanceRecord]) -> StatusTally:
    out = StatusTally()
    for r in records:
        out.add(r.status)
    return out


@dataclass
class PersonRecap:
    role: str
    person_id: int
    name: str
    cohort: str
    class_label: str
    tally: StatusTally = field(default_factory=StatusTally)


@dataclass
class ClassRecap:
    cohort: str
    class_label: str
    tally: StatusTally = field(default_factory=StatusTally)

    @property
    def key(self) -> str:
        return class_key(self.cohort, self.class_label)

    @property
    def label(self) -> str:
        return f"{self.class_label} ({self.cohort})"

    @property
    def percent_present(self) -> str:
        return percent(self.tally.hadir, self.tally.total)


@dataclass
class TimeRecap:
    session_date: str
    slot: TimeSlot
    tally: StatusTally = field(default_factory=StatusTally)


@dataclass
class SlotRecap:
    slot: TimeSlot
    tally: StatusTally = field(default_factory=StatusTally)


@dataclass
class DayRecap:
    day: date
    tally: StatusTally = field(default_factory=StatusTally)


def class_key(cohort: str, class_label: str) -> str:
    return f"{cohort}-{class_label}"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent(part: int, whole: int) -> str:
    if whole <= 0:
        return "0%"
    return f"{round_half_up(part / whole * 100)}%"


def cohort_rank(cohort: str) -> tuple[int, str]:
    if cohort in COHORT_ORDER:
        return (COHORT_ORDER.index(cohort), "")
    return (len(COHORT_ORDER), cohort)


def class_rank(cohort: str, class_label: str) -> tuple[int, int, str]:
    """Known classes in their fixed order, then unknown labels alphabetically."""
    known = CLASSES_BY_COHORT.get(cohort, [])
    if class_label in known:
        return (0, known.index(class_label), "")
    return (1, 0, class_label)


def slot_rank(slot: TimeSlot) -> int:
    return ALL_TIME_SLOTS.index(TimeSlot(slot))


def aggregate_by_person(records: Iterable[AttendanceRecord]) -> list[PersonRecap]:
    groups: dict[tuple[str, int], PersonRecap] = {}
    for r in records:
        key = r.person_key
        if key not in groups:
            # First-seen display fields win if a person's snapshot changes mid-period.
            groups[key] = PersonRecap(
                role=r.role.value,
                person_id=r.person_id,
                name=r.name,
                cohort=r.cohort,
                class_label=r.class_label,
            )
        groups[key].tally.add(r.status)

    return sorted(
        groups.values(),
        key=lambda g: (
            cohort_rank(g.cohort),
            class_rank(g.cohort, g.class_label),
            g.name.lower(),
            g.name,
            g.role,
            g.person_id,
        ),
    )


def aggregate_by_class(records: Iterable[AttendanceRecord]) -> list[ClassRecap]:
    groups: dict[tuple[str, str], ClassRecap] = {}
    for r in records:
        key = (r.cohort, r.class_label)
        if key not in groups:
            groups[key] = ClassRecap(cohort=r.cohort, class_label=r.class_label)
        groups[key].tally.add(r.status)

    return sorted(groups.values(), key=lambda g: (cohort_rank(g.cohort), class_rank(g.cohort, g.class_label)))


def aggregate_by_time(records: Iterable[AttendanceRecord]) -> list[TimeRecap]:
    groups: dict[tuple[str, TimeSlot], TimeRecap] = {}
    for r in records:
        key = (r.session_date, r.slot)
        if key not in groups:
            groups[key] = TimeRecap(session_date=r.session_date, slot=r.slot)
        groups[key].tally.add(r.status)

    by_slot = sorted(groups.values(), key=lambda g: slot_rank(g.slot))
    return sorted(by_slot, key=lambda g: g.session_date, reverse=True)


def aggregate_by_slot(records: Iterable[AttendanceRecord]) -> list[SlotRecap]:
    groups = {slot: SlotRecap(slot=slot) for slot in ALL_TIME_SLOTS}
    for r in records:
        groups[r.slot].tally.add(r.status)
    return [groups[slot] for slot in ALL_TIME_SLOTS]


def status_distribution(records: Iterable[AttendanceRecord]) -> list[tuple[AttendanceStatus, int]]:
    totals = tally(records)
    return [(s, totals.count(s)) for s in ALL_STATUSES]


def class_breakdown_for_session(records: Iterable[AttendanceRecord], session_date: str, slot: TimeSlot) -> list[ClassRecap]:
    slot = TimeSlot(slot)
    return aggregate_by_class(r for r in records if r.session_date == session_date and r.slot == slot)


def person_history(records: Iterable[AttendanceRecord], role: str, person_id: int) -> list[AttendanceRecord]:
    mine = [r for r in records if r.role.value == str(role) and r.person_id == int(person_id)]
    mine.sort(key=lambda r: slot_rank(r.slot))
    return sorted(mine, key=lambda r: r.session_date, reverse=True)


def daily_trend(records: Iterable[AttendanceRecord], end_date: date, days: int = 7) -> list[DayRecap]:
    """Per-day tallies for ``days`` days ending at ``end_date``, oldest first."""
    window = [end_date - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    groups = {d.isoformat(): DayRecap(day=d) for d in window}
    for r in records:
        if r.session_date in groups:
            groups[r.session_date].tally.add(r.status)
    return [groups[d.isoformat()] for d in window]


def cohort_status_for_date(records: Iterable[AttendanceRecord], day: date) -> dict[str, StatusTally]:
    stats = {c.value: StatusTally() for c in ALL_COHORTS}
    wanted = day.isoformat()
    for r in records:
        if r.session_date == wanted and r.cohort in stats:
            stats[r.cohort].add(r.status)
    return stats


def select_class(recaps: Iterable[PersonRecap], cohort: str, class_label: str, *, role: Optional[str] = None) -> list[PersonRecap]:
    return [
        p
        for p in recaps
        if p.cohort == cohort and p.class_label == class_label and (role is None or p.role == role)
    ]
