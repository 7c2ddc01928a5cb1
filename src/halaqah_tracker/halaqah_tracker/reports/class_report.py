from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import MONTH_NAMES, month_key, shift_months
from ..core.constants import (
    ALL_COHORTS,
    ALL_PROGRESS_TYPES,
    ALL_TIME_SLOTS,
    CLASSES_BY_COHORT,
    MIN_ATTENDANCE_SCALE,
    PROGRESS_HISTORY_MONTHS,
)
from ..core.enums import AttendanceStatus, ReportCadence, Role
from ..progress.model import ProgressRecord
from ..roster.model import ClassSupervisor, Person
from .aggregation import SlotRecap, StatusTally, aggregate_by_slot, class_key, round_half_up, tally
from .captions.factory import CaptionStrategyFactory
from .periods import ReportPeriod, period_for


@dataclass(frozen=True)
class AbsenceEntry:
    name: str
    status: AttendanceStatus
    session_date: str


@dataclass(frozen=True)
class StudentDetail:
    student_id: int
    name: str
    tally: StatusTally
    progress: dict  # ProgressType -> value text, "-" when missing


@dataclass(frozen=True)
class ProgressMonth:
    label: str
    month_key: str
    averages: dict  # ProgressType -> float


@dataclass(frozen=True)
class ClassReport:
    """Everything the per-class report card and its caption need."""

    cohort: str
    class_label: str
    supervisor: Optional[ClassSupervisor]
    student_count: int
    period: ReportPeriod
    stats: StatusTally
    session_breakdown: list[SlotRecap]
    absences: dict  # TimeSlot -> list[AbsenceEntry]
    progress_averages: dict = field(default_factory=dict)
    progress_history: list[ProgressMonth] = field(default_factory=list)
    students_detail: list[StudentDetail] = field(default_factory=list)
    max_attendance_count: int = 0
    caption: str = ""

    @property
    def key(self) -> str:
        return class_key(self.cohort, self.class_label)

    @property
    def phone(self) -> Optional[str]:
        return self.supervisor.phone if self.supervisor else None


def _average(values: list[float]) -> float:
    if not values:
        return 0.0
    scaled = sum(values) / len(values) * 10
    if not math.isfinite(scaled):
        return 0.0
    return round_half_up(scaled) / 10


def progress_averages(progress: Iterable[ProgressRecord], student_ids: set[int], month: str) -> dict:
    relevant = [p for p in progress if p.month_key == month and p.student_id in student_ids]
    return {
        t: _average([p.numeric_value for p in relevant if p.progress_type == t])
        for t in ALL_PROGRESS_TYPES
    }


def progress_history(progress: list[ProgressRecord], student_ids: set[int], reference_month: date) -> list[ProgressMonth]:
    """Class averages for the last three months, oldest first."""
    months = []
    for back in range(PROGRESS_HISTORY_MONTHS - 1, -1, -1):
        first = shift_months(reference_month, -back)
        key = month_key(first)
        months.append(
            ProgressMonth(
                label=MONTH_NAMES[first.month - 1].upper(),
                month_key=key,
                averages=progress_averages(progress, student_ids, key),
            )
        )
    return months


def _absences(records: list[AttendanceRecord]) -> dict:
    out = {}
    for slot in ALL_TIME_SLOTS:
        out[slot] = [
            AbsenceEntry(name=r.name, status=r.status, session_date=r.session_date)
            for r in records
            if r.slot == slot and r.status != AttendanceStatus.HADIR
        ]
    return out


def build_class_report(
    *,
    cohort: str,
    class_label: str,
    cadence: ReportCadence,
    reference_date: date,
    records: Iterable[AttendanceRecord],
    students: Iterable[Person],
    supervisor: Optional[ClassSupervisor],
    progress: Iterable[ProgressRecord] = (),
) -> ClassReport:
    cadence = ReportCadence(cadence)
    period = period_for(cadence, reference_date)
    relevant = [
        r
        for r in records
        if r.cohort == cohort
        and r.class_label == class_label
        and r.role == Role.SANTRI
        and period.contains(r.session_date)
    ]
    class_students = sorted(
        (s for s in students if s.cohort == cohort and s.class_label == class_label),
        key=lambda s: (s.name.lower(), s.name),
    )

    report = ClassReport(
        cohort=cohort,
        class_label=class_label,
        supervisor=supervisor,
        student_count=len(class_students),
        period=period,
        stats=tally(relevant),
        session_breakdown=aggregate_by_slot(relevant),
        absences=_absences(relevant),
    )
    if cadence != ReportCadence.MONTHLY:
        return report

    progress = list(progress)
    month = period.month_key
    student_ids = {s.person_id for s in class_students}
    details = []
    for s in class_students:
        mine = [r for r in relevant if r.person_id == s.person_id]
        values = {p.progress_type: p.value for p in progress if p.student_id == s.person_id and p.month_key == month}
        details.append(
            StudentDetail(
                student_id=s.person_id,
                name=s.name,
                tally=tally(mine),
                progress={t: values.get(t) or "-" for t in ALL_PROGRESS_TYPES},
            )
        )

    return replace(
        report,
        progress_averages=progress_averages(progress, student_ids, month),
        progress_history=progress_history(progress, student_ids, period.start),
        students_detail=details,
        max_attendance_count=max([d.tally.total for d in details] + [MIN_ATTENDANCE_SCALE]),
    )


def class_reports(
    *,
    cadence: ReportCadence,
    reference_date: date,
    records: Iterable[AttendanceRecord],
    students: Iterable[Person],
    supervisors: Iterable[ClassSupervisor],
    progress: Iterable[ProgressRecord] = (),
    cohort: Optional[str] = None,
    captions=None,
    generated_at: Optional[datetime] = None,
) -> list[ClassReport]:
    """One report per fixed class of the selected cohort (all cohorts when ``None``)."""
    captions = captions or CaptionStrategyFactory()
    strategy = captions.for_cadence(cadence)
    records = list(records)
    students = list(students)
    supervisors = list(supervisors)
    progress = list(progress)

    out = []
    for c in ALL_COHORTS:
        if cohort and cohort != "all" and c.value != cohort:
            continue
        for label in CLASSES_BY_COHORT[c.value]:
            supervisor = next((w for w in supervisors if w.cohort == c.value and w.class_label == label), None)
            report = build_class_report(
                cohort=c.value,
                class_label=label,
                cadence=cadence,
                reference_date=reference_date,
                records=records,
                students=students,
                supervisor=supervisor,
                progress=progress,
            )
            out.append(replace(report, caption=strategy.build(report, generated_at=generated_at)))
    return out
