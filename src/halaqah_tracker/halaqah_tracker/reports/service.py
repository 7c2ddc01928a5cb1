from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.constants import ALL_COHORTS, DEFAULT_TREND_DAYS
from ..core.enums import ReportCadence, Role
from ..core.exceptions import ValidationError
from ..progress.model import ProgressRecord
from ..roster.model import ClassSupervisor, Person
from ..store.base import ATTENDANCE, CLASS_SUPERVISORS, GROUPS, PROGRESS, STUDENTS, TEACHERS, RecordStore
from . import aggregation as agg
from . import charts
from . import formatter
from .captions.class_recap import class_recap_caption
from .captions.factory import CaptionStrategyFactory
from .charts import ChartData
from .class_report import ClassReport, class_reports
from .filters import AttendanceFilter, apply_filter
from .formatter import ExportTable

DETAIL = "detail"
RECAP = "recap"
TIME_RECAP = "time_recap"
CLASS_RECAP = "class_recap"
VIEWS = (DETAIL, RECAP, TIME_RECAP, CLASS_RECAP)


@dataclass(frozen=True)
class ReportSnapshot:
    """Store contents read once and treated as immutable for one report pass."""

    records: list[AttendanceRecord]
    students: list[Person]
    teachers: list[Person]
    supervisors: list[ClassSupervisor]
    progress: list[ProgressRecord]
    group_count: int = 0

    def supervisor_for(self, cohort: str, class_label: str) -> Optional[ClassSupervisor]:
        return next((w for w in self.supervisors if w.cohort == cohort and w.class_label == class_label), None)


@dataclass(frozen=True)
class ReportItem:
    """One selectable class in the messaging flow."""

    key: str
    chart: ChartData
    caption: str
    phone: Optional[str]


def _require_view(view: str) -> str:
    if view not in VIEWS:
        raise ValidationError(f"Jenis laporan tidak dikenal: {view}")
    return view


class ReportService:
    def __init__(self, store: RecordStore, *, captions: Optional[CaptionStrategyFactory] = None):
        self._store = store
        self._captions = captions or CaptionStrategyFactory()

    def load_snapshot(self) -> ReportSnapshot:
        return ReportSnapshot(
            records=[AttendanceRecord.from_row(r) for r in self._store.query(ATTENDANCE)],
            students=[Person.from_row(r, Role.SANTRI) for r in self._store.query(STUDENTS, order_by="name")],
            teachers=[Person.from_row(r, Role.MUSAMMI) for r in self._store.query(TEACHERS, order_by="name")],
            supervisors=[ClassSupervisor.from_row(r) for r in self._store.query(CLASS_SUPERVISORS)],
            progress=[ProgressRecord.from_row(r) for r in self._store.query(PROGRESS)],
            group_count=len(self._store.query(GROUPS)),
        )

    def filtered(self, criteria: AttendanceFilter, snapshot: Optional[ReportSnapshot] = None) -> list[AttendanceRecord]:
        snapshot = snapshot or self.load_snapshot()
        return apply_filter(snapshot.records, criteria)

    def recap(self, view: str, criteria: AttendanceFilter) -> list[dict]:
        return self.export_table(view, criteria).as_records()

    def export_table(self, view: str, criteria: AttendanceFilter) -> ExportTable:
        view = _require_view(view)
        records = self.filtered(criteria)
        if view == DETAIL:
            return formatter.detail_table(records)
        if view == RECAP:
            return formatter.person_recap_table(agg.aggregate_by_person(records))
        if view == TIME_RECAP:
            return formatter.time_recap_table(agg.aggregate_by_time(records))
        return formatter.class_recap_table(agg.aggregate_by_class(records))

    def chart(self, view: str, criteria: AttendanceFilter) -> ChartData:
        records = self.filtered(criteria)
        if view == RECAP:
            return charts.person_recap_chart(agg.aggregate_by_person(records))
        if view == CLASS_RECAP:
            return charts.class_recap_chart(agg.aggregate_by_class(records))
        if view == TIME_RECAP:
            return charts.time_recap_chart(agg.aggregate_by_time(records))
        if view == "slots":
            return charts.slot_breakdown_chart(agg.aggregate_by_slot(records))
        if view == "status":
            return charts.status_pie_chart(agg.status_distribution(records))
        raise ValidationError(f"Jenis grafik tidak dikenal: {view}")

    def session_breakdown(self, criteria: AttendanceFilter, session_date: str, slot: str) -> list[dict]:
        recaps = agg.class_breakdown_for_session(self.filtered(criteria), session_date, slot)
        return [{"cohort": c.cohort, "class_label": c.class_label, **c.tally.as_dict()} for c in recaps]

    def person_history(self, criteria: AttendanceFilter, role: str, person_id: int) -> list[AttendanceRecord]:
        return agg.person_history(self.filtered(criteria), role, person_id)

    def class_reports(
        self,
        *,
        cadence: ReportCadence,
        reference_date: date,
        cohort: Optional[str] = None,
        generated_at: Optional[datetime] = None,
        snapshot: Optional[ReportSnapshot] = None,
    ) -> list[ClassReport]:
        snapshot = snapshot or self.load_snapshot()
        return class_reports(
            cadence=cadence,
            reference_date=reference_date,
            records=snapshot.records,
            students=snapshot.students,
            supervisors=snapshot.supervisors,
            progress=snapshot.progress,
            cohort=cohort,
            captions=self._captions,
            generated_at=generated_at,
        )

    def report_items(
        self,
        snapshot: ReportSnapshot,
        criteria: AttendanceFilter,
        *,
        cadence: Optional[ReportCadence] = None,
        reference_date: Optional[date] = None,
    ) -> dict[str, ReportItem]:
        """Chart, caption and phone per class key.

        Without a cadence the items come from the per-class recap of the filtered
        records; with one they are the supervisor report cards for that period.
        """
        if cadence is None:
            records = apply_filter(snapshot.records, criteria)
            people = agg.aggregate_by_person(records)
            items = {}
            for recap in agg.aggregate_by_class(records):
                supervisor = snapshot.supervisor_for(recap.cohort, recap.class_label)
                items[recap.key] = ReportItem(
                    key=recap.key,
                    chart=charts.single_class_chart(recap),
                    caption=class_recap_caption(recap, people, date_start=criteria.date_start, date_end=criteria.date_end),
                    phone=supervisor.phone if supervisor else None,
                )
            return items

        reports = self.class_reports(
            cadence=cadence,
            reference_date=reference_date or date.today(),
            cohort=criteria.cohort,
            snapshot=snapshot,
        )
        return {
            r.key: ReportItem(key=r.key, chart=charts.class_report_chart(r), caption=r.caption, phone=r.phone)
            for r in reports
        }

    def dashboard(self, today: date, *, days: int = DEFAULT_TREND_DAYS) -> dict:
        snapshot = self.load_snapshot()
        per_cohort = agg.cohort_status_for_date(snapshot.records, today)
        trend = agg.daily_trend(snapshot.records, today, days)
        return {
            "students": len(snapshot.students),
            "students_by_cohort": {
                c.value: sum(1 for s in snapshot.students if s.cohort == c.value) for c in ALL_COHORTS
            },
            "teachers": len(snapshot.teachers),
            "groups": snapshot.group_count,
            "today": {cohort: t.as_dict() for cohort, t in per_cohort.items()},
            "trend": charts.daily_trend_chart(trend).as_dict(),
        }
