from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..common.datetime_utils import DAY_NAMES
from ..core.constants import (
    ALL_PROGRESS_TYPES,
    ALL_STATUSES,
    BAR_COLORS,
    CHART_MIN_WIDTH_FLOOR,
    CLASS_CHART_PX_PER_CATEGORY,
    PERSON_CHART_PX_PER_CATEGORY,
    STATUS_COLORS,
)
from ..core.enums import AttendanceStatus, ReportCadence
from .aggregation import ClassRecap, DayRecap, PersonRecap, SlotRecap, StatusTally, TimeRecap

STACKED_BAR = "stacked_bar"
GROUPED_BAR = "grouped_bar"
PIE = "pie"


@dataclass(frozen=True)
class Series:
    name: str
    values: list[float]
    color: str


@dataclass(frozen=True)
class ChartData:
    """Renderer-neutral chart description; categories keep the aggregation order."""

    kind: str
    title: str
    categories: list[str]
    series: list[Series]
    category_colors: list[str] = field(default_factory=list)
    width_px: Optional[int] = None
    y_max: Optional[float] = None

    def as_dict(self) -> dict:
        return {
            "kind": self.kind,
            "title": self.title,
            "categories": list(self.categories),
            "series": [{"name": s.name, "values": list(s.values), "color": s.color} for s in self.series],
            "category_colors": list(self.category_colors),
            "width_px": self.width_px,
            "y_max": self.y_max,
        }


def min_width_px(count: int, per_category: int) -> Optional[int]:
    """Pixel width for a horizontally scrolling chart, ``None`` to fill the container."""
    calculated = count * per_category
    return None if calculated < CHART_MIN_WIDTH_FLOOR else calculated


def _status_series(tallies: list[StatusTally]) -> list[Series]:
    return [
        Series(name=s.value, values=[t.count(s) for t in tallies], color=STATUS_COLORS[s])
        for s in ALL_STATUSES
    ]


def person_recap_chart(recaps: Iterable[PersonRecap]) -> ChartData:
    recaps = list(recaps)
    return ChartData(
        kind=STACKED_BAR,
        title="Grafik Kehadiran per Orang",
        categories=[p.name for p in recaps],
        series=_status_series([p.tally for p in recaps]),
        width_px=min_width_px(len(recaps), PERSON_CHART_PX_PER_CATEGORY),
    )


def class_recap_chart(recaps: Iterable[ClassRecap]) -> ChartData:
    recaps = list(recaps)
    return ChartData(
        kind=STACKED_BAR,
        title="Grafik Kehadiran per Kelas",
        categories=[c.label for c in recaps],
        series=_status_series([c.tally for c in recaps]),
        width_px=min_width_px(len(recaps), CLASS_CHART_PX_PER_CATEGORY),
    )


def single_class_chart(recap: ClassRecap) -> ChartData:
    """Chart attached to a class-recap message."""
    return ChartData(
        kind=GROUPED_BAR,
        title=f"Kehadiran Kelas {recap.label}",
        categories=[s.value for s in ALL_STATUSES],
        series=[Series(name="Jumlah", values=[recap.tally.count(s) for s in ALL_STATUSES], color=BAR_COLORS[0])],
        category_colors=[STATUS_COLORS[s] for s in ALL_STATUSES],
    )


def time_recap_chart(recaps: Iterable[TimeRecap]) -> ChartData:
    recaps = list(recaps)
    return ChartData(
        kind=STACKED_BAR,
        title="Grafik Kehadiran per Waktu",
        categories=[f"{g.session_date} {g.slot.value}" for g in recaps],
        series=_status_series([g.tally for g in recaps]),
        width_px=min_width_px(len(recaps), PERSON_CHART_PX_PER_CATEGORY),
    )


def slot_breakdown_chart(recaps: Iterable[SlotRecap], *, title: str = "Rekap per Waktu") -> ChartData:
    recaps = list(recaps)
    return ChartData(
        kind=GROUPED_BAR,
        title=title,
        categories=[g.slot.value for g in recaps],
        series=_status_series([g.tally for g in recaps]),
    )


def status_pie_chart(distribution: Iterable[tuple[AttendanceStatus, int]]) -> ChartData:
    distribution = list(distribution)
    return ChartData(
        kind=PIE,
        title="Distribusi Status Kehadiran",
        categories=[s.value for s, _ in distribution],
        series=[Series(name="Jumlah", values=[n for _, n in distribution], color=BAR_COLORS[0])],
        category_colors=[STATUS_COLORS[s] for s, _ in distribution],
    )


def progress_trend_chart(history) -> ChartData:
    """Three-month class progress averages, one series per progress type."""
    history = list(history)
    return ChartData(
        kind=GROUPED_BAR,
        title="Tren Capaian 3 Bulan",
        categories=[m.label for m in history],
        series=[
            Series(name=t.value, values=[m.averages.get(t, 0.0) for m in history], color=BAR_COLORS[i])
            for i, t in enumerate(ALL_PROGRESS_TYPES)
        ],
    )


def daily_trend_chart(days: Iterable[DayRecap]) -> ChartData:
    days = list(days)
    return ChartData(
        kind=STACKED_BAR,
        title="Kehadiran 7 Hari Terakhir",
        categories=[f"{DAY_NAMES[d.day.weekday()][:3]} {d.day.day}/{d.day.month}" for d in days],
        series=_status_series([d.tally for d in days]),
    )


def class_report_chart(report) -> ChartData:
    """Report-card chart for a supervisor report.

    Monthly cards show one stacked bar per student scaled to at least
    ``max_attendance_count``; daily and weekly cards show the per-slot breakdown.
    """
    if report.period.cadence == ReportCadence.MONTHLY:
        details = list(report.students_detail)
        return ChartData(
            kind=STACKED_BAR,
            title=f"Kehadiran Santri {report.class_label} ({report.cohort}) - {report.period.label}",
            categories=[d.name for d in details],
            series=_status_series([d.tally for d in details]),
            width_px=min_width_px(len(details), PERSON_CHART_PX_PER_CATEGORY),
            y_max=report.max_attendance_count,
        )
    return slot_breakdown_chart(
        report.session_breakdown,
        title=f"Kehadiran {report.class_label} ({report.cohort}) - {report.period.label}",
    )
