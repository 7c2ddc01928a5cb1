from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from ..common.datetime_utils import (
    end_of_week,
    format_day_month_short,
    format_day_month_year_short,
    format_long_day,
    format_month_year,
    shift_months,
    start_of_week,
)
from ..core.enums import ReportCadence


@dataclass(frozen=True)
class ReportPeriod:
    cadence: ReportCadence
    start: date
    end: date
    label: str

    @property
    def start_iso(self) -> str:
        return self.start.isoformat()

    @property
    def end_iso(self) -> str:
        return self.end.isoformat()

    @property
    def month_key(self) -> str:
        return self.start.strftime("%Y-%m")

    def contains(self, session_date: str) -> bool:
        return self.start_iso <= session_date <= self.end_iso


def period_for(cadence: ReportCadence, reference_date: date) -> ReportPeriod:
    cadence = ReportCadence(cadence)
    if cadence == ReportCadence.DAILY:
        return ReportPeriod(cadence, reference_date, reference_date, format_long_day(reference_date))
    if cadence == ReportCadence.WEEKLY:
        start = start_of_week(reference_date)
        end = end_of_week(reference_date)
        label = f"{format_day_month_short(start)} - {format_day_month_year_short(end)}"
        return ReportPeriod(cadence, start, end, label)
    start = reference_date.replace(day=1)
    end = shift_months(start, 1) - timedelta(days=1)
    return ReportPeriod(cadence, start, end, format_month_year(start))


def period_label(cadence: ReportCadence, reference_date: date) -> str:
    return period_for(cadence, reference_date).label
