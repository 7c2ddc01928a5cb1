from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from ...core.constants import CAPTION_FOOTER, CAPTION_SEPARATOR
from ...core.enums import AttendanceStatus

if TYPE_CHECKING:
    from ..class_report import ClassReport

# Labels are padded so the colons line up in a monospace chat bubble.
STATUS_LINE_LABELS = {
    AttendanceStatus.HADIR: "Hadir :",
    AttendanceStatus.SAKIT: "Sakit :",
    AttendanceStatus.IZIN: "Izin  :",
    AttendanceStatus.ALPA: "Alpa  :",
    AttendanceStatus.TERLAMBAT: "Telat :",
}
STATUS_LINE_ORDER = [
    AttendanceStatus.HADIR,
    AttendanceStatus.SAKIT,
    AttendanceStatus.IZIN,
    AttendanceStatus.ALPA,
    AttendanceStatus.TERLAMBAT,
]


class CaptionStrategy(ABC):
    """Template Method: fixed header and footer around a cadence-specific body.

    Output depends only on the report; the optional ``generated_at`` line is the
    single exception.
    """

    title: str = ""

    def build(self, report: "ClassReport", *, generated_at: Optional[datetime] = None) -> str:
        text = self._header(report) + self._body(report)
        text += f"{CAPTION_SEPARATOR}\n{CAPTION_FOOTER}"
        if generated_at is not None:
            text += f"\nDibuat pada: {generated_at.strftime('%d/%m/%Y %H:%M')}"
        return text

    def _header(self, report: "ClassReport") -> str:
        text = f"*{self.title}*\n{report.period.label}\n{CAPTION_SEPARATOR}\n"
        text += f"Kelas : {report.class_label} ({report.cohort})\n"
        if report.supervisor:
            text += f"Wali  : {report.supervisor.name}\n"
        return text + f"{CAPTION_SEPARATOR}\n\n"

    @staticmethod
    def _status_summary(report: "ClassReport") -> str:
        text = "*STATISTIK KEHADIRAN*\n"
        for status in STATUS_LINE_ORDER:
            text += f"{STATUS_LINE_LABELS[status]} {report.stats.count(status)}\n"
        return text + "\n"

    @abstractmethod
    def _body(self, report: "ClassReport") -> str:
        raise NotImplementedError

