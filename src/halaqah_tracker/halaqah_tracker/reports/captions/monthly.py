from __future__ import annotations

from ...core.constants import PROGRESS_UNITS
from ...core.enums import AttendanceStatus, ProgressType
from ..formatter import format_average
from .base import CaptionStrategy


class MonthlyCaptionStrategy(CaptionStrategy):
    title = "LAPORAN BULANAN"

    def _body(self, report) -> str:
        averages = report.progress_averages
        text = "*RATA-RATA KELAS*\n"
        text += f"Hafalan  : {self._avg(averages, ProgressType.HAFALAN)}\n"
        text += f"Murojaah : {self._avg(averages, ProgressType.MUROJAAH)}\n"
        text += f"Ziyadah  : {self._avg(averages, ProgressType.ZIYADAH)}\n\n"

        text += "*RINCIAN PER SANTRI*\n"
        text += "Ket: H(Hadir), S(Sakit), I(Izin), A(Alpa), T(Terlambat)\n\n"
        for idx, s in enumerate(report.students_detail, start=1):
            t = s.tally
            text += f"{idx}. *{s.name}*\n"
            text += (
                f"   Absensi : H:{t.count(AttendanceStatus.HADIR)} | S:{t.count(AttendanceStatus.SAKIT)}"
                f" | I:{t.count(AttendanceStatus.IZIN)} | A:{t.count(AttendanceStatus.ALPA)}"
                f" | T:{t.count(AttendanceStatus.TERLAMBAT)}\n"
            )
            text += (
                f"   Capaian : Ziyadah: {s.progress[ProgressType.ZIYADAH]}"
                f" | Murojaah: {s.progress[ProgressType.MUROJAAH]}"
                f" | Hafalan: {s.progress[ProgressType.HAFALAN]}\n\n"
            )
        return text

    @staticmethod
    def _avg(averages: dict, progress_type: ProgressType) -> str:
        return f"{format_average(averages.get(progress_type, 0.0))} {PROGRESS_UNITS[progress_type]}"
