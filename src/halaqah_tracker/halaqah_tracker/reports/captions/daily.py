from __future__ import annotations

from ...core.constants import ALL_TIME_SLOTS
from .base import CaptionStrategy


class DailyCaptionStrategy(CaptionStrategy):
    title = "LAPORAN HARIAN"

    def _body(self, report) -> str:
        text = self._status_summary(report)
        text += "*DETAIL KETIDAKHADIRAN PER SESI*\n"
        for idx, slot in enumerate(ALL_TIME_SLOTS, start=1):
            text += f"\n{idx}. {slot.value.upper()}"
            entries = report.absences.get(slot) or []
            if not entries:
                text += "\n   (Semua Hadir)"
            for entry in entries:
                text += f"\n   - {self._entry_label(entry)}"
            text += "\n"
        return text

    def _entry_label(self, entry) -> str:
        return f"{entry.name} ({entry.status.value})"
