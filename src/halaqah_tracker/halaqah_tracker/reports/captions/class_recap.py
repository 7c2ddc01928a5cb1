from __future__ import annotations

from typing import Iterable, Optional

from ...core.constants import CAPTION_SEPARATOR, CLASS_RECAP_FOOTER
from ..aggregation import ClassRecap, PersonRecap


def class_recap_caption(
    recap: ClassRecap,
    people: Iterable[PersonRecap],
    *,
    date_start: Optional[str] = None,
    date_end: Optional[str] = None,
) -> str:
    """Caption sent to a class supervisor from the per-class recap view.

    ``people`` is the per-person recap of the same filtered data; only members of
    the recap's class with at least one non-present status are listed.
    """
    t = recap.tally
    text = "*LAPORAN ABSENSI KELAS*\n"
    text += f"Kelas: {recap.class_label} ({recap.cohort})\n"
    text += f"Periode: {date_start or '...'} s.d {date_end or '...'}\n"
    text += f"{CAPTION_SEPARATOR}\n\n"

    text += "*RINGKASAN KEHADIRAN*\n"
    text += f"Hadir: {t.hadir} | Izin: {t.izin} | Sakit: {t.sakit} | Alpa: {t.alpa} | Terlambat: {t.terlambat}\n\n"

    text += "*DAFTAR SANTRI BERMASALAH*\n"
    flagged = [
        p
        for p in people
        if p.cohort == recap.cohort and p.class_label == recap.class_label and p.tally.absent > 0
    ]
    if not flagged:
        text += "(Nihil - Semua Hadir)\n"
    for idx, p in enumerate(flagged, start=1):
        notes = []
        if p.tally.sakit:
            notes.append(f"Sakit: {p.tally.sakit}")
        if p.tally.izin:
            notes.append(f"Izin: {p.tally.izin}")
        if p.tally.alpa:
            notes.append(f"Alpa: {p.tally.alpa}")
        if p.tally.terlambat:
            notes.append(f"Telat: {p.tally.terlambat}")
        text += f"{idx}. {p.name} ({', '.join(notes)})\n"

    text += f"\n{CAPTION_SEPARATOR}\n{CLASS_RECAP_FOOTER}"
    return text
