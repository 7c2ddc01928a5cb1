from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from ..attendance.model import AttendanceRecord
from ..groups.model import Group
from .aggregation import ClassRecap, PersonRecap, TimeRecap, round_half_up

Cell = Union[str, int, float]

DETAIL_COLUMNS = ["Tanggal", "Waktu", "Nama", "Marhalah", "Kelas", "Peran", "Status"]
PERSON_RECAP_COLUMNS = ["Peran", "Marhalah", "Kelas", "Nama", "Hadir", "Izin", "Sakit", "Terlambat", "Alpa", "Total"]
TIME_RECAP_COLUMNS = ["Tanggal", "Waktu", "Hadir", "Izin", "Sakit", "Alpa", "Terlambat", "Total"]
CLASS_RECAP_COLUMNS = ["Marhalah", "Kelas", "Hadir", "Izin", "Sakit", "Alpa", "Terlambat", "Total", "% Hadir"]
GROUP_ROSTER_COLUMNS = ["Halaqah", "Musammi'", "Jenis", "Nama Santri", "Kelas"]


@dataclass(frozen=True)
class ExportTable:
    """Primitive-only table handed to the spreadsheet and PDF exporters."""

    title: str
    file_base_name: str
    columns: list[str]
    rows: list[list[Cell]]

    def as_records(self) -> list[dict]:
        return [dict(zip(self.columns, row)) for row in self.rows]


def detail_table(records: Iterable[AttendanceRecord]) -> ExportTable:
    rows = [
        [r.session_date, r.slot.value, r.name, r.cohort, r.class_label, r.role.value, r.status.value]
        for r in records
    ]
    return ExportTable("Laporan Detail Absensi", "Laporan_Detail_Absensi", list(DETAIL_COLUMNS), rows)


def person_recap_table(recaps: Iterable[PersonRecap]) -> ExportTable:
    rows = []
    for p in recaps:
        t = p.tally
        rows.append([p.role, p.cohort, p.class_label, p.name, t.hadir, t.izin, t.sakit, t.terlambat, t.alpa, t.total])
    return ExportTable("Laporan Rekapitulasi Absensi", "Laporan_Rekapitulasi_Absensi", list(PERSON_RECAP_COLUMNS), rows)


def time_recap_table(recaps: Iterable[TimeRecap]) -> ExportTable:
    rows = []
    for g in recaps:
        t = g.tally
        rows.append([g.session_date, g.slot.value, t.hadir, t.izin, t.sakit, t.alpa, t.terlambat, t.total])
    return ExportTable("Laporan Rekapitulasi Per Waktu", "Laporan_Rekap_Per_Waktu", list(TIME_RECAP_COLUMNS), rows)


def class_recap_table(recaps: Iterable[ClassRecap]) -> ExportTable:
    rows = []
    for g in recaps:
        t = g.tally
        rows.append([g.cohort, g.class_label, t.hadir, t.izin, t.sakit, t.alpa, t.terlambat, t.total, g.percent_present])
    return ExportTable("Laporan Rekapitulasi Per Kelas", "Laporan_Rekap_Per_Kelas", list(CLASS_RECAP_COLUMNS), rows)


def group_roster_table(groups: Iterable[Group]) -> ExportTable:
    rows = []
    for g in groups:
        teacher = g.teacher.name if g.teacher else "-"
        if not g.members:
            rows.append([g.name, teacher, g.group_type.value, "(Kosong)", "-"])
            continue
        for s in g.members:
            rows.append([g.name, teacher, g.group_type.value, s.name, s.class_label])
    return ExportTable("Data Lengkap Halaqah", "Data_Lengkap_Halaqah", list(GROUP_ROSTER_COLUMNS), rows)


def format_average(value: float) -> str:
    """One decimal, without a trailing ``.0`` (``2.5``, ``3``, ``0``)."""
    text = f"{round_half_up(value * 10) / 10:.1f}"
    return text[:-2] if text.endswith(".0") else text
