from __future__ import annotations

from enum import Enum


class Cohort(str, Enum):
    """Marhalah: jenjang pendidikan santri dan musammi."""

    MUTAWASSITHAH = "Mutawassithah"
    ALIYAH = "Aliyah"
    JAMIAH = "Jamiah"


class TimeSlot(str, Enum):
    """Waktu absensi harian, urut sesuai kejadian dalam sehari."""

    SHUBUH = "Shubuh"
    DHUHA = "Dhuha"
    ASHAR = "Ashar"
    ISYA = "Isya"


class AttendanceStatus(str, Enum):
    """Status kehadiran yang disimpan di setiap baris absensi."""

    HADIR = "Hadir"
    IZIN = "Izin"
    SAKIT = "Sakit"
    ALPA = "Alpa"
    TERLAMBAT = "Terlambat"


class Role(str, Enum):
    """Peran orang yang diabsen."""

    SANTRI = "Santri"
    MUSAMMI = "Musammi"


class ProgressType(str, Enum):
    HAFALAN = "Hafalan"
    MUROJAAH = "Murojaah"
    ZIYADAH = "Ziyadah"


class ReportCadence(str, Enum):
    """Jenis laporan wali kelas."""

    DAILY = "harian"
    WEEKLY = "mingguan"
    MONTHLY = "bulanan"
