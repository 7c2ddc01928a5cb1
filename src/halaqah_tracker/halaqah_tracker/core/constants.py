"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import AttendanceStatus, Cohort, ProgressType, TimeSlot

ALL_COHORTS = [Cohort.MUTAWASSITHAH, Cohort.ALIYAH, Cohort.JAMIAH]
COHORT_ORDER = [c.value for c in ALL_COHORTS]

CLASSES_BY_COHORT = {
    Cohort.MUTAWASSITHAH.value: ["1A", "1B", "1D", "2A", "2B", "3A", "3B", "3C"],
    Cohort.ALIYAH.value: ["1A", "1B", "1C", "2A", "2B", "3A", "3B"],
    Cohort.JAMIAH.value: ["TQS", "KHS"],
}

ALL_TIME_SLOTS = [TimeSlot.SHUBUH, TimeSlot.DHUHA, TimeSlot.ASHAR, TimeSlot.ISYA]

ALL_STATUSES = [
    AttendanceStatus.HADIR,
    AttendanceStatus.IZIN,
    AttendanceStatus.SAKIT,
    AttendanceStatus.ALPA,
    AttendanceStatus.TERLAMBAT,
]

ALL_PROGRESS_TYPES = [ProgressType.HAFALAN, ProgressType.MUROJAAH, ProgressType.ZIYADAH]

PROGRESS_UNITS = {
    ProgressType.HAFALAN: "Juz",
    ProgressType.MUROJAAH: "Juz",
    ProgressType.ZIYADAH: "Halaman",
}

GROUP_TYPE_MAIN = "Halaqah Utama"
GROUP_TYPE_MORNING = "Halaqah Pagi"
WELL_KNOWN_GROUP_TYPES = [GROUP_TYPE_MAIN, GROUP_TYPE_MORNING]

STATUS_COLORS = {
    AttendanceStatus.HADIR: "#22C55E",
    AttendanceStatus.SAKIT: "#F59E0B",
    AttendanceStatus.IZIN: "#0EA5E9",
    AttendanceStatus.ALPA: "#EF4444",
    AttendanceStatus.TERLAMBAT: "#FBBF24",
}

BAR_COLORS = [
    "#2563EB",
    "#10B981",
    "#F59E0B",
    "#EF4444",
    "#8B5CF6",
    "#EC4899",
    "#06B6D4",
    "#F97316",
    "#6366F1",
    "#84CC16",
]

# Horizontal-scroll sizing for bar charts.
CHART_MIN_WIDTH_FLOOR = 600
PERSON_CHART_PX_PER_CATEGORY = 40
CLASS_CHART_PX_PER_CATEGORY = 50

# Monthly report cards scale bars against at least this many sessions.
MIN_ATTENDANCE_SCALE = 5

PROGRESS_HISTORY_MONTHS = 3
DEFAULT_TREND_DAYS = 7
GROUPS_PER_BOOK_PAGE = 3

CAPTION_SEPARATOR = "-" * 32
CAPTION_FOOTER = "Digenerate oleh Sistem Informasi Tahfidz"
CLASS_RECAP_FOOTER = "Dikirim otomatis oleh Sistem Informasi Tahfidz."
DEFAULT_COUNTRY_CODE = "62"
