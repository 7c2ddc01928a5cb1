from datetime import date, datetime

from src.halaqah_tracker.halaqah_tracker.core.constants import CAPTION_FOOTER, CAPTION_SEPARATOR, CLASS_RECAP_FOOTER
from src.halaqah_tracker.halaqah_tracker.core.enums import AttendanceStatus, ProgressType, ReportCadence, Role, TimeSlot
from src.halaqah_tracker.halaqah_tracker.progress.model import ProgressRecord
from src.halaqah_tracker.halaqah_tracker.reports import aggregation as agg
from src.halaqah_tracker.halaqah_tracker.reports.captions.class_recap import class_recap_caption
from src.halaqah_tracker.halaqah_tracker.reports.captions.factory import CaptionStrategyFactory
from src.halaqah_tracker.halaqah_tracker.reports.class_report import build_class_report, class_reports
from src.halaqah_tracker.halaqah_tracker.roster.model import ClassSupervisor, Person

from helpers import make_record

SEP = CAPTION_SEPARATOR
SUPERVISOR = ClassSupervisor(supervisor_id=1, name="Ust. Hasan", cohort="Aliyah", class_label="1A", phone="08123")
STUDENTS = [
    Person(person_id=1, role=Role.SANTRI, name="Ahmad", cohort="Aliyah", class_label="1A"),
    Person(person_id=2, role=Role.SANTRI, name="Budi", cohort="Aliyah", class_label="1A"),
]


def _records():
    return [
        make_record(1, person_id=1, name="Ahmad", session_date="2024-06-03"),
        make_record(2, person_id=2, name="Budi", status=AttendanceStatus.SAKIT, session_date="2024-06-03"),
        make_record(3, person_id=2, name="Budi", status=AttendanceStatus.ALPA, session_date="2024-06-05"),
        make_record(4, person_id=1, name="Ust. Fulan", role=Role.MUSAMMI, status=AttendanceStatus.ALPA),
    ]


def _report(cadence, reference=date(2024, 6, 3), progress=()):
    return build_class_report(
        cohort="Aliyah",
        class_label="1A",
        cadence=cadence,
        reference_date=reference,
        records=_records(),
        students=STUDENTS,
        supervisor=SUPERVISOR,
        progress=progress,
    )


def test_daily_caption_text():
    report = _report(ReportCadence.DAILY)

    text = CaptionStrategyFactory().for_cadence(ReportCadence.DAILY).build(report)

    expected = (
        "*LAPORAN HARIAN*\n"
        "Senin, 3 Juni 2024\n"
        f"{SEP}\n"
        "Kelas : 1A (Aliyah)\n"
        "Wali  : Ust. Hasan\n"
        f"{SEP}\n\n"
        "*STATISTIK KEHADIRAN*\n"
        "Hadir : 1\n"
        "Sakit : 1\n"
        "Izin  : 0\n"
        "Alpa  : 0\n"
        "Telat : 0\n\n"
        "*DETAIL KETIDAKHADIRAN PER SESI*\n"
        "\n1. SHUBUH\n   - Budi (Sakit)\n"
        "\n2. DHUHA\n   (Semua Hadir)\n"
        "\n3. ASHAR\n   (Semua Hadir)\n"
        "\n4. ISYA\n   (Semua Hadir)\n"
        f"{SEP}\n{CAPTION_FOOTER}"
    )
    assert text == expected


def test_caption_is_deterministic():
    report = _report(ReportCadence.WEEKLY)
    strategy = CaptionStrategyFactory().for_cadence(ReportCadence.WEEKLY)

    assert strategy.build(report) == strategy.build(report)


def test_generated_at_line_is_appended():
    report = _report(ReportCadence.DAILY)

    text = CaptionStrategyFactory().for_cadence(ReportCadence.DAILY).build(
        report, generated_at=datetime(2024, 6, 3, 19, 5)
    )

    assert text.endswith(f"{CAPTION_FOOTER}\nDibuat pada: 03/06/2024 19:05")


def test_weekly_caption_uses_the_daily_layout():
    report = _report(ReportCadence.WEEKLY)

    text = CaptionStrategyFactory().for_cadence(ReportCadence.WEEKLY).build(report)

    assert text.startswith("*LAPORAN MINGGUAN*\n3 Jun - 9 Jun 2024\n")
    assert "\n1. SHUBUH\n   - Budi (Sakit)\n   - Budi (Alpa)\n" in text
    assert "Sakit : 1\nIzin  : 0\nAlpa  : 1\n" in text


def test_cadence_reports_ignore_teachers():
    report = _report(ReportCadence.WEEKLY)

    assert report.stats.total == 3
    assert report.stats.alpa == 1


def test_monthly_report_extras():
    progress = [
        ProgressRecord(1, 1, "2024-06", ProgressType.HAFALAN, "3"),
        ProgressRecord(2, 2, "2024-06", ProgressType.HAFALAN, "2"),
        ProgressRecord(3, 1, "2024-05", ProgressType.ZIYADAH, "10"),
    ]

    report = _report(ReportCadence.MONTHLY, reference=date(2024, 6, 20), progress=progress)

    assert report.progress_averages[ProgressType.HAFALAN] == 2.5
    assert report.progress_averages[ProgressType.ZIYADAH] == 0.0
    assert [m.label for m in report.progress_history] == ["APRIL", "MEI", "JUNI"]
    assert report.progress_history[1].averages[ProgressType.ZIYADAH] == 10.0
    assert report.max_attendance_count == 5
    assert [d.name for d in report.students_detail] == ["Ahmad", "Budi"]
    assert report.students_detail[1].progress[ProgressType.MUROJAAH] == "-"

    text = CaptionStrategyFactory().for_cadence(ReportCadence.MONTHLY).build(report)

    assert "Hafalan  : 2.5 Juz\n" in text
    assert "Ziyadah  : 0 Halaman\n" in text
    assert "2. *Budi*\n   Absensi : H:0 | S:1 | I:0 | A:1 | T:0\n" in text


def test_class_reports_cover_every_class_of_cohort():
    reports = class_reports(
        cadence=ReportCadence.DAILY,
        reference_date=date(2024, 6, 3),
        records=_records(),
        students=STUDENTS,
        supervisors=[SUPERVISOR],
        cohort="Jamiah",
    )

    assert [r.key for r in reports] == ["Jamiah-TQS", "Jamiah-KHS"]
    assert all(r.caption.startswith("*LAPORAN HARIAN*") for r in reports)
    assert reports[0].phone is None


def test_class_recap_caption_lists_people_with_absences():
    records = _records()
    (recap,) = agg.aggregate_by_class(records)

    text = class_recap_caption(recap, agg.aggregate_by_person(records), date_start="2024-06-01", date_end=None)

    assert text.startswith("*LAPORAN ABSENSI KELAS*\nKelas: 1A (Aliyah)\nPeriode: 2024-06-01 s.d ...\n")
    assert "Hadir: 1 | Izin: 0 | Sakit: 1 | Alpa: 2 | Terlambat: 0\n" in text
    assert "1. Budi (Sakit: 1, Alpa: 1)\n2. Ust. Fulan (Alpa: 1)\n" in text
    assert text.endswith(CLASS_RECAP_FOOTER)


def test_class_recap_caption_without_absences():
    records = [make_record(1)]
    (recap,) = agg.aggregate_by_class(records)

    text = class_recap_caption(recap, agg.aggregate_by_person(records))

    assert "(Nihil - Semua Hadir)\n" in text


def test_monthly_report_survives_unusable_progress_values():
    progress = [
        ProgressRecord(1, 1, "2024-06", ProgressType.HAFALAN, "nan"),
        ProgressRecord(2, 2, "2024-06", ProgressType.HAFALAN, "2"),
        ProgressRecord(3, 1, "2024-06", ProgressType.ZIYADAH, "inf"),
        ProgressRecord(4, 2, "2024-06", ProgressType.MUROJAAH, "1e308"),
    ]

    report = _report(ReportCadence.MONTHLY, reference=date(2024, 6, 20), progress=progress)

    assert report.progress_averages[ProgressType.HAFALAN] == 1.0
    assert report.progress_averages[ProgressType.ZIYADAH] == 0.0
    assert report.progress_averages[ProgressType.MUROJAAH] == 0.0
    assert CaptionStrategyFactory().for_cadence(ReportCadence.MONTHLY).build(report).startswith("*LAPORAN BULANAN*")
