from src.halaqah_tracker.halaqah_tracker.core.enums import AttendanceStatus, Role
from src.halaqah_tracker.halaqah_tracker.reports.filters import AttendanceFilter, apply_filter

from helpers import make_record


def _records():
    return [
        make_record(1, name="Ahmad Fauzi", session_date="2024-06-01"),
        make_record(2, name="Budi", session_date="2024-06-03", status=AttendanceStatus.ALPA),
        make_record(3, name="Ust. Fulan", role=Role.MUSAMMI, session_date="2024-06-05"),
        make_record(4, name="Dani", cohort="Mutawassithah", session_date="2024-06-07"),
    ]


def test_all_and_blank_mean_unconstrained():
    criteria = AttendanceFilter(cohort="all", class_label="", status="ALL")

    assert criteria.cohort is None and criteria.class_label is None and criteria.status is None
    assert len(apply_filter(_records(), criteria)) == 4


def test_date_range_is_inclusive():
    criteria = AttendanceFilter(date_start="2024-06-03", date_end="2024-06-05")

    assert [r.record_id for r in apply_filter(_records(), criteria)] == [2, 3]


def test_constraints_are_conjunctive():
    criteria = AttendanceFilter(cohort="Aliyah", role="Santri", status="Alpa")

    assert [r.record_id for r in apply_filter(_records(), criteria)] == [2]


def test_name_is_case_insensitive_substring():
    criteria = AttendanceFilter(name="fau")

    assert [r.record_id for r in apply_filter(_records(), criteria)] == [1]


def test_from_args_accepts_aliases():
    criteria = AttendanceFilter.from_args({"start": "2024-06-01", "kelas": "1A", "marhalah": "Aliyah", "q": "  "})

    assert criteria.date_start == "2024-06-01"
    assert criteria.class_label == "1A"
    assert criteria.cohort == "Aliyah"
    assert criteria.name is None


def test_filter_keeps_input_order():
    records = list(reversed(_records()))

    assert [r.record_id for r in apply_filter(records, AttendanceFilter())] == [4, 3, 2, 1]
