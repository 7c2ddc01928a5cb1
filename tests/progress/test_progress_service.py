import pytest

from src.halaqah_tracker.halaqah_tracker.core.enums import ProgressType
from src.halaqah_tracker.halaqah_tracker.core.exceptions import ValidationError
from src.halaqah_tracker.halaqah_tracker.progress.model import ProgressEntry, ProgressRecord
from src.halaqah_tracker.halaqah_tracker.progress.service import ProgressService


def _entry(student_id, value, month="2024-06", progress_type=ProgressType.HAFALAN):
    return ProgressEntry(student_id=student_id, month_key=month, progress_type=progress_type, value=value)


def test_save_batch_upserts_and_skips_blanks(store):
    service = ProgressService(store)
    service.save_batch([_entry(1, "2"), _entry(2, "")])

    service.save_batch([_entry(1, "2.5")])

    records = service.list_for_month("2024-06")
    assert [(r.student_id, r.value) for r in records] == [(1, "2.5")]


def test_save_batch_rejects_non_numeric(store):
    with pytest.raises(ValidationError):
        ProgressService(store).save_batch([_entry(1, "dua")])


def test_save_batch_rejects_bad_month(store):
    with pytest.raises(ValidationError):
        ProgressService(store).save_batch([_entry(1, "3", month="Juni")])


def test_save_batch_with_only_blanks(store):
    with pytest.raises(ValidationError):
        ProgressService(store).save_batch([_entry(1, "  ")])


def test_delete_month_keeps_other_types(store):
    service = ProgressService(store)
    service.save_batch([_entry(1, "2"), _entry(2, "3")])
    service.save_batch([_entry(1, "5", progress_type=ProgressType.ZIYADAH)])

    assert service.delete_month("2024-06", ProgressType.HAFALAN) == 2
    assert [r.progress_type for r in service.list_all()] == [ProgressType.ZIYADAH]


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", "1e400"])
def test_save_batch_rejects_non_finite(store, value):
    service = ProgressService(store)

    with pytest.raises(ValidationError):
        service.save_batch([_entry(1, value)])
    assert service.list_all() == []


@pytest.mark.parametrize("value", ["nan", "inf", "1e400", "abc"])
def test_numeric_value_of_bad_stored_value_is_zero(value):
    record = ProgressRecord(1, 1, "2024-06", ProgressType.HAFALAN, value)

    assert record.numeric_value == 0.0
