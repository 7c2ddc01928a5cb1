import pytest

from src.halaqah_tracker.halaqah_tracker.attendance.model import AttendanceEntry
from src.halaqah_tracker.halaqah_tracker.attendance.service import AttendanceService
from src.halaqah_tracker.halaqah_tracker.core.enums import Role, TimeSlot
from src.halaqah_tracker.halaqah_tracker.core.exceptions import NotFoundError, ValidationError
from src.halaqah_tracker.halaqah_tracker.groups.model import GroupType
from src.halaqah_tracker.halaqah_tracker.groups.service import GroupService


def _create(service, **overrides):
    fields = dict(name="Halaqah Al-Fatih", teacher_id=1, cohort="Aliyah", group_type="Halaqah Utama", student_ids=[1, 2])
    fields.update(overrides)
    return service.create_group(**fields)


def test_create_group_uses_default_slots(store):
    group = _create(GroupService(store))

    assert group.slots == [TimeSlot.SHUBUH, TimeSlot.ASHAR, TimeSlot.ISYA]
    assert [m.name for m in group.members] == ["Ahmad", "Budi"]
    assert group.teacher.name == "Ust. Fulan"


def test_created_and_fetched_group_list_members_alike(store):
    service = GroupService(store)
    created = _create(service, student_ids=[2, 1])

    fetched = service.get_group(created.group_id)

    assert [m.person_id for m in created.members] == [1, 2]
    assert [m.person_id for m in fetched.members] == [1, 2]


def test_morning_group_defaults_to_dhuha(store):
    group = _create(GroupService(store), group_type="Halaqah Pagi")

    assert group.slots == [TimeSlot.DHUHA]


def test_custom_group_type_is_kept(store):
    group = _create(GroupService(store), group_type="Tahsin")

    assert group.group_type == GroupType("Tahsin")
    assert not group.group_type.is_well_known


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"teacher_id": None}, "Pilih Musammi' terlebih dahulu."),
        ({"name": "  "}, "Nama halaqah wajib diisi."),
        ({"group_type": ""}, "Nama jenis halaqah baru wajib diisi."),
    ],
)
def test_create_group_validation(store, overrides, message):
    with pytest.raises(ValidationError) as exc:
        _create(GroupService(store), **overrides)

    assert str(exc.value) == message


def test_students_must_share_the_cohort(store):
    with pytest.raises(ValidationError):
        _create(GroupService(store), student_ids=[1, 4])


def test_add_members_skips_existing(store):
    service = GroupService(store)
    group = _create(service, student_ids=[1])

    added = service.add_members(group.group_id, [1, 2, 3])

    assert [p.person_id for p in added] == [2, 3]
    assert [m.person_id for m in service.get_group(group.group_id).members] == [1, 2, 3]


def test_add_members_requires_selection(store):
    service = GroupService(store)
    group = _create(service)

    with pytest.raises(ValidationError) as exc:
        service.add_members(group.group_id, [])

    assert str(exc.value) == "Pilih minimal satu santri."


def test_delete_group_cascades(store):
    groups = GroupService(store)
    attendance = AttendanceService(store)
    group = _create(groups)
    other = _create(groups, name="Halaqah B", student_ids=[3])
    attendance.record_session(
        "2024-06-03",
        "Shubuh",
        [
            AttendanceEntry(person_id=1, role=Role.MUSAMMI, group_id=group.group_id),
            AttendanceEntry(person_id=1, role=Role.SANTRI, group_id=group.group_id),
            AttendanceEntry(person_id=3, role=Role.SANTRI, group_id=other.group_id),
        ],
    )

    groups.delete_group(group.group_id)

    assert attendance.list_for_group(group.group_id) == []
    assert store.query("group_members", {"group_id": group.group_id}) == []
    with pytest.raises(NotFoundError):
        groups.get_group(group.group_id)
    assert len(attendance.list_for_group(other.group_id)) == 1


def test_delete_missing_group(store):
    with pytest.raises(NotFoundError):
        GroupService(store).delete_group(99)
