import pytest

from src.halaqah_tracker.halaqah_tracker.core.exceptions import MissingPhoneError
from src.halaqah_tracker.halaqah_tracker.export.messaging import WhatsAppComposer, normalize_phone


def test_local_prefix_becomes_country_code():
    assert normalize_phone("0812-3456 789") == "628123456789"
    assert normalize_phone("+62 812 3456") == "628123456"


def test_compose_encodes_text():
    message = WhatsAppComposer().compose("08123", "*LAPORAN*\nKelas: 1A (Aliyah)")

    assert message.url == "https://wa.me/628123?text=*LAPORAN*%0AKelas%3A%201A%20(Aliyah)"


@pytest.mark.parametrize("phone", [None, "", "  -  "])
def test_missing_phone(phone):
    with pytest.raises(MissingPhoneError) as exc:
        WhatsAppComposer().compose(phone, "halo")

    assert str(exc.value) == "No HP Wali Kelas tidak tersedia."
