import base64

import pytest

from src.halaqah_tracker.halaqah_tracker.container import build_container
from src.halaqah_tracker.halaqah_tracker.main import create_app

from helpers import as_row, make_record


class FakeRenderer:
    def render(self, chart):
        return b"PNG"


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    store.insert("attendance", as_row(make_record(1)))
    store.insert("attendance", as_row(make_record(2, person_id=3, name="Chandra", class_label="2B")))
    app = create_app(build_container(store=store, renderer=FakeRenderer(), school_name="MA'HAD TEST"))
    return app.test_client()


def test_recap_view(client):
    resp = client.get("/api/reports/class_recap?marhalah=Aliyah")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert [row["Kelas"] for row in data] == ["1A", "2B"]


def test_unknown_view_is_a_bad_request(client):
    resp = client.get("/api/reports/nope")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_export_xlsx_download(client):
    resp = client.get("/reports/export/detail.xlsx")

    assert resp.status_code == 200
    assert "Laporan_Detail_Absensi.xlsx" in resp.headers["Content-Disposition"]


def test_record_session_validation_message(client):
    resp = client.post("/api/attendance", json={"date": "2024-06-03", "slot": "all", "entries": []})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Silakan pilih waktu absensi yang spesifik."


def test_group_lifecycle(client):
    resp = client.post(
        "/api/groups",
        json={"name": "Halaqah A", "teacher_id": 1, "cohort": "Aliyah", "group_type": "Halaqah Utama", "student_ids": [1]},
    )
    assert resp.status_code == 201
    group_id = resp.get_json()["data"]["id"]

    resp = client.post(
        "/api/attendance",
        json={
            "date": "2024-06-03",
            "slot": "Shubuh",
            "entries": [{"person_id": 1, "role": "Santri", "group_id": group_id, "status": "Izin"}],
        },
    )
    assert resp.status_code == 201

    assert client.delete(f"/api/groups/{group_id}").status_code == 200
    assert client.get(f"/api/groups/{group_id}").status_code == 404
    assert client.get(f"/api/attendance?group_id={group_id}").get_json()["data"] == []


def test_artifacts_include_whatsapp_links(client):
    resp = client.post("/api/reports/artifacts", json={"keys": ["Aliyah-1A", "Aliyah-2B"], "filter": {}})

    assert resp.status_code == 200
    items = {a["key"]: a for a in resp.get_json()["data"]["artifacts"]}
    assert base64.b64decode(items["Aliyah-1A"]["image"]) == b"PNG"
    assert items["Aliyah-1A"]["whatsapp_url"].startswith("https://wa.me/628123456789?text=")
    assert items["Aliyah-2B"]["whatsapp_url"] is None
    assert items["Aliyah-2B"]["message"] == "No HP Wali Kelas tidak tersedia."


def test_progress_save(client):
    resp = client.post("/api/progress", json={"month": "2024-06", "type": "Hafalan", "values": {"1": "3", "2": ""}})

    assert resp.status_code == 201
    assert [r["value"] for r in resp.get_json()["data"]] == ["3"]


def test_dashboard(client):
    resp = client.get("/api/reports/dashboard?date=2024-06-03&days=3")

    data = resp.get_json()["data"]
    assert data["students"] == 4
    assert data["today"]["Aliyah"]["Hadir"] == 2
    assert len(data["trend"]["categories"]) == 3


def test_attendance_list_by_group(client):
    resp = client.get("/api/attendance?group_id=1")

    assert resp.status_code == 200
    assert len(resp.get_json()["data"]) == 2


def test_attendance_list_rejects_non_numeric_group(client):
    resp = client.get("/api/attendance?group_id=abc")

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Angka tidak valid: abc"
