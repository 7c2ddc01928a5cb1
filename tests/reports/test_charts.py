from src.halaqah_tracker.halaqah_tracker.core.enums import AttendanceStatus
from src.halaqah_tracker.halaqah_tracker.reports import aggregation as agg
from src.halaqah_tracker.halaqah_tracker.reports import charts

from helpers import make_record


def test_min_width_below_floor_fills_container():
    assert charts.min_width_px(14, 40) is None
    assert charts.min_width_px(15, 40) == 600
    assert charts.min_width_px(20, 50) == 1000


def test_person_chart_has_one_series_per_status():
    records = [make_record(1), make_record(2, status=AttendanceStatus.SAKIT)]

    chart = charts.person_recap_chart(agg.aggregate_by_person(records))

    assert chart.kind == charts.STACKED_BAR
    assert chart.categories == ["Ahmad"]
    assert {s.name: s.values for s in chart.series}["Sakit"] == [1]
    assert chart.width_px is None


def test_status_pie_follows_status_order():
    records = [make_record(1, status=AttendanceStatus.ALPA)]

    chart = charts.status_pie_chart(agg.status_distribution(records))

    assert chart.kind == charts.PIE
    assert chart.categories == ["Hadir", "Izin", "Sakit", "Alpa", "Terlambat"]
    assert chart.series[0].values == [0, 0, 0, 1, 0]


def test_chart_as_dict_is_plain_data():
    chart = charts.single_class_chart(agg.aggregate_by_class([make_record(1)])[0])

    data = chart.as_dict()

    assert data["title"] == "Kehadiran Kelas 1A (Aliyah)"
    assert data["series"][0]["values"] == [1, 0, 0, 0, 0]
