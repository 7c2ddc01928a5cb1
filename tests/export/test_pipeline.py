import asyncio
import logging
from datetime import date

import pytest

from src.halaqah_tracker.halaqah_tracker.core.enums import ReportCadence
from src.halaqah_tracker.halaqah_tracker.core.exceptions import RenderFailure, StoreUnavailable
from src.halaqah_tracker.halaqah_tracker.export.pipeline import ArtifactPipeline, GenerationTracker
from src.halaqah_tracker.halaqah_tracker.reports.filters import AttendanceFilter
from src.halaqah_tracker.halaqah_tracker.reports.service import ReportService
from src.halaqah_tracker.halaqah_tracker.store.memory import InMemoryRecordStore

from helpers import as_row, make_record


class FakeRenderer:
    def __init__(self, fail_titles=(), on_render=None):
        self.fail_titles = set(fail_titles)
        self.on_render = on_render
        self.rendered = []

    def render(self, chart):
        if self.on_render:
            self.on_render()
        if chart.title in self.fail_titles:
            raise RenderFailure(f"cannot draw {chart.title}")
        self.rendered.append(chart.title)
        return b"PNG:" + chart.title.encode()


class BrokenStore(InMemoryRecordStore):
    def query(self, collection, where=None, *, order_by=None):
        raise StoreUnavailable("database down")


@pytest.fixture
def seeded(store):
    for r in [
        make_record(1, person_id=1, name="Ahmad"),
        make_record(2, person_id=3, name="Chandra", class_label="2B"),
        make_record(3, person_id=4, name="Dani", cohort="Mutawassithah"),
    ]:
        store.insert("attendance", as_row(r))
    return store


def _pipeline(store, renderer):
    return ArtifactPipeline(ReportService(store), renderer, GenerationTracker())


def test_failed_render_is_skipped_and_logged(seeded, caplog):
    renderer = FakeRenderer(fail_titles={"Kehadiran Kelas 2B (Aliyah)"})
    pipeline = _pipeline(seeded, renderer)
    request = pipeline.new_request(["Aliyah-1A", "Aliyah-2B"], AttendanceFilter())

    with caplog.at_level(logging.WARNING):
        artifacts = asyncio.run(pipeline.run(request))

    assert list(artifacts) == ["Aliyah-1A"]
    assert artifacts["Aliyah-1A"].image == b"PNG:Kehadiran Kelas 1A (Aliyah)"
    assert artifacts["Aliyah-1A"].phone == "0812-3456-789"
    assert "Aliyah-2B" in caplog.text


def test_artifacts_follow_selection_order(seeded):
    renderer = FakeRenderer()
    pipeline = _pipeline(seeded, renderer)
    request = pipeline.new_request(["Mutawassithah-1A", "Aliyah-1A"], AttendanceFilter())

    artifacts = asyncio.run(pipeline.run(request))

    assert list(artifacts) == ["Mutawassithah-1A", "Aliyah-1A"]
    assert artifacts["Aliyah-1A"].caption.startswith("*LAPORAN ABSENSI KELAS*\nKelas: 1A (Aliyah)\n")


def test_unknown_key_is_skipped(seeded):
    pipeline = _pipeline(seeded, FakeRenderer())
    request = pipeline.new_request(["Aliyah-3B", "Aliyah-1A"], AttendanceFilter())

    assert list(asyncio.run(pipeline.run(request))) == ["Aliyah-1A"]


def test_superseded_run_returns_nothing(seeded):
    holder = {}
    renderer = FakeRenderer(on_render=lambda: holder["pipeline"].tracker.next())
    pipeline = _pipeline(seeded, renderer)
    holder["pipeline"] = pipeline
    request = pipeline.new_request(["Aliyah-1A", "Aliyah-2B"], AttendanceFilter())

    assert asyncio.run(pipeline.run(request)) is None
    assert len(renderer.rendered) == 1


def test_filter_snapshot_limits_classes(seeded):
    pipeline = _pipeline(seeded, FakeRenderer())
    request = pipeline.new_request(["Aliyah-1A", "Aliyah-2B"], AttendanceFilter(class_label="2B"))

    assert list(asyncio.run(pipeline.run(request))) == ["Aliyah-2B"]


def test_cadence_run_uses_report_cards(seeded):
    pipeline = _pipeline(seeded, FakeRenderer())
    request = pipeline.new_request(
        ["Aliyah-1A"], AttendanceFilter(), cadence=ReportCadence.DAILY, reference_date=date(2024, 6, 3)
    )

    artifacts = asyncio.run(pipeline.run(request))

    assert artifacts["Aliyah-1A"].caption.startswith("*LAPORAN HARIAN*\nSenin, 3 Juni 2024\n")


def test_store_failure_propagates():
    pipeline = _pipeline(BrokenStore(), FakeRenderer())
    request = pipeline.new_request(["Aliyah-1A"], AttendanceFilter())

    with pytest.raises(StoreUnavailable):
        asyncio.run(pipeline.run(request))
