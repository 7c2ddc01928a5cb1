from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .core.constants import DEFAULT_COUNTRY_CODE
from .database.connection import DBConfig, DatabaseConnection
from .export.attendance_book import AttendanceBookBuilder
from .export.messaging import WhatsAppComposer
from .export.pipeline import ArtifactPipeline, GenerationTracker
from .export.rendering import ChartRenderer, MatplotlibChartRenderer
from .export.tables import PdfExporter, SpreadsheetExporter
from .groups.service import GroupService
from .progress.service import ProgressService
from .reports.service import ReportService
from .roster.service import RosterService
from .store.base import RecordStore
from .store.memory import InMemoryRecordStore
from .store.mysql_store import MySQLRecordStore

STORE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    store: RecordStore

    roster_service: RosterService
    group_service: GroupService
    attendance_service: AttendanceService
    progress_service: ProgressService
    report_service: ReportService

    spreadsheet_exporter: SpreadsheetExporter
    pdf_exporter: PdfExporter
    renderer: ChartRenderer
    pipeline: ArtifactPipeline
    composer: WhatsAppComposer
    book_builder: AttendanceBookBuilder


def build_store(*, db_config: dict, store_backend: str = "mysql") -> RecordStore:
    if store_backend not in STORE_BACKENDS:
        raise ValueError(f"Unknown STORE_BACKEND: {store_backend}")
    if store_backend == "memory":
        return InMemoryRecordStore()
    return MySQLRecordStore(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))


def build_container(
    *,
    db_config: Optional[dict] = None,
    store_backend: str = "mysql",
    store: Optional[RecordStore] = None,
    renderer: Optional[ChartRenderer] = None,
    school_name: str = "",
    school_location: str = "",
    country_code: str = DEFAULT_COUNTRY_CODE,
) -> Container:
    store = store if store is not None else build_store(db_config=db_config or {}, store_backend=store_backend)
    renderer = renderer or MatplotlibChartRenderer()

    report_service = ReportService(store)

    return Container(
        store=store,
        roster_service=RosterService(store),
        group_service=GroupService(store),
        attendance_service=AttendanceService(store),
        progress_service=ProgressService(store),
        report_service=report_service,
        spreadsheet_exporter=SpreadsheetExporter(),
        pdf_exporter=PdfExporter(),
        renderer=renderer,
        pipeline=ArtifactPipeline(report_service, renderer, GenerationTracker()),
        composer=WhatsAppComposer(country_code=country_code),
        book_builder=AttendanceBookBuilder(school_name=school_name, school_location=school_location),
    )
