from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ReportCadence
from ..core.exceptions import NotFoundError, RenderFailure
from ..reports.filters import AttendanceFilter
from ..reports.service import ReportService
from .rendering import ChartRenderer

logger = logging.getLogger(__name__)


class GenerationTracker:
    """Hands out increasing tokens; only the latest token is current."""

    def __init__(self):
        self._lock = threading.Lock()
        self._current = 0

    def next(self) -> int:
        with self._lock:
            self._current += 1
            return self._current

    @property
    def current(self) -> int:
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current


@dataclass(frozen=True)
class ExportRequest:
    generation_token: int
    selected_keys: tuple[str, ...]
    filter_snapshot: AttendanceFilter
    cadence: Optional[ReportCadence] = None
    reference_date: Optional[date] = None


@dataclass(frozen=True)
class Artifact:
    key: str
    image: bytes
    caption: str
    phone: Optional[str] = None


class ArtifactPipeline:
    """Builds image + caption artifacts for the selected classes.

    Classes are processed one at a time in selection order. A class whose chart
    fails to render, or that no longer exists, is logged and left out.
    """

    def __init__(self, reports: ReportService, renderer: ChartRenderer, tracker: GenerationTracker):
        self._reports = reports
        self._renderer = renderer
        self._tracker = tracker

    @property
    def tracker(self) -> GenerationTracker:
        return self._tracker

    def new_request(self, selected_keys, filter_snapshot: AttendanceFilter, **kwargs) -> ExportRequest:
        return ExportRequest(
            generation_token=self._tracker.next(),
            selected_keys=tuple(selected_keys),
            filter_snapshot=filter_snapshot,
            **kwargs,
        )

    def _stale(self, request: ExportRequest) -> bool:
        if self._tracker.is_current(request.generation_token):
            return False
        logger.info("export run %s superseded by %s; discarding", request.generation_token, self._tracker.current)
        return True

    async def run(self, request: ExportRequest) -> Optional[dict[str, Artifact]]:
        # StoreUnavailable propagates: no artifacts from a partial snapshot.
        snapshot = await asyncio.to_thread(self._reports.load_snapshot)
        items = self._reports.report_items(
            snapshot,
            request.filter_snapshot,
            cadence=request.cadence,
            reference_date=request.reference_date,
        )

        results: dict[str, Artifact] = {}
        for key in request.selected_keys:
            if self._stale(request):
                return None
            try:
                item = items.get(key)
                if item is None:
                    raise NotFoundError(f"Kelas {key} tidak ada pada data terpilih")
                image = await asyncio.to_thread(self._renderer.render, item.chart)
            except (RenderFailure, NotFoundError) as exc:
                logger.warning("skipping %s: %s", key, exc)
                continue
            results[key] = Artifact(key=key, image=image, caption=item.caption, phone=item.phone)

        if self._stale(request):
            return None
        logger.info("export run %s produced %d/%d artifacts", request.generation_token, len(results), len(request.selected_keys))
        return results
