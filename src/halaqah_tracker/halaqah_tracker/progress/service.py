from __future__ import annotations

import logging
import math
from typing import Iterable

from ..common.datetime_utils import parse_month_key
from ..core.enums import ProgressType
from ..core.exceptions import ValidationError
from ..store.base import PROGRESS, RecordStore
from .model import ProgressEntry, ProgressRecord

logger = logging.getLogger(__name__)


def _validate(entry: ProgressEntry) -> dict:
    try:
        parse_month_key(entry.month_key)
    except ValueError as exc:
        raise ValidationError(f"Bulan tidak valid: {entry.month_key}") from exc
    try:
        progress_type = ProgressType(entry.progress_type)
    except ValueError as exc:
        raise ValidationError(f"Jenis capaian tidak dikenal: {entry.progress_type}") from exc
    value = str(entry.value).strip()
    try:
        number = float(value)
    except ValueError as exc:
        raise ValidationError(f"Nilai capaian harus berupa angka: {entry.value}") from exc
    if not math.isfinite(number):
        raise ValidationError(f"Nilai capaian harus berupa angka: {entry.value}")
    return {
        "student_id": int(entry.student_id),
        "month_key": entry.month_key,
        "progress_type": progress_type.value,
        "value": value,
    }


class ProgressService:
    def __init__(self, store: RecordStore):
        self._store = store

    def save_batch(self, entries: Iterable[ProgressEntry]) -> list[ProgressRecord]:
        """Upsert by (student, month, type); blank values are skipped."""
        rows = [_validate(e) for e in entries if str(e.value).strip()]
        if not rows:
            raise ValidationError("Tidak ada data capaian untuk disimpan.")

        saved = []
        for row in rows:
            key = {k: row[k] for k in ("student_id", "month_key", "progress_type")}
            existing = self._store.query(PROGRESS, key)
            if existing:
                self._store.update(PROGRESS, existing[0]["id"], {"value": row["value"]})
                saved.append(ProgressRecord.from_row({**existing[0], "value": row["value"]}))
            else:
                saved.append(ProgressRecord.from_row(self._store.insert(PROGRESS, row)))
        logger.info("saved %d progress entries", len(saved))
        return saved

    def delete_entry(self, progress_id: int) -> None:
        self._store.delete(PROGRESS, int(progress_id))

    def delete_month(self, month_key: str, progress_type: ProgressType) -> int:
        deleted = self._store.delete_where(
            PROGRESS,
            {"month_key": month_key, "progress_type": ProgressType(progress_type).value},
        )
        logger.info("deleted %d progress entries for %s %s", deleted, month_key, ProgressType(progress_type).value)
        return deleted

    def list_for_month(self, month_key: str) -> list[ProgressRecord]:
        return [ProgressRecord.from_row(r) for r in self._store.query(PROGRESS, {"month_key": month_key})]

    def list_all(self) -> list[ProgressRecord]:
        return [ProgressRecord.from_row(r) for r in self._store.query(PROGRESS)]
