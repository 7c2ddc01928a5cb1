from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import NotFoundError
from .base import COLLECTIONS


class InMemoryRecordStore:
    """Dict-backed store used by tests and the ``memory`` backend."""

    def __init__(self, seed: Optional[Mapping[str, list[dict]]] = None):
        self._rows: dict[str, list[dict]] = {name: [] for name in COLLECTIONS}
        self._next_id: dict[str, int] = {name: 1 for name in COLLECTIONS}
        for collection, rows in (seed or {}).items():
            for row in rows:
                self.insert(collection, row)

    def _collection(self, collection: str) -> list[dict]:
        if collection not in self._rows:
            raise KeyError(f"Unknown collection: {collection}")
        return self._rows[collection]

    @staticmethod
    def _matches(row: dict, where: Optional[Mapping[str, Any]]) -> bool:
        if not where:
            return True
        return all(row.get(k) == v for k, v in where.items())

    def query(self, collection: str, where=None, *, order_by: Optional[str] = None) -> list[dict]:
        rows = [dict(r) for r in self._collection(collection) if self._matches(r, where)]
        if order_by:
            rows.sort(key=lambda r: (r.get(order_by) is None, r.get(order_by)))
        return rows

    def insert(self, collection: str, record: Mapping[str, Any]) -> dict:
        rows = self._collection(collection)
        row = dict(record)
        if row.get("id") is None:
            row["id"] = self._next_id[collection]
        self._next_id[collection] = max(self._next_id[collection], int(row["id"])) + 1
        rows.append(row)
        return dict(row)

    def update(self, collection: str, record_id: int, fields: Mapping[str, Any]) -> None:
        for row in self._collection(collection):
            if row["id"] == int(record_id):
                row.update({k: v for k, v in fields.items() if k != "id"})
                return
        raise NotFoundError(f"{collection} #{record_id} tidak ditemukan")

    def delete(self, collection: str, record_id: int) -> None:
        rows = self._collection(collection)
        rows[:] = [r for r in rows if r["id"] != int(record_id)]

    def delete_where(self, collection: str, where: Mapping[str, Any]) -> int:
        rows = self._collection(collection)
        kept = [r for r in rows if not self._matches(r, where)]
        deleted = len(rows) - len(kept)
        rows[:] = kept
        return deleted
