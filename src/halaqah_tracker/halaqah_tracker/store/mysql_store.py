from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, quote_identifier
from .base import COLLECTIONS


class MySQLRecordStore:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _table(collection: str) -> str:
        if collection not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {collection}")
        return quote_identifier(collection)

    def query(self, collection: str, where=None, *, order_by: Optional[str] = None) -> list[dict]:
        clause, params = build_where(dict(where or {}))
        order = f" ORDER BY {quote_identifier(order_by)} ASC" if order_by else " ORDER BY `id` ASC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT * FROM {self._table(collection)}{clause}{order}", params)
            return fetchall(cur)

    def insert(self, collection: str, record: Mapping[str, Any]) -> dict:
        row = {k: v for k, v in record.items() if k != "id" or v is not None}
        columns = ", ".join(quote_identifier(k) for k in row)
        placeholders = ", ".join(["%s"] * len(row))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {self._table(collection)}({columns}) VALUES({placeholders})",
                tuple(row.values()),
            )
            row["id"] = int(cur.lastrowid) if row.get("id") is None else row["id"]
        return row

    def update(self, collection: str, record_id: int, fields: Mapping[str, Any]) -> None:
        changes = {k: v for k, v in fields.items() if k != "id"}
        table = self._table(collection)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT `id` FROM {table} WHERE `id`=%s", (int(record_id),))
            if not fetchone(cur):
                raise NotFoundError(f"{collection} #{record_id} tidak ditemukan")
            if not changes:
                return
            assignments = ", ".join(f"{quote_identifier(k)}=%s" for k in changes)
            cur.execute(
                f"UPDATE {table} SET {assignments} WHERE `id`=%s",
                (*changes.values(), int(record_id)),
            )

    def delete(self, collection: str, record_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table(collection)} WHERE `id`=%s", (int(record_id),))

    def delete_where(self, collection: str, where: Mapping[str, Any]) -> int:
        clause, params = build_where(dict(where))
        if not clause:
            raise ValueError("delete_where requires at least one condition")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table(collection)}{clause}", params)
            return int(cur.rowcount)
