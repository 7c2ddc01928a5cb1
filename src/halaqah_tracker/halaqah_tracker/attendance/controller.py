from __future__ import annotations

from flask import Flask, request

from ..common.http import int_arg, json_body, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AttendanceEntry


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    def api_attendance_list():
        group_id = int_arg(request.args.get("group_id"))
        if group_id is not None:
            records = container.attendance_service.list_for_group(group_id)
        else:
            records = container.attendance_service.list_records()
        return ok(records)

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_record")
    def api_attendance_record():
        """Save one session: ``{date, slot, entries: [{person_id, role, group_id, status}]}``."""
        data = json_body()
        try:
            entries = [AttendanceEntry.from_dict(e) for e in data.get("entries") or []]
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(f"Data absensi tidak valid: {exc}") from exc
        saved = container.attendance_service.record_session(data.get("date"), data.get("slot"), entries)
        return ok(saved, message="Absensi berhasil disimpan!", status=201)

    @app.route("/api/attendance", methods=["DELETE"], endpoint="api_attendance_delete_batch")
    def api_attendance_delete_batch():
        data = request.get_json(silent=True) or request.args
        deleted = container.attendance_service.delete_batch(data.get("date"), data.get("slot"))
        return ok({"deleted": deleted}, message=f"{deleted} data absensi dihapus.")

    @app.route("/api/attendance/<int:record_id>", methods=["PATCH"], endpoint="api_attendance_edit")
    def api_attendance_edit(record_id: int):
        data = json_body()
        record = container.attendance_service.edit_record(
            record_id,
            status=data.get("status"),
            session_date=data.get("date"),
            slot=data.get("slot"),
        )
        return ok(record, message="Data absensi diperbarui.")

    @app.route("/api/attendance/<int:record_id>", methods=["DELETE"], endpoint="api_attendance_delete")
    def api_attendance_delete(record_id: int):
        container.attendance_service.delete_record(record_id)
        return ok(message="Data absensi dihapus.")
