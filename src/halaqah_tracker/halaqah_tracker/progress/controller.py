from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok
from ..container import Container
from ..core.enums import ProgressType
from ..core.exceptions import ValidationError
from .model import ProgressEntry


def register(app: Flask, container: Container) -> None:
    @app.route("/api/progress", methods=["GET"], endpoint="api_progress_list")
    def api_progress_list():
        month = request.args.get("month")
        if month:
            return ok(container.progress_service.list_for_month(month))
        return ok(container.progress_service.list_all())

    @app.route("/api/progress", methods=["POST"], endpoint="api_progress_save")
    def api_progress_save():
        """``{month, type, values: {student_id: value}}``; blank values are skipped."""
        data = json_body()
        try:
            progress_type = ProgressType(data.get("type"))
        except ValueError as exc:
            raise ValidationError(f"Jenis capaian tidak dikenal: {data.get('type')}") from exc
        values = data.get("values") or {}
        if not isinstance(values, dict):
            raise ValidationError("Nilai capaian tidak valid.")
        if not all(str(k).isdigit() for k in values):
            raise ValidationError("ID santri tidak valid.")
        entries = [
            ProgressEntry(
                student_id=int(student_id),
                month_key=str(data.get("month") or ""),
                progress_type=progress_type,
                value=str(value if value is not None else ""),
            )
            for student_id, value in values.items()
        ]
        saved = container.progress_service.save_batch(entries)
        return ok(saved, message="Data capaian berhasil disimpan!", status=201)

    @app.route("/api/progress/<int:progress_id>", methods=["DELETE"], endpoint="api_progress_delete")
    def api_progress_delete(progress_id: int):
        container.progress_service.delete_entry(progress_id)
        return ok(message="Data capaian dihapus.")

    @app.route("/api/progress/month", methods=["DELETE"], endpoint="api_progress_delete_month")
    def api_progress_delete_month():
        data = request.get_json(silent=True) or request.args
        try:
            progress_type = ProgressType(data.get("type"))
        except ValueError as exc:
            raise ValidationError(f"Jenis capaian tidak dikenal: {data.get('type')}") from exc
        deleted = container.progress_service.delete_month(str(data.get("month") or ""), progress_type)
        return ok({"deleted": deleted})
