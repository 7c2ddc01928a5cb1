from __future__ import annotations

import asyncio
import base64
import io
from datetime import date

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import int_arg, json_body, ok, to_jsonable
from ..container import Container
from ..core.constants import DEFAULT_TREND_DAYS, GROUP_TYPE_MAIN
from ..core.enums import ReportCadence, TimeSlot
from ..core.exceptions import DomainError, ValidationError
from ..export.attendance_book import select_groups
from ..export.tables import PDF_MIMETYPE, XLSX_MIMETYPE
from . import formatter
from .filters import AttendanceFilter

EXPORT_FORMATS = ("xlsx", "pdf")


def _date_arg(value, *, default: date | None = None) -> date:
    if not value:
        if default is None:
            raise ValidationError("Tanggal wajib diisi.")
        return default
    try:
        return parse_iso_date(str(value))
    except ValueError as exc:
        raise ValidationError(f"Format tanggal tidak valid: {value}") from exc


def _cadence_arg(value) -> ReportCadence | None:
    if not value:
        return None
    try:
        return ReportCadence(value)
    except ValueError as exc:
        raise ValidationError(f"Periode laporan tidak dikenal: {value}") from exc


def register(app: Flask, container: Container) -> None:
    def _send(payload: bytes, *, file_base_name: str, fmt: str):
        mimetype = XLSX_MIMETYPE if fmt == "xlsx" else PDF_MIMETYPE
        return send_file(
            io.BytesIO(payload),
            mimetype=mimetype,
            as_attachment=True,
            download_name=f"{file_base_name}.{fmt}",
        )

    def _export(table, fmt: str):
        if fmt not in EXPORT_FORMATS:
            raise ValidationError(f"Format ekspor tidak dikenal: {fmt}")
        if fmt == "xlsx":
            payload = container.spreadsheet_exporter.export_table(table)
        else:
            payload = container.pdf_exporter.export_document(table)
        return _send(payload, file_base_name=table.file_base_name, fmt=fmt)

    @app.route("/api/reports/<view>", methods=["GET"], endpoint="api_reports_recap")
    def api_reports_recap(view: str):
        criteria = AttendanceFilter.from_args(request.args)
        return ok(container.report_service.recap(view, criteria))

    @app.route("/reports/export/<view>.<fmt>", methods=["GET"], endpoint="reports_export")
    def reports_export(view: str, fmt: str):
        if view == "groups":
            table = formatter.group_roster_table(container.group_service.list_groups())
        else:
            table = container.report_service.export_table(view, AttendanceFilter.from_args(request.args))
        return _export(table, fmt)

    @app.route("/api/reports/charts/<view>", methods=["GET"], endpoint="api_reports_chart")
    def api_reports_chart(view: str):
        chart = container.report_service.chart(view, AttendanceFilter.from_args(request.args))
        if request.args.get("format") == "png":
            image = container.renderer.render(chart)
            return send_file(io.BytesIO(image), mimetype="image/png")
        return ok(chart.as_dict())

    @app.route("/api/reports/session-breakdown", methods=["GET"], endpoint="api_reports_session_breakdown")
    def api_reports_session_breakdown():
        criteria = AttendanceFilter.from_args(request.args)
        session_date = _date_arg(request.args.get("date")).isoformat()
        try:
            slot = TimeSlot(request.args.get("slot", ""))
        except ValueError as exc:
            raise ValidationError("Silakan pilih waktu absensi yang spesifik.") from exc
        return ok(container.report_service.session_breakdown(criteria, session_date, slot))

    @app.route("/api/reports/history/<role>/<int:person_id>", methods=["GET"], endpoint="api_reports_history")
    def api_reports_history(role: str, person_id: int):
        criteria = AttendanceFilter.from_args(request.args)
        return ok(container.report_service.person_history(criteria, role, person_id))

    @app.route("/api/reports/class-reports", methods=["GET"], endpoint="api_reports_class_reports")
    def api_reports_class_reports():
        cadence = _cadence_arg(request.args.get("cadence")) or ReportCadence.DAILY
        reports = container.report_service.class_reports(
            cadence=cadence,
            reference_date=_date_arg(request.args.get("date"), default=now_local().date()),
            cohort=AttendanceFilter.from_args(request.args).cohort,
            generated_at=now_local(),
        )
        return ok([{**to_jsonable(r), "key": r.key, "phone": r.phone} for r in reports])

    @app.route("/api/reports/artifacts", methods=["POST"], endpoint="api_reports_artifacts")
    def api_reports_artifacts():
        """Render the selected classes and build a WhatsApp link for each.

        Body: ``{keys: [...], filter: {...}, cadence?, date?}``. A run that was
        superseded by a newer request answers 409 with no artifacts.
        """
        data = json_body()
        keys = [str(k) for k in data.get("keys") or []]
        if not keys:
            raise ValidationError("Pilih minimal satu kelas.")
        filter_args = data.get("filter") or {}
        if not isinstance(filter_args, dict):
            raise ValidationError("Filter tidak valid.")
        cadence = _cadence_arg(data.get("cadence"))
        pipeline_request = container.pipeline.new_request(
            keys,
            AttendanceFilter.from_args(filter_args),
            cadence=cadence,
            reference_date=_date_arg(data.get("date"), default=now_local().date()) if cadence else None,
        )
        artifacts = asyncio.run(container.pipeline.run(pipeline_request))
        if artifacts is None:
            return jsonify(
                {"success": False, "stale": True, "message": "Permintaan digantikan oleh permintaan yang lebih baru."}
            ), 409

        items = []
        for key, artifact in artifacts.items():
            item = {
                "key": key,
                "caption": artifact.caption,
                "image": base64.b64encode(artifact.image).decode("ascii"),
                "phone": artifact.phone,
                "whatsapp_url": None,
                "message": None,
            }
            try:
                item["whatsapp_url"] = container.composer.compose(artifact.phone, artifact.caption).url
            except DomainError as exc:
                item["message"] = str(exc)
            items.append(item)
        return ok({"stale": False, "artifacts": items, "skipped": [k for k in keys if k not in artifacts]})

    @app.route("/reports/attendance-book.pdf", methods=["GET"], endpoint="reports_attendance_book")
    def reports_attendance_book():
        group_type = request.args.get("group_type") or GROUP_TYPE_MAIN
        cohort = request.args.get("cohort")
        start_date = _date_arg(request.args.get("start"), default=now_local().date())
        weeks = max(int_arg(request.args.get("weeks"), 1), 1)
        groups = select_groups(container.group_service.list_groups(), group_type=group_type, cohort=cohort)
        if not groups:
            raise ValidationError("Tidak ada halaqah untuk dicetak.")
        payload = container.book_builder.build(
            groups,
            start_date=start_date,
            weeks=weeks,
            group_type=group_type,
            cohort=cohort,
        )
        return send_file(
            io.BytesIO(payload),
            mimetype=PDF_MIMETYPE,
            as_attachment=True,
            download_name=f"Buku_Absensi_{start_date.isoformat()}.pdf",
        )

    @app.route("/api/reports/dashboard", methods=["GET"], endpoint="api_dashboard")
    def api_dashboard():
        today = _date_arg(request.args.get("date"), default=now_local().date())
        days = int_arg(request.args.get("days"), DEFAULT_TREND_DAYS)
        return ok(container.report_service.dashboard(today, days=days))
