from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok, to_jsonable
from ..container import Container
from ..core.enums import TimeSlot
from ..core.exceptions import ValidationError
from .model import Group


def group_payload(group: Group) -> dict:
    return {
        "id": group.group_id,
        "name": group.name,
        "teacher_id": group.teacher_id,
        "teacher": group.teacher.name if group.teacher else None,
        "cohort": group.cohort,
        "group_type": group.group_type.value,
        "slots": [s.value for s in group.slots],
        "members": to_jsonable(group.members),
    }


def _student_ids(data: dict) -> list[int]:
    try:
        return [int(s) for s in data.get("student_ids") or []]
    except (TypeError, ValueError) as exc:
        raise ValidationError("Daftar santri tidak valid.") from exc


def _slots(data: dict):
    raw = data.get("slots")
    if not raw:
        return None
    try:
        return [TimeSlot(s) for s in raw]
    except ValueError as exc:
        raise ValidationError(f"Waktu halaqah tidak dikenal: {exc}") from exc


def register(app: Flask, container: Container) -> None:
    @app.route("/api/groups", methods=["GET"], endpoint="api_groups_list")
    def api_groups_list():
        return ok([group_payload(g) for g in container.group_service.list_groups()])

    @app.route("/api/groups", methods=["POST"], endpoint="api_groups_create")
    def api_groups_create():
        data = json_body()
        group = container.group_service.create_group(
            name=data.get("name"),
            teacher_id=data.get("teacher_id"),
            cohort=data.get("cohort"),
            group_type=data.get("group_type"),
            student_ids=_student_ids(data),
            slots=_slots(data),
        )
        return ok(group_payload(group), message="Halaqah berhasil dibuat!", status=201)

    @app.route("/api/groups/<int:group_id>", methods=["GET"], endpoint="api_groups_get")
    def api_groups_get(group_id: int):
        return ok(group_payload(container.group_service.get_group(group_id)))

    @app.route("/api/groups/<int:group_id>", methods=["PATCH"], endpoint="api_groups_update")
    def api_groups_update(group_id: int):
        data = json_body()
        group = container.group_service.update_group(
            group_id,
            teacher_id=data.get("teacher_id"),
            group_type=data.get("group_type"),
        )
        return ok(group_payload(group), message="Halaqah diperbarui.")

    @app.route("/api/groups/<int:group_id>", methods=["DELETE"], endpoint="api_groups_delete")
    def api_groups_delete(group_id: int):
        container.group_service.delete_group(group_id)
        return ok(message="Halaqah beserta data absensinya dihapus.")

    @app.route("/api/groups/<int:group_id>/members", methods=["POST"], endpoint="api_groups_add_members")
    def api_groups_add_members(group_id: int):
        added = container.group_service.add_members(group_id, _student_ids(json_body()))
        return ok(added, message=f"{len(added)} santri ditambahkan.")

    @app.route(
        "/api/groups/<int:group_id>/members/<int:student_id>",
        methods=["DELETE"],
        endpoint="api_groups_remove_member",
    )
    def api_groups_remove_member(group_id: int, student_id: int):
        removed = container.group_service.remove_member(group_id, student_id)
        return ok({"removed": removed})
