from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def _role(value: str) -> Role:
    aliases = {"santri": Role.SANTRI, "students": Role.SANTRI, "musammi": Role.MUSAMMI, "teachers": Role.MUSAMMI}
    role = aliases.get(value.lower())
    if role is None:
        raise ValidationError(f"Peran tidak dikenal: {value}")
    return role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/roster/<kind>", methods=["GET"], endpoint="api_roster_list")
    def api_roster_list(kind: str):
        return ok(container.roster_service.list_people(_role(kind)))

    @app.route("/api/roster/<kind>", methods=["POST"], endpoint="api_roster_add")
    def api_roster_add(kind: str):
        data = json_body()
        person = container.roster_service.add_person(
            _role(kind),
            name=data.get("name"),
            cohort=data.get("cohort"),
            class_label=data.get("class_label"),
            code=data.get("code"),
        )
        return ok(person, status=201)

    @app.route("/api/supervisors", methods=["GET"], endpoint="api_supervisors_list")
    def api_supervisors_list():
        return ok(container.roster_service.list_supervisors())

    @app.route("/api/supervisors", methods=["POST"], endpoint="api_supervisors_add")
    def api_supervisors_add():
        data = json_body()
        supervisor = container.roster_service.add_supervisor(
            name=data.get("name"),
            cohort=data.get("cohort"),
            class_label=data.get("class_label"),
            phone=data.get("phone"),
        )
        return ok(supervisor, status=201)
