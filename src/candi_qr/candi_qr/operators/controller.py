from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.responses import created, json_body, ok
from ..common.validators import optional_str
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE


def register(app: Flask, container: Container) -> None:
    service = container.operator_service

    @app.route("/api/operators", methods=["GET"], endpoint="operators_list")
    def operators_list():
        return ok(service.list_operators(search=optional_str(request.args.get("search"))))

    @app.route("/api/operators", methods=["POST"], endpoint="operators_create")
    def operators_create():
        return created(service.create_operator(json_body()), "Operator berhasil ditambahkan")

    @app.route("/api/operators/<int:user_id>", methods=["GET"], endpoint="operators_get")
    def operators_get(user_id: int):
        return ok(service.get_operator(user_id))

    @app.route("/api/operators/<int:user_id>", methods=["PUT"], endpoint="operators_update")
    def operators_update(user_id: int):
        return ok(service.update_operator(user_id, json_body()), "Operator berhasil diupdate")

    @app.route("/api/operators/<int:user_id>", methods=["DELETE"], endpoint="operators_delete")
    def operators_delete(user_id: int):
        service.delete_operator(user_id)
        return ok(message="Operator berhasil dihapus")

    @app.route("/api/operators/school-data", methods=["GET"], endpoint="operators_school_data")
    def operators_school_data():
        return ok(service.school_data(today=now_local().date()))

    @app.route("/api/operators/users", methods=["GET"], endpoint="operators_users")
    def operators_users():
        data = service.list_users(
            page=request.args.get("page", 1, type=int),
            limit=request.args.get("limit", DEFAULT_PAGE_SIZE, type=int),
            search=optional_str(request.args.get("search")),
            role=optional_str(request.args.get("role")),
        )
        return ok(data)

    @app.route("/api/operators/bulk-create-users", methods=["POST"], endpoint="operators_bulk_create")
    def operators_bulk_create():
        data = service.bulk_create(json_body().get("users"))
        return ok(data, f"Berhasil membuat {len(data['success'])} user")
