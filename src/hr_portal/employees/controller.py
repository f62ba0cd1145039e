from __future__ import annotations

import io

from flask import Flask, request

from ..common.http import error_response, fail, json_body, make_admin_required, ok
from ..container import Container
from ..core.constants import MAX_AVATAR_BYTES
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(lambda: container.admin_api_key)

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        try:
            employees = container.employee_service.list_employees()
            return ok(employees=[e.to_dict() for e in employees])
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @admin_required
    def create_employee():
        try:
            employee = container.employee_service.create_employee(json_body())
            return ok(employee=employee.to_dict(), status=201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: str):
        try:
            return ok(employee=container.employee_service.get_employee(employee_id).to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @admin_required
    def update_employee(employee_id: str):
        try:
            employee = container.employee_service.update_employee(employee_id, json_body())
            return ok(employee=employee.to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    def delete_employee(employee_id: str):
        try:
            container.employee_service.delete_employee(employee_id)
            return ok(message="Employee deleted")
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees/<employee_id>/avatar", methods=["POST"], endpoint="upload_avatar")
    def upload_avatar(employee_id: str):
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return fail("No file uploaded", 400)

        try:
            container.employee_service.get_employee(employee_id)
            body = upload.stream.read(MAX_AVATAR_BYTES + 1)
            if len(body) > MAX_AVATAR_BYTES:
                raise ValidationError(f"File too large: please select an image under {MAX_AVATAR_BYTES // (1024 * 1024)}MB")
            url = container.avatar_storage.upload_avatar(
                owner_id=employee_id,
                stream=io.BytesIO(body),
                filename=upload.filename,
                content_type=upload.mimetype,
                size=len(body),
            )
            employee = container.employee_service.set_avatar(employee_id, url)
            return ok(avatar_url=url, employee=employee.to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees/<employee_id>/invite", methods=["POST"], endpoint="invite_employee")
    @admin_required
    def invite_employee(employee_id: str):
        data = request.get_json(silent=True) or {}
        try:
            sent_to = container.invitation_service.invite(
                employee_id,
                email=data.get("email"),
                subject=data.get("subject"),
                message=data.get("message"),
            )
            return ok(message=f"Invitation sent successfully to {sent_to}")
        except Exception as e:
            return error_response(e)

    @app.route("/api/profile/<user_id>", methods=["GET"], endpoint="get_profile")
    def get_profile(user_id: str):
        try:
            return ok(employee=container.employee_service.get_profile(user_id).to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/api/profile/<user_id>", methods=["POST"], endpoint="create_profile")
    def create_profile(user_id: str):
        try:
            employee = container.employee_service.create_profile(user_id, json_body())
            return ok(employee=employee.to_dict(), status=201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/profile/<user_id>", methods=["PUT"], endpoint="update_profile")
    def update_profile(user_id: str):
        try:
            employee = container.employee_service.update_profile(user_id, json_body())
            return ok(employee=employee.to_dict())
        except Exception as e:
            return error_response(e)
