from __future__ import annotations

from flask import Flask, request

from ..common.http import error_response, json_body, make_admin_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(lambda: container.admin_api_key)

    @app.route("/api/time-off", methods=["GET"], endpoint="list_time_off")
    def list_time_off():
        try:
            employee_id = (request.args.get("employee_id") or "").strip() or None
            return ok(requests=list(container.leave_service.list_requests(employee_id=employee_id)))
        except Exception as e:
            return error_response(e)

    @app.route("/api/time-off", methods=["POST"], endpoint="submit_time_off")
    def submit_time_off():
        try:
            data = json_body()
            request_id = container.leave_service.submit(
                employee_id=data.get("employee_id"),
                request_type=data.get("request_type"),
                start_date=data.get("start_date"),
                end_date=data.get("end_date"),
                reason=data.get("reason"),
            )
            return ok(id=request_id, message="Time-off request submitted", status=201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/time-off/<int:request_id>/approve", methods=["POST"], endpoint="approve_time_off")
    @admin_required
    def approve_time_off(request_id: int):
        try:
            return ok(request=container.leave_service.approve(request_id).to_dict())
        except Exception as e:
            return error_response(e)

    @app.route("/api/time-off/<int:request_id>/reject", methods=["POST"], endpoint="reject_time_off")
    @admin_required
    def reject_time_off(request_id: int):
        try:
            return ok(request=container.leave_service.reject(request_id).to_dict())
        except Exception as e:
            return error_response(e)
