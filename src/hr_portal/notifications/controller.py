from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, json_body, make_admin_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(lambda: container.admin_api_key)

    @app.route("/api/notifications/run", methods=["POST"], endpoint="run_notifications")
    @admin_required
    def run_notifications():
        try:
            report = container.notification_service.run()
            return jsonify(report.to_dict()), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/notifications/test-email", methods=["POST"], endpoint="send_test_email")
    @admin_required
    def send_test_email():
        try:
            data = json_body()
            sent_to = container.notification_service.send_test_email(
                data.get("toEmail"),
                subject=data.get("subject"),
                message=data.get("message"),
            )
            return ok(toEmail=sent_to)
        except Exception as e:
            return error_response(e)
