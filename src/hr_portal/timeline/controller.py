from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import today_local
from ..common.http import error_response, fail, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timeline", methods=["GET"], endpoint="leave_timeline")
    def leave_timeline():
        today = today_local()
        try:
            year = int(request.args.get("year", today.year))
            month = int(request.args.get("month", today.month))
        except ValueError:
            return fail("year and month must be integers", 400)

        try:
            grid = container.timeline_service.month_grid(year=year, month=month, today=today)
            return ok(grid.to_dict())
        except Exception as e:
            return error_response(e)
