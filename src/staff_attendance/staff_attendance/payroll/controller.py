from __future__ import annotations

from datetime import timedelta

import structlog
from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.exceptions import ValidationError
from ..container import Container
from .leave_deduction import daily_rate_from_users

logger = structlog.get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves/deduction", methods=["POST"], endpoint="api_leave_deduction")
    def api_leave_deduction():
        """Amount to deduct for an approved leave: {userId, date, leaveType, dailyRate?}.

        Without ``dailyRate`` the employee's base salary decides it.
        """
        data = request.get_json(silent=True) or {}
        try:
            user_id = require_non_empty(data.get("userId"), "userId")
            work_date = parse_iso_date(require_non_empty(data.get("date"), "date"))
            if data.get("dailyRate") is not None:
                rate = data["dailyRate"]
                daily_rate_fn = lambda _user_id: rate  # noqa: E731
            else:
                daily_rate_fn = daily_rate_from_users(container.users_repo)

            deduction = container.leave_bridge.on_leave_approved(
                user_id, work_date, data.get("leaveType"), daily_rate_fn
            )
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400

        return jsonify(deduction.to_dict()), 200

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="api_attendance_report")
    def api_attendance_report():
        try:
            today = now_local().date()
            end = parse_iso_date(request.args["end"]) if request.args.get("end") else today
            start = (
                parse_iso_date(request.args["start"])
                if request.args.get("start")
                else end - timedelta(days=DEFAULT_REPORT_DAYS - 1)
            )
            if start > end:
                raise ValidationError("start must not be after end")
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400

        report = container.report_service.build_attendance_report(
            start=start, end=end, user_id=request.args.get("userId") or None
        )
        return jsonify({"rows": report.rows, "summary": report.summary}), 200
