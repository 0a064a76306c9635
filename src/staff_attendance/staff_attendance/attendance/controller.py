from __future__ import annotations

import structlog
from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_limit
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container

logger = structlog.get_logger(__name__)


def _error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/punch", methods=["POST"], endpoint="api_punch")
    def api_punch():
        """Record one punch: {userId, type, reason?, manualPunch?, punchedBy?, customTime?, remotePunch?, selfieUrl?}"""
        data = request.get_json(silent=True) or {}
        if not data.get("userId") or not data.get("type"):
            return _error("userId and type are required", 400)

        try:
            ledger = service.record_punch(
                str(data["userId"]),
                data["type"],
                reason=data.get("reason"),
                manual_punch=_flag(data.get("manualPunch", False)),
                punched_by=data.get("punchedBy"),
                custom_time=data.get("customTime"),
                remote_punch=_flag(data.get("remotePunch", False)),
                selfie_url=data.get("selfieUrl"),
            )
        except AuthorizationError as e:
            return _error(str(e), 403)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("punch_failed", user_id=data.get("userId"), punch_type=data.get("type"))
            return _error("Internal server error", 500)

        return jsonify(ledger.to_dict()), 200

    @app.route("/api/attendance/today/<user_id>", methods=["GET"], endpoint="api_today")
    def api_today(user_id: str):
        ledger = service.get_today_attendance(user_id)
        return jsonify(ledger.to_dict() if ledger else None), 200

    @app.route("/api/attendance/history/<user_id>", methods=["GET"], endpoint="api_history")
    def api_history(user_id: str):
        try:
            limit = require_limit(request.args.get("limit"), default=DEFAULT_HISTORY_LIMIT)
        except ValidationError as e:
            return _error(str(e), 400)
        ledgers = service.get_attendance_history(user_id, limit)
        return jsonify([ledger.to_dict() for ledger in ledgers]), 200

    @app.route("/api/attendance/live/<user_id>", methods=["GET"], endpoint="api_live")
    def api_live(user_id: str):
        """Running totals for a UI clock; computed on every call, never stored."""
        return jsonify(service.get_live_totals(user_id).to_dict()), 200

    @app.route("/api/attendance/all", methods=["GET"], endpoint="api_all")
    def api_all():
        return jsonify([ledger.to_dict() for ledger in service.get_all_attendance()]), 200

    @app.route("/api/attendance/sessions/<user_id>", methods=["GET"], endpoint="api_sessions")
    def api_sessions(user_id: str):
        """IN -> OUT spans of one day (``?date=YYYY-MM-DD``, default today)."""
        try:
            work_date = parse_iso_date(request.args["date"]) if request.args.get("date") else now_local().date()
        except ValidationError as e:
            return _error(str(e), 400)
        return jsonify([s.to_dict() for s in service.get_sessions(user_id, work_date)]), 200
