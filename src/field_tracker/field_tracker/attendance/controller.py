from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import isoformat_or_none
from ..common.http import parse_json_body, success
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_SUMMARY_DAYS
from ..geo.verifier import GeoPoint
from .model import AttendanceResult, AttendanceSession, DailySummary
from .schemas import CheckinRequest, CheckoutRequest


def session_to_dict(s: AttendanceSession) -> dict:
    return {
        "id": s.session_id,
        "employee_id": s.employee_id,
        "attendance_date": s.attendance_date.isoformat(),
        "check_in_time": isoformat_or_none(s.check_in_time),
        "check_out_time": isoformat_or_none(s.check_out_time),
        "check_in_latitude": s.check_in_latitude,
        "check_in_longitude": s.check_in_longitude,
        "check_out_latitude": s.check_out_latitude,
        "check_out_longitude": s.check_out_longitude,
        "check_in_location_code": s.check_in_location_code,
        "check_out_location_code": s.check_out_location_code,
        "location_verified": s.location_verified,
        "total_hours": s.total_hours,
        "status": s.status.value,
    }


def summary_to_dict(d: DailySummary) -> dict:
    return {
        "attendance_date": d.attendance_date.isoformat(),
        "total_sessions": d.total_sessions,
        "completed_sessions": d.completed_sessions,
        "ongoing_sessions": d.ongoing_sessions,
        "total_hours_worked": d.total_hours_worked,
        "first_check_in": isoformat_or_none(d.first_check_in),
        "last_check_out": isoformat_or_none(d.last_check_out),
    }


def result_to_dict(r: AttendanceResult) -> dict:
    return {
        "session": session_to_dict(r.session),
        "daily_summary": summary_to_dict(r.daily_summary),
        "distance_meters": round(r.distance_meters, 1) if r.distance_meters is not None else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="api_checkin")
    def api_checkin():
        body = parse_json_body(CheckinRequest)
        result = container.attendance_service.check_in(
            body.employee_id,
            GeoPoint(latitude=body.latitude, longitude=body.longitude),
            location_id=body.location_id,
            location_code=body.location_code,
            location_type=body.location_type,
        )
        return success(result_to_dict(result), message="Check-in recorded successfully")

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="api_checkout")
    def api_checkout():
        body = parse_json_body(CheckoutRequest)
        result = container.attendance_service.check_out(
            body.employee_id,
            GeoPoint(latitude=body.latitude, longitude=body.longitude),
            location_code=body.location_code,
            location_type=body.location_type,
        )
        return success(result_to_dict(result), message="Check-out recorded successfully")

    @app.route("/api/attendance/status/<int:employee_id>", methods=["GET"], endpoint="api_attendance_status")
    def api_attendance_status(employee_id: int):
        view = container.attendance_service.status(employee_id)
        return success(
            {
                "is_checked_in": view.is_checked_in,
                "current_session": session_to_dict(view.current_session) if view.current_session else None,
                "today_sessions": [session_to_dict(s) for s in view.today_sessions],
                "daily_summary": summary_to_dict(view.daily_summary),
            }
        )

    @app.route("/api/attendance/summary/<int:employee_id>", methods=["GET"], endpoint="api_attendance_summary")
    def api_attendance_summary(employee_id: int):
        days = request.args.get("days", DEFAULT_SUMMARY_DAYS)
        summaries = container.attendance_service.summary(employee_id, days)
        return success(
            {
                "employee_id": employee_id,
                "days": int(days),
                "summaries": [summary_to_dict(d) for d in summaries],
            }
        )

    @app.route("/api/attendance/history/<int:employee_id>", methods=["GET"], endpoint="api_attendance_history")
    def api_attendance_history(employee_id: int):
        limit = request.args.get("limit", DEFAULT_HISTORY_LIMIT)
        records = container.attendance_service.history(employee_id, limit)
        return success(
            {
                "employee_id": employee_id,
                "records": [session_to_dict(s) for s in records],
            }
        )
