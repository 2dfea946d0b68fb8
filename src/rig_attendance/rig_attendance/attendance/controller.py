from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from .day_map import day_map_to_dict
from .model import AttendanceRecord, ShiftAttendanceRecord


def attendance_to_json(record: AttendanceRecord) -> dict:
    return {
        "employee_id": record.employee_id,
        "month": record.month,
        "year": record.year,
        "attendance_data": day_map_to_dict(record.days),
        "total_on_duty": record.total_on_duty,
        "ot_days": record.ot_days,
        "remarks": record.remarks,
    }


def shift_to_json(record: ShiftAttendanceRecord) -> dict:
    return {
        "employee_id": record.employee_id,
        "month": record.month,
        "year": record.year,
        "shift_data": day_map_to_dict(record.days),
        "total_on_duty": record.total_on_duty,
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/<workspace_id>/<month>/<year>", methods=["GET"], endpoint="attendance_month")
    def attendance_month(workspace_id: str, month: str, year: str):
        container.workspace_service.require(workspace_id)
        records = service.list_month(workspace_id, month, year)
        return jsonify([attendance_to_json(r) for r in records])

    @app.route("/api/attendance/day", methods=["POST"], endpoint="attendance_day")
    def attendance_day():
        data = json_body()
        record = service.record_attendance_day(
            employee_id=data.get("employee_id"),
            month=data.get("month"),
            year=data.get("year"),
            day=data.get("day"),
            status=data.get("status"),
            shift=data.get("shift"),
        )
        return jsonify(attendance_to_json(record))

    @app.route("/api/attendance/range", methods=["POST"], endpoint="attendance_range")
    def attendance_range():
        data = json_body()
        record = service.record_attendance_range(
            employee_id=data.get("employee_id"),
            month=data.get("month"),
            year=data.get("year"),
            start_day=data.get("start_day"),
            end_day=data.get("end_day"),
            status=data.get("status"),
            shift=data.get("shift"),
        )
        return jsonify(attendance_to_json(record))

    @app.route("/api/attendance/remarks", methods=["PUT"], endpoint="attendance_remarks")
    def attendance_remarks():
        data = json_body()
        record = service.update_remarks(
            employee_id=data.get("employee_id"),
            month=data.get("month"),
            year=data.get("year"),
            remarks=data.get("remarks"),
        )
        return jsonify(attendance_to_json(record))

    @app.route("/api/shift-attendance/<workspace_id>/<month>/<year>", methods=["GET"], endpoint="shift_month")
    def shift_month(workspace_id: str, month: str, year: str):
        container.workspace_service.require(workspace_id)
        records = service.list_shift_month(workspace_id, month, year)
        return jsonify([shift_to_json(r) for r in records])

    @app.route("/api/shift-attendance/day", methods=["POST"], endpoint="shift_day")
    def shift_day():
        data = json_body()
        record = service.record_shift_day(
            employee_id=data.get("employee_id"),
            month=data.get("month"),
            year=data.get("year"),
            day=data.get("day"),
            shift=data.get("shift"),
        )
        return jsonify(shift_to_json(record))

    @app.route("/api/shift-attendance/range", methods=["POST"], endpoint="shift_range")
    def shift_range():
        data = json_body()
        record = service.record_shift_range(
            employee_id=data.get("employee_id"),
            month=data.get("month"),
            year=data.get("year"),
            start_day=data.get("start_day"),
            end_day=data.get("end_day"),
            shift=data.get("shift"),
        )
        return jsonify(shift_to_json(record))
