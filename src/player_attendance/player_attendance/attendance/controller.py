from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_timestamp, now_ms, require_iso_date
from ..common.http import admin_required, json_body
from ..container import Container
from .export import render_attendance_csv
from .model import AttendanceRecord, AttendanceUpdate


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service
    offset = attendance.utc_offset_hours

    def _with_formatted(r: AttendanceRecord) -> dict:
        data = r.to_dict()
        data["timeInFormatted"] = format_timestamp(r.time_in, offset)
        data["timeOutFormatted"] = format_timestamp(r.time_out, offset)
        return data

    def _csv_response(records, *, work_date: str):
        """CSV attachment, BOM-prefixed so spreadsheet apps pick up UTF-8."""
        text = render_attendance_csv(records, now_ms=now_ms(), utc_offset_hours=offset)
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=attendance_{work_date}.csv"},
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today():
        return jsonify([_with_formatted(r) for r in attendance.get_today_attendance()])

    @app.route("/api/attendance/by-date", methods=["GET"], endpoint="attendance_by_date")
    def attendance_by_date():
        records = attendance.get_attendance_by_date(request.args.get("date"))
        return jsonify([_with_formatted(r) for r in records])

    @app.route("/api/attendance/range", methods=["GET"], endpoint="attendance_range")
    def attendance_range():
        records = attendance.get_attendance_by_date_range(request.args.get("start"), request.args.get("end"))
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/dates", methods=["GET"], endpoint="attendance_dates")
    def attendance_dates():
        return jsonify(list(attendance.list_attendance_dates()))

    @app.route("/api/attendance/player/today", methods=["GET"], endpoint="player_attendance_today")
    def player_attendance_today():
        record = attendance.get_player_attendance_today(request.args.get("playerId"))
        if record is None:
            return jsonify(None)
        return jsonify(_with_formatted(record))

    @app.route("/api/attendance/time-in", methods=["POST"], endpoint="time_in")
    def time_in():
        data = json_body()
        record = attendance.time_in(data.get("playerId"), data.get("playerName"))
        return jsonify({"ok": True, "id": record.id, "record": _with_formatted(record)}), 201

    @app.route("/api/attendance/time-out", methods=["POST"], endpoint="time_out")
    def time_out():
        data = json_body()
        record = attendance.time_out(data.get("playerId"))
        return jsonify({"ok": True, "id": record.id, "record": _with_formatted(record)})

    @app.route("/api/attendance", methods=["PATCH"], endpoint="patch_attendance")
    @admin_required
    def patch_attendance():
        data = json_body()
        update = AttendanceUpdate.from_payload(data)
        record = attendance.update_attendance(data.get("playerId"), data.get("date"), update)
        return jsonify({"ok": True, "record": record.to_dict()})

    @app.route("/api/attendance/cycle-status", methods=["POST"], endpoint="cycle_attendance_status")
    @admin_required
    def cycle_attendance_status():
        data = json_body()
        record = attendance.cycle_status(data.get("playerId"), data.get("date"))
        return jsonify({"ok": True, "record": record.to_dict()})

    @app.route("/api/attendance", methods=["DELETE"], endpoint="delete_attendance")
    @admin_required
    def delete_attendance():
        attendance.delete_attendance(request.args.get("playerId"), request.args.get("date"))
        return jsonify({"ok": True})

    @app.route("/api/attendance/by-date", methods=["DELETE"], endpoint="delete_attendance_by_date")
    @admin_required
    def delete_attendance_by_date():
        deleted = attendance.delete_all_attendance_by_date(request.args.get("date"))
        return jsonify({"ok": True, "deleted": deleted})

    @app.route("/api/attendance/export/today", methods=["GET"], endpoint="export_today")
    def export_today():
        today = attendance.today()
        return _csv_response(attendance.get_attendance_by_date(today), work_date=today)

    @app.route("/api/attendance/export/by-date", methods=["GET"], endpoint="export_by_date")
    def export_by_date():
        work_date = require_iso_date(request.args.get("date"))
        return _csv_response(attendance.get_attendance_by_date(work_date), work_date=work_date)
