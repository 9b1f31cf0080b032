from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.exceptions import EmployeeNotFound
from ..errors import error_response


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "employee_id" not in session:
                return error_response("Please log in to continue", 401)
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_submit")
    @login_required
    def attendance_submit():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            row = container.attendance_service.submit(session["employee_id"], str(data.get("status", "")))
        except EmployeeNotFound as e:
            session.clear()
            return error_response(str(e), 401)
        return jsonify({"today": row, "message": f"{row['label']} recorded"})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        return jsonify({"today": container.attendance_service.get_today_ui(session["employee_id"])})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        limit = request.args.get("limit")
        rows = container.attendance_service.get_history_ui(session["employee_id"], limit=limit)
        return jsonify({"history": rows})
