from __future__ import annotations

import hmac
from functools import wraps

from flask import Flask, current_app, jsonify, request, session

from ..container import Container
from ..core.exceptions import EmployeeNotFound
from ..errors import error_response
from .registration import password_strength, strength_label


def _payload() -> dict:
    return request.get_json(silent=True) or request.form.to_dict()


def register(app: Flask, container: Container) -> None:
    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            expected = current_app.config.get("ADMIN_API_KEY") or ""
            provided = request.headers.get("X-Admin-Key", "")
            if not expected or not hmac.compare_digest(provided.encode(), expected.encode()):
                return error_response("Invalid admin key", 403)
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/employees/login", methods=["POST"], endpoint="employee_login")
    def employee_login():
        data = _payload()
        employee = container.credential_verifier.authenticate(
            str(data.get("employee_number", "")),
            str(data.get("password", "")),
        )
        session["employee_id"] = employee.id
        session["name"] = employee.name
        return jsonify({"employee": employee.to_public_dict(), "message": f"Welcome {employee.name}"})

    @app.route("/api/employees/logout", methods=["POST"], endpoint="employee_logout")
    def employee_logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/register/check", methods=["POST"], endpoint="register_check")
    def register_check():
        data = _payload()
        workflow = container.new_registration()
        workflow.start()
        state = workflow.submit_step1(str(data.get("employee_number", "")), str(data.get("name", "")))
        return jsonify({"state": state.value, "employee_number": workflow.employee_number})

    @app.route("/api/register/strength", methods=["POST"], endpoint="register_strength")
    def register_strength():
        score = password_strength(str(_payload().get("password", "")))
        return jsonify({"score": score, "label": strength_label(score)})

    @app.route("/api/register", methods=["POST"], endpoint="register_employee")
    def register_employee():
        data = _payload()
        workflow = container.new_registration()
        workflow.start()
        workflow.submit_step1(str(data.get("employee_number", "")), str(data.get("name", "")))
        score = workflow.submit_step2(str(data.get("password", "")), str(data.get("confirm_password", "")))
        number = workflow.submit()
        return (
            jsonify(
                {
                    "employee_number": number,
                    "strength": score,
                    "message": "Registration complete, you can now log in",
                }
            ),
            201,
        )

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_list_employees")
    @admin_required
    def admin_list_employees():
        summary = container.employee_service.credential_summary()
        return jsonify(
            {
                "employees": [e.to_public_dict() for e in container.employee_service.list_employees()],
                "summary": {
                    "total": summary.total,
                    "with_credential": summary.with_credential,
                    "without_credential": summary.without_credential,
                },
            }
        )

    @app.route("/api/admin/employees", methods=["POST"], endpoint="admin_add_employee")
    @admin_required
    def admin_add_employee():
        data = _payload()
        employee = container.employee_service.add_employee(
            employee_number=str(data.get("employee_number", "")),
            name=str(data.get("name", "")),
        )
        return jsonify({"employee": employee.to_public_dict()}), 201

    @app.route("/api/admin/employees/<employee_id>", methods=["PATCH"], endpoint="admin_rename_employee")
    @admin_required
    def admin_rename_employee(employee_id: str):
        try:
            employee = container.employee_service.rename(employee_id, str(_payload().get("name", "")))
        except EmployeeNotFound as e:
            return error_response(str(e), 404)
        return jsonify({"employee": employee.to_public_dict()})

    @app.route("/api/admin/employees/<employee_id>/password", methods=["POST"], endpoint="admin_reset_password")
    @admin_required
    def admin_reset_password(employee_id: str):
        try:
            container.employee_service.reset_password(employee_id, str(_payload().get("password", "")))
        except EmployeeNotFound as e:
            return error_response(str(e), 404)
        return jsonify({"message": "Password changed"})

    @app.route("/api/admin/employees/<employee_id>", methods=["DELETE"], endpoint="admin_delete_employee")
    @admin_required
    def admin_delete_employee(employee_id: str):
        try:
            container.employee_service.remove(employee_id)
        except EmployeeNotFound as e:
            return error_response(str(e), 404)
        return "", 204
