from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_user, login_required
from ..container import Container
from .service import parse_filters


def register(app: Flask, container: Container) -> None:
    def _with_pay(rows) -> list[dict]:
        return container.payroll_report_service.summarize(rows).rows

    @app.route("/api/timesheets", methods=["GET"], endpoint="list_timesheets")
    @login_required
    def list_timesheets():
        rows = container.timesheet_service.list_timesheets(
            current_user=current_user(),
            filters=parse_filters(request.args),
        )
        return jsonify(_with_pay(rows))

    @app.route("/api/timesheets/user/<int:user_id>", methods=["GET"], endpoint="user_timesheets")
    @login_required
    def user_timesheets(user_id: int):
        rows = container.timesheet_service.list_for_user(current_user=current_user(), user_id=user_id)
        return jsonify(_with_pay(rows))

    @app.route("/api/timesheets/<int:timesheet_id>", methods=["GET"], endpoint="get_timesheet")
    @login_required
    def get_timesheet(timesheet_id: int):
        row = container.timesheet_service.get_timesheet(current_user=current_user(), timesheet_id=timesheet_id)
        return jsonify(_with_pay([row])[0])

    @app.route("/api/timesheets", methods=["POST"], endpoint="create_timesheet")
    @login_required
    def create_timesheet():
        row = container.timesheet_service.create_timesheet(
            current_user=current_user(),
            payload=request.get_json(silent=True) or {},
        )
        return jsonify(_with_pay([row])[0]), 201

    @app.route("/api/timesheets/<int:timesheet_id>", methods=["PUT"], endpoint="update_timesheet")
    @login_required
    def update_timesheet(timesheet_id: int):
        row = container.timesheet_service.update_timesheet(
            current_user=current_user(),
            timesheet_id=timesheet_id,
            payload=request.get_json(silent=True) or {},
        )
        return jsonify(_with_pay([row])[0])

    @app.route("/api/timesheets/<int:timesheet_id>", methods=["DELETE"], endpoint="delete_timesheet")
    @login_required
    def delete_timesheet(timesheet_id: int):
        container.timesheet_service.delete_timesheet(current_user=current_user(), timesheet_id=timesheet_id)
        return jsonify({"message": "Timesheet deleted successfully"})

    @app.route("/api/timesheets/export", methods=["GET"], endpoint="export_timesheets")
    @admin_required
    def export_timesheets():
        csv_text = container.timesheet_service.export_csv(
            current_role=current_user().role,
            filters=parse_filters(request.args),
        )
        filename = f"timesheets_{date.today().strftime('%Y%m%d')}.csv"
        return app.response_class(
            csv_text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
