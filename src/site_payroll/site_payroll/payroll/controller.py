from __future__ import annotations

from flask import Flask, request

from ..common.api import (
    api_view,
    arg_date,
    arg_int,
    body_ids,
    body_int,
    fail,
    json_body,
    ok,
    required_arg_date,
    to_json,
)
from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_int
from ..core.enums import SalaryStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .calculator.standard_calculator import calculate_batch
from .export import output_summary_to_xlsx, salary_records_to_csv
from .model import OutputSummary


def _summary_to_dict(s: OutputSummary) -> dict:
    return to_json(
        {
            "worker_id": s.worker_id,
            "worker_name": s.worker_name,
            "worker_role": s.worker_role,
            "site_id": s.site_id,
            "site_name": s.site_name,
            "work_days_count": s.work_days_count,
            "total_labor_hours": s.total_labor_hours,
            "total_work_hours": s.total_work_hours,
            "total_overtime_hours": s.total_overtime_hours,
            "base_pay": s.base_pay,
            "overtime_pay": s.overtime_pay,
            "total_pay": s.total_pay,
            "first_work_date": s.first_work_date,
            "last_work_date": s.last_work_date,
            "work_dates": s.work_dates,
        }
    )


def register(app: Flask, container: Container) -> None:
    def _file_response(payload: bytes, *, mimetype: str, filename: str):
        return app.response_class(
            payload,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/payroll/calculate", methods=["POST"], endpoint="payroll_calculate")
    @api_view
    def payroll_calculate():
        """Batch calculator: ``{"entries": [{hours_worked, hourly_rate, overtime_rate?}]}``."""
        entries = json_body().get("entries")
        if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
            raise ValidationError("entries 목록이 필요합니다")
        breakdowns = calculate_batch(
            entries,
            threshold_hours=container.settings.standard_workday_hours,
            overtime_multiplier=container.settings.overtime_multiplier,
        )
        return ok([b.as_dict() for b in breakdowns])

    @app.route("/api/payroll/salaries/calculate", methods=["POST"], endpoint="payroll_calculate_salaries")
    @api_view
    def payroll_calculate_salaries():
        data = json_body()
        start = parse_iso_date(data.get("date_from"))
        end = parse_iso_date(data.get("date_to"))
        written = container.payroll_service.calculate_salaries(
            start=start,
            end=end,
            site_id=body_int(data, "site_id"),
            worker_id=body_int(data, "worker_id"),
        )
        return ok({"calculated_records": written}, message=f"{written}개 급여 계산이 완료되었습니다.")

    @app.route("/api/payroll/salaries", methods=["GET"], endpoint="payroll_salaries")
    @api_view
    def payroll_salaries():
        status_raw = request.args.get("status")
        try:
            status = SalaryStatus(status_raw) if status_raw else None
        except ValueError:
            raise ValidationError(f"status 값이 올바르지 않습니다: {status_raw!r}") from None

        records = container.payroll_service.list_salary_records(
            start=arg_date("date_from"),
            end=arg_date("date_to"),
            site_id=arg_int("site_id"),
            worker_id=arg_int("worker_id"),
            status=status,
        )
        if request.args.get("format") == "csv":
            return _file_response(salary_records_to_csv(records), mimetype="text/csv", filename="salary_records.csv")
        return ok(list(records))

    @app.route("/api/payroll/salaries/approve", methods=["POST"], endpoint="payroll_approve")
    @api_view
    def payroll_approve():
        moved = container.payroll_service.approve(body_ids(json_body()))
        return ok({"updated": moved}, message="급여가 승인되었습니다.")

    @app.route("/api/payroll/salaries/pay", methods=["POST"], endpoint="payroll_mark_paid")
    @api_view
    def payroll_mark_paid():
        moved = container.payroll_service.mark_paid(body_ids(json_body()))
        return ok({"updated": moved}, message="지급 처리되었습니다.")

    @app.route("/api/payroll/stats", methods=["GET"], endpoint="payroll_stats")
    @api_view
    def payroll_stats():
        stats = container.payroll_service.get_stats(
            start=arg_date("date_from"),
            end=arg_date("date_to"),
            site_id=arg_int("site_id"),
            worker_id=arg_int("worker_id"),
        )
        return ok(stats)

    @app.route("/api/payroll/output-summary", methods=["GET"], endpoint="payroll_output_summary")
    @api_view
    def payroll_output_summary():
        start = required_arg_date("date_from")
        end = required_arg_date("date_to")
        rows = container.payroll_service.get_output_summary(
            start=start,
            end=end,
            site_id=arg_int("site_id"),
            search=request.args.get("search"),
        )
        if request.args.get("format") == "xlsx":
            filename = f"output_summary_{start:%Y%m%d}_{end:%Y%m%d}.xlsx"
            return _file_response(
                output_summary_to_xlsx(rows),
                mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                filename=filename,
            )
        return ok([_summary_to_dict(s) for s in rows])

    @app.route("/api/payroll/workers/<int:worker_id>/calendar", methods=["GET"], endpoint="payroll_worker_calendar")
    @api_view
    def payroll_worker_calendar(worker_id: int):
        year = require_int(request.args.get("year"), "year")
        month = require_int(request.args.get("month"), "month")
        days = container.payroll_service.get_worker_calendar(worker_id=worker_id, year=year, month=month)
        return ok(days)

    @app.route("/api/payroll/workers/<int:worker_id>/manpower", methods=["GET"], endpoint="payroll_worker_manpower")
    @api_view
    def payroll_worker_manpower(worker_id: int):
        start = required_arg_date("date_from")
        end = required_arg_date("date_to")
        total = container.payroll_service.get_worker_manpower(worker_id=worker_id, start=start, end=end)
        pay = container.payroll_service.aggregate_worker_pay(worker_id=worker_id, start=start, end=end)
        return ok({"manpower": total, "pay": pay.as_dict()})

    @app.route("/api/payroll/rules", methods=["GET"], endpoint="payroll_rules")
    @api_view
    def payroll_rules():
        active_only = request.args.get("active_only", "0") in {"1", "true", "yes"}
        return ok(list(container.rule_service.list_rules(active_only=active_only)))

    @app.route("/api/payroll/rules", methods=["POST"], endpoint="payroll_upsert_rule")
    @api_view
    def payroll_upsert_rule():
        data = json_body()
        rule_id = container.rule_service.upsert_rule(
            rule_id=body_int(data, "rule_id"),
            rule_name=str(data.get("rule_name") or ""),
            rule_type=data.get("rule_type"),
            base_amount=data.get("base_amount"),
            multiplier=data.get("multiplier"),
            site_id=body_int(data, "site_id"),
            role=data.get("role"),
            is_active=bool(data.get("is_active", True)),
        )
        return ok({"rule_id": rule_id}, message="급여 규칙이 저장되었습니다.")

    @app.route("/api/payroll/rules/delete", methods=["POST"], endpoint="payroll_delete_rules")
    @api_view
    def payroll_delete_rules():
        deleted = container.rule_service.delete_rules(body_ids(json_body(), "rule_ids"))
        if not deleted:
            return fail("삭제할 규칙을 찾을 수 없습니다", 404)
        return ok({"deleted": deleted})
