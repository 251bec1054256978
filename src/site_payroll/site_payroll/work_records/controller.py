from __future__ import annotations

from flask import Flask

from ..common.api import api_view, arg_int, body_int, json_body, ok, required_arg_date
from ..common.datetime_utils import parse_iso_date
from ..container import Container
from .validation import describe_labor_hours


def register(app: Flask, container: Container) -> None:
    @app.route("/api/work-records", methods=["POST"], endpoint="work_records_submit")
    @api_view
    def work_records_submit():
        data = json_body()
        record = container.work_record_service.submit(
            worker_id=body_int(data, "worker_id", required=True),
            site_id=body_int(data, "site_id", required=True),
            work_date=parse_iso_date(data.get("work_date")),
            labor_hours=data.get("labor_hours"),
        )
        info = describe_labor_hours(record.labor_hours)
        return ok({"record": record, "labor": info}, message=info.description, status=201)

    @app.route("/api/work-records", methods=["GET"], endpoint="work_records_list")
    @api_view
    def work_records_list():
        records = container.work_record_service.list_records(
            start=required_arg_date("date_from"),
            end=required_arg_date("date_to"),
            site_id=arg_int("site_id"),
            worker_id=arg_int("worker_id"),
        )
        return ok(list(records))
