from __future__ import annotations

from flask import Flask, request

from ..common.api import api_view, arg_date, arg_int, body_int, json_body, ok
from ..common.datetime_utils import parse_iso_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _filters() -> dict:
        return {
            "allocation_type": request.args.get("allocation_type") or None,
            "resource_id": arg_int("resource_id"),
            "site_id": arg_int("site_id"),
            "date_from": arg_date("date_from"),
            "date_to": arg_date("date_to"),
        }

    @app.route("/api/equipment/allocations", methods=["POST"], endpoint="allocations_create")
    @api_view
    def allocations_create():
        data = json_body()
        allocation = container.allocation_service.create_allocation(
            allocation_type=data.get("allocation_type"),
            resource_id=body_int(data, "resource_id", required=True),
            site_id=body_int(data, "site_id", required=True),
            allocated_date=parse_iso_date(data.get("allocated_date")),
            hours_worked=data.get("hours_worked"),
            hourly_rate=data.get("hourly_rate"),
            overtime_rate=data.get("overtime_rate"),
            task_description=data.get("task_description"),
            notes=data.get("notes"),
        )
        return ok(allocation, status=201)

    @app.route("/api/equipment/allocations", methods=["GET"], endpoint="allocations_list")
    @api_view
    def allocations_list():
        return ok(list(container.allocation_service.list_allocations(**_filters())))

    @app.route("/api/equipment/allocations/cost", methods=["GET"], endpoint="allocations_cost")
    @api_view
    def allocations_cost():
        return ok(container.allocation_service.get_cost_summary(**_filters()).as_dict())
