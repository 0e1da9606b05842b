from __future__ import annotations

import logging
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import asdict
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date, format_month, now_local, parse_month
from ..common.validators import require_non_empty
from ..container import Container
from ..core.exceptions import BackendError, ValidationError
from ..periods.model import PayPeriod

logger = logging.getLogger(__name__)

EDIT_WAIT_SECONDS = 30


def _period_json(period: PayPeriod) -> dict:
    return {
        "from_date": format_iso_date(period.from_date),
        "to_date": format_iso_date(period.to_date),
        "working_days": period.working_days,
    }


def register(app: Flask, container: Container) -> None:
    service = container.payroll_sheet_service

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"error": str(e)}), 400
            except BackendError as e:
                logger.warning("Backend call failed: %s", e)
                return jsonify({"error": "Backend request failed", "detail": str(e)}), 502

        return wrapper

    def requested_month():
        raw = request.args.get("month", "")
        return parse_month(raw) if raw else now_local().date()

    def json_body() -> dict:
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("Expected a JSON object body")
        return body

    @app.route("/payroll/sheet", methods=["GET"], endpoint="payroll_sheet")
    @json_errors
    def payroll_sheet():
        service.ensure_loaded(requested_month())
        sheet = service.build_sheet(search=request.args.get("q", ""))
        return jsonify(
            {
                "month": format_month(sheet.periods.reference_month),
                "current_period": _period_json(sheet.periods.current),
                "previous_period": _period_json(sheet.periods.previous),
                "totals": asdict(sheet.totals),
                "lines": [line.to_dict() for line in sheet.lines],
                "failed_employee_ids": list(sheet.failed_employee_ids),
                "sync_state": service.gateway.state.value,
            }
        )

    @app.route("/payroll/reload", methods=["POST"], endpoint="payroll_reload")
    @json_errors
    def payroll_reload():
        periods = service.load(requested_month())
        return jsonify({"month": format_month(periods.reference_month), "sync_state": service.gateway.state.value})

    @app.route("/payroll/sheet-entries", methods=["PUT"], endpoint="payroll_edit_entry")
    @json_errors
    def payroll_edit_entry():
        body = json_body()
        if "employee_db_id" not in body or "field" not in body:
            raise ValidationError("employee_db_id and field are required")
        try:
            employee_db_id = int(body["employee_db_id"])
        except (TypeError, ValueError):
            raise ValidationError("employee_db_id must be an integer")

        future = service.apply_edit(employee_db_id, body["field"], body.get("value"))
        line = service.line_for(employee_db_id)

        if request.args.get("wait") in {"1", "true", "yes"}:
            # Surfaces BackendError (reload already done by the gateway) as a 502.
            try:
                future.result(timeout=EDIT_WAIT_SECONDS)
            except FutureTimeoutError:
                logger.warning("Sheet entry for employee %s still saving after %ss", employee_db_id, EDIT_WAIT_SECONDS)
                return jsonify({"error": "Saving the edit timed out", "sync_state": service.gateway.state.value}), 504
            except BackendError:
                raise
            except Exception:
                logger.exception("Saving sheet entry for employee %s failed", employee_db_id)
                return jsonify({"error": "Saving the edit failed", "sync_state": service.gateway.state.value}), 502
            line = service.line_for(employee_db_id)

        return jsonify(
            {
                "line": line.to_dict() if line else None,
                "sync_state": service.gateway.state.value,
            }
        )

    @app.route("/payroll/client-summary", methods=["GET"], endpoint="payroll_client_summary")
    @json_errors
    def payroll_client_summary():
        service.ensure_loaded(requested_month())
        return jsonify({"clients": [asdict(c) for c in service.client_summary()]})

    @app.route("/payroll/comparison", methods=["GET"], endpoint="payroll_comparison")
    @json_errors
    def payroll_comparison():
        service.ensure_loaded(requested_month())
        rows = []
        for row in service.comparison():
            data = asdict(row)
            data["difference"] = row.difference
            rows.append(data)
        return jsonify({"rows": rows})

    @app.route("/payroll/payment-status", methods=["PUT"], endpoint="payroll_payment_status")
    @json_errors
    def payroll_payment_status():
        body = json_body()
        employee_id = require_non_empty(body.get("employee_id"), "employee_id")
        service.set_payment_status(employee_id, body.get("status", "paid"))
        return jsonify({"employee_id": employee_id, "status": body.get("status", "paid")})

    @app.route("/payroll/payment-status/bulk", methods=["PUT"], endpoint="payroll_payment_status_bulk")
    @json_errors
    def payroll_payment_status_bulk():
        body = json_body()
        employee_ids = body.get("employee_ids") or []
        if not isinstance(employee_ids, list):
            raise ValidationError("employee_ids must be a list")
        updated = service.bulk_update_payment_status(employee_ids, body.get("status", "paid"))
        return jsonify({"updated": updated})
