from __future__ import annotations

import logging
from typing import Optional

from ...attendance.model import AttendanceSummary
from ...clients.model import ClientAssignment
from ...common.money import round_amount
from ...core.constants import UNASSIGNED_CLIENT_NAME, UNASSIGNED_SITE_NAME
from ...employees.model import Employee
from ...sheets.model import ResolvedOverrides
from ..model import PayrollLine
from .base import PayrollCalculator

logger = logging.getLogger(__name__)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: paid days at salary / working days, plus flat per-OT-day pay.

    net = paid_days * per_day + ot_days * ot_rate + allow_other
          - fines - eobi - fine_adv_extra

    Everything is recomputed from the resolved inputs on every call and rounded only
    when exposed on the line.
    """

    def compute_line(
        self,
        *,
        employee: Employee,
        summary: AttendanceSummary,
        resolved: ResolvedOverrides,
        working_days: int,
        assignment: Optional[ClientAssignment] = None,
        payment_status: str = "unpaid",
    ) -> PayrollLine:
        salary = employee.salary
        total_paid_days = resolved.pre_days + resolved.cur_days + summary.leave_days
        overtime_pay = summary.ot_days_count * resolved.ot_rate

        if working_days > 0:
            per_day = salary / working_days
            gross_base = total_paid_days * per_day
            per_day_salary = round_amount(per_day)
            gross_salary = round_amount(gross_base + overtime_pay + resolved.allow_other)
            net_salary = round_amount(
                gross_base
                + overtime_pay
                + resolved.allow_other
                - summary.total_fines
                - resolved.eobi
                - resolved.fine_adv_extra
            )
        else:
            logger.warning(
                "Pay period has %s working days; pay for %s is unavailable",
                working_days,
                employee.employee_id,
            )
            per_day_salary = gross_salary = net_salary = None

        return PayrollLine(
            employee_db_id=employee.db_id,
            employee_id=employee.employee_id,
            full_name=employee.full_name,
            fss_no=employee.fss_no,
            department=employee.department,
            designation=employee.designation,
            account_no=employee.account_no,
            mobile_no=employee.mobile_no,
            status=employee.status,
            client_id=assignment.client_id if assignment else None,
            client_name=assignment.client_name if assignment else UNASSIGNED_CLIENT_NAME,
            site_name=assignment.site_name if assignment else UNASSIGNED_SITE_NAME,
            present_days=summary.present_days,
            late_days=summary.late_days,
            absent_days=summary.absent_days,
            leave_days=summary.leave_days,
            pre_days=resolved.pre_days,
            cur_days=resolved.cur_days,
            total_paid_days=total_paid_days,
            total_overtime_minutes=summary.total_overtime_minutes,
            ot_days_count=summary.ot_days_count,
            total_fines=summary.total_fines,
            total_salary=salary,
            per_day_salary=per_day_salary,
            ot_rate=resolved.ot_rate,
            overtime_pay=round_amount(overtime_pay) or 0,
            allow_other=resolved.allow_other,
            eobi=resolved.eobi,
            fine_adv_extra=resolved.fine_adv_extra,
            gross_salary=gross_salary,
            deductions=round_amount(summary.total_fines) or 0,
            net_salary=net_salary,
            bank_cash=resolved.bank_cash,
            remarks=resolved.remarks,
            payment_status=payment_status,
        )
