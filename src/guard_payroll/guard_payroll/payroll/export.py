from __future__ import annotations

import csv
from typing import IO, Iterable

from .model import PayrollLine

SHEET_COLUMNS = [
    "fss_no",
    "employee_id",
    "full_name",
    "client_name",
    "site_name",
    "total_salary",
    "per_day_salary",
    "pre_days",
    "cur_days",
    "leave_days",
    "total_paid_days",
    "ot_days_count",
    "ot_rate",
    "overtime_pay",
    "allow_other",
    "gross_salary",
    "eobi",
    "total_fines",
    "fine_adv_extra",
    "net_salary",
    "bank_cash",
    "remarks",
    "payment_status",
]


def write_sheet_csv(lines: Iterable[PayrollLine], out: IO[str]) -> int:
    """Write pay lines as CSV; unavailable amounts are left blank. Returns rows written."""
    writer = csv.DictWriter(out, fieldnames=SHEET_COLUMNS, extrasaction="ignore")
    writer.writeheader()
    count = 0
    for line in lines:
        row = line.to_dict()
        writer.writerow({k: "" if row[k] is None else row[k] for k in SHEET_COLUMNS})
        count += 1
    return count
