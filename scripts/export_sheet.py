"""Export one month's payroll sheet to CSV (service layer, no Flask)."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from src.guard_payroll.guard_payroll.common.datetime_utils import format_month, parse_month
from src.guard_payroll.guard_payroll.common.logging_utils import configure_logging
from src.guard_payroll.guard_payroll.config import load_settings
from src.guard_payroll.guard_payroll.container import build_container
from src.guard_payroll.guard_payroll.payroll.export import write_sheet_csv


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export a payroll sheet to CSV.")
    parser.add_argument("--month", help="Reference month YYYY-MM (period 26th of previous month to 25th).")
    parser.add_argument("--out", default=None, help="Output CSV path (default exports/payroll_<month>.csv).")
    parser.add_argument("--search", default="", help="Optional name / employee id / FSS filter.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    load_dotenv(override=False)
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        backend_config=settings.BACKEND_CONFIG,
        default_ot_rate=settings.DEFAULT_OT_RATE,
        employee_limit=settings.EMPLOYEE_FETCH_LIMIT,
    )
    service = container.payroll_sheet_service
    month = parse_month(args.month) if args.month else date.today()
    periods = service.load(month)
    sheet = service.build_sheet(search=args.search)

    out_file = Path(args.out) if args.out else REPO_ROOT / "exports" / f"payroll_{format_month(periods.reference_month)}.csv"
    out_file.parent.mkdir(parents=True, exist_ok=True)
    with out_file.open("w", newline="", encoding="utf-8") as f:
        rows = write_sheet_csv(sheet.lines, f)

    print(f"OK: {rows} lines, net {sheet.totals.total_net} -> {out_file}")
    if sheet.failed_employee_ids:
        print(f"WARNING: could not compute {', '.join(sheet.failed_employee_ids)}")
    service.gateway.shutdown()
    container.conn.close()


if __name__ == "__main__":
    main()
