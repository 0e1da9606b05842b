from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import date

import pytest

from src.guard_payroll.guard_payroll.attendance.model import AttendanceRecord
from src.guard_payroll.guard_payroll.clients.model import Client, ClientAssignment
from src.guard_payroll.guard_payroll.core.enums import AttendanceStatus, GatewayState
from src.guard_payroll.guard_payroll.core.exceptions import BackendError, ValidationError
from src.guard_payroll.guard_payroll.employees.model import Employee
from src.guard_payroll.guard_payroll.payroll.service import PayrollSheetService
from src.guard_payroll.guard_payroll.sheets.model import OverrideValues, SheetEntryOverride

TIMEOUT = 5


class FakeEmployeeRepo:
    def __init__(self, employees):
        self.employees = employees
        self.calls = 0

    def list_employees(self, *, limit):
        self.calls += 1
        return self.employees[:limit]


class FakeAttendanceRepo:
    def __init__(self, records):
        self.records = records

    def get_range(self, *, from_date, to_date):
        return [r for r in self.records if from_date <= r.date <= to_date]


class FakeClientRepo:
    def __init__(self, clients=(), assignments=()):
        self.clients = list(clients)
        self.assignments = list(assignments)

    def list_clients(self):
        return self.clients

    def list_active_assignments(self):
        return self.assignments


class FakeSheetRepo:
    def __init__(self):
        self.stored = {}
        self.fail = False
        self.fail_reads = False

    def list_entries(self, *, from_date, to_date):
        if self.fail_reads:
            raise BackendError("sheet-entries unavailable", status_code=503)
        return [
            SheetEntryOverride(db_id, from_date, to_date, values)
            for (db_id, f, t), values in self.stored.items()
            if (f, t) == (from_date, to_date)
        ]

    def upsert_entries(self, *, from_date, to_date, entries):
        if self.fail:
            raise BackendError("sheet-entries rejected", status_code=500)
        for e in entries:
            key = (e["employee_db_id"], from_date, to_date)
            fields = {k: v for k, v in e.items() if k != "employee_db_id"}
            self.stored[key] = replace(self.stored.get(key, OverrideValues()), **fields)


class FakePaymentRepo:
    def __init__(self):
        self.statuses = {}

    def list_for_month(self, *, month):
        return {emp: status for (m, emp), status in self.statuses.items() if m == month}

    def upsert(self, *, month, employee_id, status):
        self.statuses[(month, employee_id)] = status

    def bulk_upsert(self, *, month, employee_ids, status):
        for emp in employee_ids:
            self.statuses[(month, emp)] = status
        return len(employee_ids)


def days(code, start, count, status=AttendanceStatus.PRESENT, **kw):
    return [
        AttendanceRecord(employee_id=code, date=date.fromordinal(start.toordinal() + i), status=status, **kw)
        for i in range(count)
    ]


@pytest.fixture()
def repos():
    employees = FakeEmployeeRepo(
        [
            Employee(db_id=1, employee_id="G-1", full_name="Ali Khan", status="Active", total_salary=30000),
            Employee(db_id=2, employee_id="G-2", full_name="Bilal", status="Active", total_salary=31000),
        ]
    )
    # May 2025 period: 26 Apr .. 25 May (30 days). G-1: 5 pre, 17 cur, 1 leave, 2 OT days.
    records = (
        days("G-1", date(2025, 4, 26), 5)
        + days("G-1", date(2025, 5, 1), 15)
        + days("G-1", date(2025, 4, 21), 5)
        + [AttendanceRecord(employee_id="G-1", date=date(2025, 5, 20), status=AttendanceStatus.LEAVE)]
        + days("G-1", date(2025, 5, 16), 2, overtime_in="18:00", overtime_out="22:00")
        + days("G-2", date(2025, 3, 26), 31)
    )
    attendance = FakeAttendanceRepo(records)
    clients = FakeClientRepo(
        clients=[Client(client_id=1, name="Client A")],
        assignments=[ClientAssignment(employee_id="G-1", client_id=1, client_name="Client A", site_name="Site X")],
    )
    return employees, attendance, clients, FakeSheetRepo(), FakePaymentRepo()


@pytest.fixture()
def service(repos):
    svc = PayrollSheetService(*repos, executor=ThreadPoolExecutor(max_workers=2))
    svc.load(date(2025, 5, 10))
    yield svc
    svc.gateway.shutdown()


def line(svc, db_id):
    return svc.line_for(db_id)


def test_load_builds_sheet_for_reference_month(service):
    sheet = service.build_sheet()

    assert sheet.periods.current.from_date == date(2025, 4, 26)
    assert [l.employee_id for l in sheet.lines] == ["G-1", "G-2"]
    g1 = sheet.lines[0]
    assert (g1.pre_days, g1.cur_days, g1.leave_days) == (5, 17, 1)
    assert g1.ot_days_count == 2
    assert sheet.totals.employee_count == 2


def test_search_filters_lines_but_not_totals(service):
    sheet = service.build_sheet(search="bilal")

    assert [l.employee_id for l in sheet.lines] == ["G-2"]
    assert sheet.totals.employee_count == 2


def test_edit_recomputes_before_persist_completes(service):
    before = line(service, 1).net_salary

    future = service.apply_edit(1, "eobi", 500)

    assert line(service, 1).net_salary == before - 500
    future.result(timeout=TIMEOUT)
    assert service.gateway.state == GatewayState.CLEAN
    assert line(service, 1).eobi == 500


def test_failed_persist_reverts_to_server_state(service, repos):
    employees, _, _, sheets, _ = repos
    before = line(service, 1).net_salary
    loads_before = employees.calls
    sheets.fail = True

    future = service.apply_edit(1, "eobi", 500)

    assert isinstance(future.exception(timeout=TIMEOUT), BackendError)
    assert employees.calls == loads_before + 1
    assert service.gateway.state == GatewayState.CLEAN
    assert service.gateway.session_edits() == {}
    assert line(service, 1).eobi == 0
    assert line(service, 1).net_salary == before


def test_failed_reload_keeps_confirmed_overrides(service, repos):
    sheets = repos[3]
    sheets.stored[(2, date(2025, 4, 26), date(2025, 5, 25))] = OverrideValues(eobi=500.0)
    service.reload()
    service.apply_edit(1, "allow_other", 300).result(timeout=TIMEOUT)
    net_2 = line(service, 2).net_salary

    sheets.fail = True
    sheets.fail_reads = True
    future = service.apply_edit(1, "eobi", 250)

    assert isinstance(future.exception(timeout=TIMEOUT), BackendError)
    assert service.gateway.state == GatewayState.RECONCILING
    assert service.gateway.session_edits() == {}
    assert line(service, 2).eobi == 500
    assert line(service, 2).net_salary == net_2
    assert line(service, 1).allow_other == 300
    assert line(service, 1).eobi == 0


def test_persisted_override_survives_reload(service):
    service.apply_edit(1, "cur_days_override", 12).result(timeout=TIMEOUT)

    service.reload()

    assert line(service, 1).cur_days == 12


def test_unknown_field_or_employee_is_rejected(service):
    with pytest.raises(ValidationError):
        service.apply_edit(1, "net_salary", 1)
    with pytest.raises(ValidationError):
        service.apply_edit(99, "eobi", 1)


def test_nothing_loaded_is_a_validation_error(repos):
    svc = PayrollSheetService(*repos, executor=ThreadPoolExecutor(max_workers=1))

    with pytest.raises(ValidationError):
        svc.build_sheet()
    svc.gateway.shutdown()


def test_payment_status_updates(service):
    service.mark_paid("G-1")
    assert line(service, 1).payment_status == "paid"
    assert line(service, 2).payment_status == "unpaid"

    assert service.bulk_update_payment_status(["G-1", "G-2"], "unpaid") == 2
    assert line(service, 1).payment_status == "unpaid"

    with pytest.raises(ValidationError):
        service.set_payment_status("G-1", "maybe")


def test_comparison_includes_sites_from_both_periods(service):
    rows = {(r.client_name, r.site_name): r for r in service.comparison()}

    site = rows[("Client A", "Site X")]
    assert site.current_employees == 1
    assert site.prev_employees == 1
    assert ("Unassigned", "N/A") in rows


def test_ensure_loaded_reuses_same_month(service, repos):
    employees = repos[0]
    calls = employees.calls

    service.ensure_loaded(date(2025, 5, 25))
    assert employees.calls == calls

    service.ensure_loaded(date(2025, 6, 1))
    assert employees.calls == calls + 1
