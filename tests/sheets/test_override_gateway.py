import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from src.guard_payroll.guard_payroll.core.enums import GatewayState, OverrideField
from src.guard_payroll.guard_payroll.core.exceptions import BackendError, ValidationError
from src.guard_payroll.guard_payroll.periods.model import PayPeriod
from src.guard_payroll.guard_payroll.sheets.gateway import OverridePersistenceGateway, normalize_override_value
from src.guard_payroll.guard_payroll.sheets.model import OverrideValues, SheetEntryOverride

PERIOD = PayPeriod(from_date=date(2025, 4, 26), to_date=date(2025, 5, 25))
TIMEOUT = 5


class FakeSheetRepo:
    def __init__(self):
        self.calls = []
        self.fail = False
        self.release = threading.Event()
        self.release.set()
        self.hold = None

    def list_entries(self, *, from_date, to_date):
        return []

    def upsert_entries(self, *, from_date, to_date, entries):
        if self.hold is None or self.hold(entries):
            self.release.wait(TIMEOUT)
        self.calls.append((from_date, to_date, list(entries)))
        if self.fail:
            raise BackendError("boom", status_code=500)


def make_gateway(repo, reload=None):
    return OverridePersistenceGateway(
        repo,
        reload=reload or (lambda: None),
        executor=ThreadPoolExecutor(max_workers=2),
    )


def test_edit_is_visible_before_persist_and_settles_clean():
    repo = FakeSheetRepo()
    repo.release.clear()
    gw = make_gateway(repo)
    gw.reset(PERIOD, [])

    future = gw.apply_edit(7, OverrideField.EOBI, 500)

    assert gw.session_edits()[7].eobi == 500.0
    assert gw.state == GatewayState.DIRTY
    assert gw.pending_count == 1

    repo.release.set()
    future.result(timeout=TIMEOUT)

    assert gw.state == GatewayState.CLEAN
    assert gw.persisted_overrides()[7].eobi == 500.0
    assert repo.calls == [(PERIOD.from_date, PERIOD.to_date, [{"employee_db_id": 7, "eobi": 500.0}])]
    gw.shutdown()


def test_failed_persist_discards_edits_and_reloads():
    repo = FakeSheetRepo()
    repo.fail = True
    reloads = []
    gw = None

    def reload():
        reloads.append(1)
        gw.reset(PERIOD, [SheetEntryOverride(7, PERIOD.from_date, PERIOD.to_date, OverrideValues(eobi=0.0))])

    gw = make_gateway(repo, reload)
    gw.reset(PERIOD, [])

    future = gw.apply_edit(7, OverrideField.EOBI, 500)

    assert isinstance(future.exception(timeout=TIMEOUT), BackendError)
    assert reloads == [1]
    assert gw.session_edits() == {}
    assert gw.persisted_overrides()[7].eobi == 0.0
    assert gw.state == GatewayState.CLEAN
    gw.shutdown()


def test_edits_rejected_while_reconciling():
    repo = FakeSheetRepo()
    repo.fail = True
    gw = make_gateway(repo, reload=lambda: None)
    gw.reset(PERIOD, [])

    gw.apply_edit(7, OverrideField.EOBI, 500).exception(timeout=TIMEOUT)

    assert gw.state == GatewayState.RECONCILING
    with pytest.raises(ValidationError):
        gw.apply_edit(7, OverrideField.EOBI, 100)

    gw.reset(PERIOD, [])
    assert gw.state == GatewayState.CLEAN
    gw.shutdown()


def test_failure_from_before_a_reload_is_ignored():
    repo = FakeSheetRepo()
    repo.fail = True
    repo.release.clear()
    reloads = []
    gw = make_gateway(repo, reload=lambda: reloads.append(1))
    gw.reset(PERIOD, [])

    stale = gw.apply_edit(7, OverrideField.EOBI, 500)
    gw.reset(PERIOD, [])
    repo.release.set()

    assert isinstance(stale.exception(timeout=TIMEOUT), BackendError)
    assert reloads == []
    assert gw.state == GatewayState.CLEAN
    gw.shutdown()


def test_same_field_edits_last_local_write_wins_out_of_order():
    repo = FakeSheetRepo()
    repo.release.clear()
    repo.hold = lambda entries: entries[0].get("eobi") == 100.0
    gw = make_gateway(repo)
    gw.reset(PERIOD, [])

    first = gw.apply_edit(7, OverrideField.EOBI, 100)
    second = gw.apply_edit(7, OverrideField.EOBI, 200)
    second.result(timeout=TIMEOUT)

    assert gw.session_edits()[7].eobi == 200.0
    assert gw.state == GatewayState.DIRTY
    assert not first.cancelled()

    repo.release.set()
    first.result(timeout=TIMEOUT)

    assert gw.state == GatewayState.CLEAN
    assert gw.session_edits()[7].eobi == 200.0
    assert [c[2] for c in repo.calls] == [
        [{"employee_db_id": 7, "eobi": 200.0}],
        [{"employee_db_id": 7, "eobi": 100.0}],
    ]
    gw.shutdown()


def test_edits_to_different_fields_are_independent():
    repo = FakeSheetRepo()
    gw = make_gateway(repo)
    gw.reset(PERIOD, [SheetEntryOverride(3, PERIOD.from_date, PERIOD.to_date, OverrideValues(allow_other=300.0))])

    eobi = gw.apply_edit(3, OverrideField.EOBI, 500)
    remarks = gw.apply_edit(3, OverrideField.REMARKS, "night shift")

    edits = gw.session_edits()[3]
    assert (edits.eobi, edits.remarks) == (500.0, "night shift")

    eobi.result(timeout=TIMEOUT)
    remarks.result(timeout=TIMEOUT)

    persisted = gw.persisted_overrides()[3]
    assert (persisted.allow_other, persisted.eobi, persisted.remarks) == (300.0, 500.0, "night shift")
    assert sorted(k for c in repo.calls for k in c[2][0] if k != "employee_db_id") == ["eobi", "remarks"]
    assert gw.state == GatewayState.CLEAN
    gw.shutdown()


def test_edit_without_loaded_period_is_rejected():
    gw = make_gateway(FakeSheetRepo())

    with pytest.raises(ValidationError):
        gw.apply_edit(1, OverrideField.EOBI, 10)
    gw.shutdown()


def test_normalize_override_values():
    assert normalize_override_value(OverrideField.CUR_DAYS, "12") == 12
    assert normalize_override_value(OverrideField.OT_RATE, "650.5") == 650.5
    assert normalize_override_value(OverrideField.REMARKS, None) == ""
    assert normalize_override_value(OverrideField.BANK_CASH, "Cash") == "Cash"

    with pytest.raises(ValidationError):
        normalize_override_value(OverrideField.PRE_DAYS, 32)
    with pytest.raises(ValidationError):
        normalize_override_value(OverrideField.PRE_DAYS, 2.5)
    with pytest.raises(ValidationError):
        normalize_override_value(OverrideField.EOBI, "abc")
    with pytest.raises(ValidationError):
        normalize_override_value(OverrideField.ALLOW_OTHER, True)
