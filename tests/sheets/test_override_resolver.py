from src.guard_payroll.guard_payroll.attendance.model import AttendanceSummary
from src.guard_payroll.guard_payroll.core.enums import OverrideField
from src.guard_payroll.guard_payroll.sheets.model import OverrideValues
from src.guard_payroll.guard_payroll.sheets.resolver import resolve, resolve_field, resolve_overrides


def test_resolve_precedence():
    assert resolve(1) == 1
    assert resolve(1, 2) == 2
    assert resolve(1, 2, 3) == 3
    assert resolve(1, None, 3) == 3


def test_zero_and_empty_string_do_not_fall_through():
    assert resolve(10, 5, 0) == 0
    assert resolve(10, 0) == 0
    assert resolve("MMBL", "", None) == ""


def test_resolve_field_reads_override_values():
    persisted = OverrideValues(eobi=250.0)
    session = OverrideValues(remarks="late joiner")

    assert resolve_field(OverrideField.EOBI, 0.0, persisted, session) == 250.0
    assert resolve_field(OverrideField.REMARKS, "", persisted, session) == "late joiner"
    assert resolve_field(OverrideField.ALLOW_OTHER, 0.0, persisted, session) == 0.0


def test_resolve_overrides_baselines():
    summary = AttendanceSummary(pre_days_count=10, cur_days_count=15)

    resolved = resolve_overrides(summary, default_ot_rate=700)

    assert resolved.pre_days == 10
    assert resolved.cur_days == 15
    assert resolved.ot_rate == 700
    assert resolved.allow_other == 0
    assert resolved.eobi == 0
    assert resolved.fine_adv_extra == 0
    assert resolved.bank_cash == "MMBL"
    assert resolved.remarks == ""


def test_session_edit_beats_persisted_override():
    summary = AttendanceSummary(pre_days_count=10, cur_days_count=15)
    persisted = OverrideValues(cur_days_override=12, ot_rate_override=800.0)
    session = OverrideValues(cur_days_override=14)

    resolved = resolve_overrides(summary, persisted, session)

    assert resolved.cur_days == 14
    assert resolved.ot_rate == 800.0
    assert resolved.pre_days == 10
