from datetime import date

from src.guard_payroll.guard_payroll.periods.calculator import compute_periods, period_ending_in


def test_current_period_runs_26th_to_25th():
    periods = compute_periods(date(2025, 5, 14))

    assert periods.reference_month == date(2025, 5, 1)
    assert periods.current.from_date == date(2025, 4, 26)
    assert periods.current.to_date == date(2025, 5, 25)
    assert periods.current.working_days == 30


def test_previous_period_is_one_month_earlier():
    periods = compute_periods(date(2025, 5, 1))

    assert periods.previous.from_date == date(2025, 3, 26)
    assert periods.previous.to_date == date(2025, 4, 25)
    assert periods.previous.working_days == 31


def test_january_wraps_into_previous_year():
    periods = compute_periods(date(2025, 1, 31))

    assert periods.current.from_date == date(2024, 12, 26)
    assert periods.current.to_date == date(2025, 1, 25)
    assert periods.previous.from_date == date(2024, 11, 26)
    assert periods.previous.to_date == date(2024, 12, 25)


def test_february_period_length_follows_calendar():
    assert period_ending_in(date(2025, 3, 1)).working_days == 28
    assert period_ending_in(date(2024, 3, 1)).working_days == 29


def test_split_date_is_first_of_month_period_ends_in():
    period = period_ending_in(date(2025, 5, 1))

    assert period.split_date == date(2025, 5, 1)
    assert period.contains(date(2025, 4, 26))
    assert period.contains(date(2025, 5, 25))
    assert not period.contains(date(2025, 5, 26))
