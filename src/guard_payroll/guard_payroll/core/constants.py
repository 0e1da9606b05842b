"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PERIOD_START_DAY = 26
PERIOD_END_DAY = 25

DEFAULT_OT_RATE = 700.0
DEFAULT_BANK_CASH = "MMBL"
DEFAULT_EMPLOYEE_FETCH_LIMIT = 1000
DEFAULT_PERSIST_WORKERS = 4

PAYROLL_ELIGIBLE_STATUSES = frozenset({"Active", "active", "Suspended", "Inactive"})

UNASSIGNED_CLIENT_NAME = "Unassigned"
UNASSIGNED_SITE_NAME = "N/A"

MAX_DAYS_OVERRIDE = 31
