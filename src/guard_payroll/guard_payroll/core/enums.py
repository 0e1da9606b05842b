from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily attendance status as produced by the capture flow."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    LEAVE = "leave"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value) -> "AttendanceStatus":
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.UNKNOWN


class PaymentStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"


class OverrideField(str, Enum):
    """Editable sheet fields, named as the backend stores them."""

    PRE_DAYS = "pre_days_override"
    CUR_DAYS = "cur_days_override"
    OT_RATE = "ot_rate_override"
    ALLOW_OTHER = "allow_other"
    EOBI = "eobi"
    FINE_ADV_EXTRA = "fine_adv_extra"
    BANK_CASH = "bank_cash"
    REMARKS = "remarks"


class GatewayState(str, Enum):
    """Lifecycle of the optimistic override write path."""

    CLEAN = "CLEAN"
    DIRTY = "DIRTY"
    RECONCILING = "RECONCILING"
