from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional

from ..common.validators import require_int_in_range, require_number
from ..core.constants import DEFAULT_PERSIST_WORKERS, MAX_DAYS_OVERRIDE
from ..core.enums import GatewayState, OverrideField
from ..core.exceptions import ValidationError
from ..periods.model import PayPeriod
from .model import OverrideValues, SheetEntryOverride
from .repository import SheetEntryRepository

logger = logging.getLogger(__name__)

_DAY_FIELDS = (OverrideField.PRE_DAYS, OverrideField.CUR_DAYS)
_TEXT_FIELDS = (OverrideField.BANK_CASH, OverrideField.REMARKS)


def normalize_override_value(f: OverrideField, value: Any) -> Any:
    if f in _DAY_FIELDS:
        return require_int_in_range(value, f.value, min_value=0, max_value=MAX_DAYS_OVERRIDE)
    if f in _TEXT_FIELDS:
        return "" if value is None else str(value)
    return require_number(value, f.value)


class OverridePersistenceGateway:
    """Optimistic write path for sheet overrides.

    apply_edit() updates the session edit at once and persists it in the background.
    A failed write throws away every session edit and every override not yet
    confirmed by the backend, then calls `reload` to refetch the whole dataset
    (which calls reset()).

    States: CLEAN -> DIRTY (writes pending) -> CLEAN, or -> RECONCILING -> CLEAN.
    """

    def __init__(
        self,
        sheets: SheetEntryRepository,
        *,
        reload: Callable[[], None],
        executor: Optional[Executor] = None,
    ):
        self._sheets = sheets
        self._reload = reload
        self._executor = executor or ThreadPoolExecutor(
            max_workers=DEFAULT_PERSIST_WORKERS, thread_name_prefix="sheet-persist"
        )
        self._lock = threading.RLock()
        self._state = GatewayState.CLEAN
        self._period: Optional[PayPeriod] = None
        self._generation = 0
        self._next_token = 0
        self._pending: set[int] = set()
        self._session_edits: dict[int, OverrideValues] = {}
        self._entries: dict[int, OverrideValues] = {}
        self._server_entries: dict[int, OverrideValues] = {}

    @property
    def state(self) -> GatewayState:
        with self._lock:
            return self._state

    @property
    def period(self) -> Optional[PayPeriod]:
        with self._lock:
            return self._period

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def session_edits(self) -> dict[int, OverrideValues]:
        with self._lock:
            return dict(self._session_edits)

    def persisted_overrides(self) -> dict[int, OverrideValues]:
        """Server entries with local edits folded in, keyed by employee db id."""
        with self._lock:
            return dict(self._entries)

    def reset(self, period: PayPeriod, entries: Iterable[SheetEntryOverride]) -> None:
        """Full-state reset after a (re)load of `period`."""
        with self._lock:
            self._generation += 1
            self._period = period
            self._pending.clear()
            self._session_edits = {}
            self._server_entries = {e.employee_db_id: e.values for e in entries}
            self._entries = dict(self._server_entries)
            self._state = GatewayState.CLEAN

    def apply_edit(self, employee_db_id: int, f: OverrideField, value: Any) -> "Future[None]":
        value = normalize_override_value(f, value)
        db_id = int(employee_db_id)

        with self._lock:
            if self._period is None:
                raise ValidationError("No pay period loaded")
            if self._state == GatewayState.RECONCILING:
                raise ValidationError("Payroll data is reloading, try again shortly")

            self._session_edits[db_id] = self._session_edits.get(db_id, OverrideValues()).with_value(f, value)
            self._entries[db_id] = self._entries.get(db_id, OverrideValues()).with_value(f, value)

            self._next_token += 1
            token = self._next_token
            self._pending.add(token)
            self._state = GatewayState.DIRTY
            generation = self._generation
            period = self._period

        return self._executor.submit(self._persist, period, db_id, f, value, token, generation)

    def _persist(
        self, period: PayPeriod, db_id: int, f: OverrideField, value: Any, token: int, generation: int
    ) -> None:
        entry = {"employee_db_id": db_id, f.value: value}
        try:
            self._sheets.upsert_entries(from_date=period.from_date, to_date=period.to_date, entries=[entry])
        except Exception:
            logger.exception("Saving sheet entry %s failed", entry)
            self._reconcile(generation)
            raise
        self._settle(db_id, f, value, token, generation)

    def _settle(self, db_id: int, f: OverrideField, value: Any, token: int, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._server_entries[db_id] = self._server_entries.get(db_id, OverrideValues()).with_value(f, value)
            self._pending.discard(token)
            if not self._pending and self._state == GatewayState.DIRTY:
                self._state = GatewayState.CLEAN

    def _reconcile(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._state == GatewayState.RECONCILING:
                return
            self._state = GatewayState.RECONCILING
            self._pending.clear()
            self._session_edits = {}
            # Only values the backend has confirmed survive.
            self._entries = dict(self._server_entries)

        logger.warning("Discarding local payroll edits and reloading from the backend")
        try:
            self._reload()
        except Exception:
            # State stays RECONCILING until the next successful load calls reset().
            logger.exception("Reload after a failed sheet write failed")

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
