from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Protocol, Sequence

from .model import SheetEntryOverride


class SheetEntryRepository(Protocol):
    def list_entries(self, *, from_date: date, to_date: date) -> Sequence[SheetEntryOverride]:
        raise NotImplementedError

    def upsert_entries(self, *, from_date: date, to_date: date, entries: Sequence[Mapping[str, Any]]) -> None:
        """Partial upsert: only keys present in each entry are written."""

        raise NotImplementedError
