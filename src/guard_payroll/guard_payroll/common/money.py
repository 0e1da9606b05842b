from __future__ import annotations

import math
from typing import Optional


def round_amount(value: float) -> Optional[int]:
    """Round to the nearest whole currency unit, halves toward +infinity.

    Returns None for NaN/inf so a broken input never turns into a plausible number.
    """
    if value is None or not math.isfinite(value):
        return None
    return int(math.floor(value + 0.5))
