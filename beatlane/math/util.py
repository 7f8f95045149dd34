from __future__ import annotations

import math
import time
from typing import Optional


def clamp(x, a, b):
    return a if x < a else b if x > b else x

def now_sec():
    return time.perf_counter()

def finite_or_none(v: Optional[float]) -> Optional[float]:
    # NaN / inf samples count as "no sample"
    if v is None:
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    if math.isnan(f) or math.isinf(f):
        return None
    return f
