"""Clock-style time formatting and parsing (``m:ss``, ``h:mm:ss``)."""

import re
from typing import Optional


def format_mm_ss(seconds: float) -> str:
    s = max(0, round(seconds))
    return f"{s // 60}:{s % 60:02d}"


def format_duration(seconds: float) -> str:
    """``m:ss`` below an hour, ``h:mm:ss`` above."""
    s = max(0, round(seconds))
    h, rem = divmod(s, 3600)
    m, r = divmod(rem, 60)
    if h > 0:
        return f"{h}:{m:02d}:{r:02d}"
    return f"{m}:{r:02d}"


def parse_time_to_seconds(value: str) -> Optional[int]:
    """Parse ``"3:30"`` or ``"1:45:00"`` into seconds.

    Returns ``None`` for anything that is not a clean m:ss / h:mm:ss.
    """
    raw = re.sub(r"\s+", "", str(value or ""))
    parts = raw.split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        return None

    nums = [int(p) for p in parts]
    h, m, s = nums if len(nums) == 3 else [0, *nums]
    if m >= 60 or s >= 60:
        return None
    return h * 3600 + m * 60 + s
