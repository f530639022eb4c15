"""
Clock collaborator.

Every scheduling and classification function takes "now" as an explicit
epoch-millisecond integer; services receive a Clock at construction and read
it once per operation.
"""
from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], int]

MS_PER_DAY = 86_400_000


def system_clock() -> int:
    return int(time.time() * 1000)


def fixed_clock(now: int) -> Clock:
    """Return a clock frozen at `now` (epoch ms)."""
    return lambda: now
