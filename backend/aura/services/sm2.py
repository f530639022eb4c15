"""
SM-2 scheduler.

Maps a quality verdict and the card's current schedule to its next schedule.
Pure: the caller supplies `now` (epoch ms) and nothing is read or written.

    result = compute(Quality.EASY, repetitions=0, interval=1, ease_factor=2.5, now=now)
"""
from __future__ import annotations

import math

from aura.clock import MS_PER_DAY
from aura.models.flashcard import Quality, SM2Result

MIN_EASE_FACTOR = 1.3

# Verdicts below this reset the streak.
PASSING_QUALITY = 3


class InvalidQualityError(ValueError):
    """Raised for a quality verdict outside {1, 3, 5}."""


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def coerce_quality(value: int) -> Quality:
    try:
        return Quality(value)
    except ValueError:
        raise InvalidQualityError(
            f"quality must be one of {[q.value for q in Quality]}, got {value!r}"
        ) from None


def compute(
    quality: int,
    repetitions: int,
    interval: int,
    ease_factor: float,
    now: int,
) -> SM2Result:
    q = coerce_quality(quality)

    if q < PASSING_QUALITY:
        new_reps = 0
        new_interval = 1
    else:
        new_reps = repetitions + 1
        if new_reps == 1:
            new_interval = 1
        elif new_reps == 2:
            new_interval = 6
        else:
            new_interval = max(1, int(_round_half_up(interval * ease_factor)))

    # EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    miss = 5 - int(q)
    new_ef = ease_factor + (0.1 - miss * (0.08 + miss * 0.02))
    new_ef = _round_half_up(max(MIN_EASE_FACTOR, new_ef), 2)

    return SM2Result(
        repetitions=new_reps,
        interval=new_interval,
        ease_factor=new_ef,
        next_review_at=now + new_interval * MS_PER_DAY,
    )
