from __future__ import annotations

import random
from collections.abc import Iterable
from typing import TypeVar

T = TypeVar("T")


def shuffled(items: Iterable[T], rng: random.Random | None = None) -> list[T]:
    """Return a shuffled copy; the input is left untouched."""
    out = list(items)
    (rng or random).shuffle(out)
    return out
