"""Weighted random choice over an ordered candidate list."""

import math
from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")

Rng = Callable[[], float]


def clean_weight(weight: float) -> float:
    """Clamp negative, NaN and infinite weights to 0."""
    if not math.isfinite(weight) or weight < 0:
        return 0.0
    return float(weight)


def pick_weighted(rng: Rng, items: Sequence[tuple[float, T]]) -> T | None:
    """Pick one value from ``(weight, value)`` pairs, or None if no weight is positive.

    Items are walked in the given order, so callers must pass a stable order
    for identical seeds to reproduce identical picks. Draws ``rng`` once when
    a choice is possible and not at all otherwise.
    """
    weights = [clean_weight(w) for w, _ in items]
    total = sum(weights)
    if total <= 0:
        return None
    r = rng() * total
    last: T | None = None
    for w, (_, value) in zip(weights, items):
        if w <= 0:
            continue
        r -= w
        last = value
        if r <= 0:
            return value
    # float rounding left a sliver of r; the draw still lands on the last item
    return last


def pick_uniform(rng: Rng, values: Sequence[T]) -> T | None:
    return pick_weighted(rng, [(1.0, v) for v in values])
