from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def select(entries: Sequence[tuple[float, T]], draw: float) -> T | None:
    """Pick one item from ``(weight, item)`` pairs using a single draw in [0, 1).

    Entries are walked in order, so earlier entries win ties. Entries with a
    non-positive weight are never chosen. Returns ``None`` when no entry carries
    positive weight. If float rounding leaves the walk short of the target, the
    last positive-weight entry is returned.
    """
    weighted = [(weight, item) for weight, item in entries if weight > 0]
    total_weight = sum(weight for weight, _ in weighted)
    if total_weight <= 0:
        return None

    target = draw * total_weight
    cumulative = 0.0
    for weight, item in weighted:
        cumulative += weight
        if cumulative >= target:
            return item
    return weighted[-1][1]
