from __future__ import annotations

import hashlib
import random
from collections.abc import Callable, Iterable, Iterator


def derive_stream_seed(master_seed: int, stream_name: str) -> int:
    """Derive a deterministic child RNG seed from (master_seed, stream_name)."""
    digest = hashlib.sha256(f"{master_seed}:{stream_name}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], byteorder="big", signed=False)


def seeded_stream(master_seed: int, stream_name: str) -> random.Random:
    return random.Random(derive_stream_seed(master_seed=master_seed, stream_name=stream_name))


class ScriptedDraws:
    """Replays a fixed sequence of draws in [0, 1), then raises once exhausted.

    Counts every draw taken so callers can assert how many checks actually rolled.
    """

    def __init__(self, draws: Iterable[float]) -> None:
        self._draws: Iterator[float] = iter(list(draws))
        self.taken = 0

    def __call__(self) -> float:
        try:
            value = next(self._draws)
        except StopIteration:
            raise RuntimeError(f"scripted draws exhausted after {self.taken} draws") from None
        if not 0.0 <= value < 1.0:
            raise ValueError(f"scripted draw must be in [0, 1); got {value}")
        self.taken += 1
        return value


def constant_draws(value: float) -> Callable[[], float]:
    if not 0.0 <= value < 1.0:
        raise ValueError(f"constant draw must be in [0, 1); got {value}")

    def _draw() -> float:
        return value

    return _draw
