from __future__ import annotations
import random
from typing import Dict

class ReplacementPolicy:
    """
    Victim selection for a full cache level.

    One instance serves exactly one CacheLevel. `select_victim` is only
    called when every slot of the level is occupied; the hooks let stateful
    policies follow fills and hits.
    """
    name = "base"

    def select_victim(self, level) -> int:
        raise NotImplementedError

    def on_fill(self, level, index: int):
        pass

    def on_hit(self, level, index: int):
        pass


class OldestAgePolicy(ReplacementPolicy):
    """
    Evicts the line with the strictly greatest age, lowest slot index on ties.

    Ages only grow on hits, and every occupied line ages on every hit in the
    level, so this is not LRU: a line hit repeatedly keeps its rank among
    its co-residents.
    """
    name = "oldest-age"

    def select_victim(self, level) -> int:
        oldest_age = -1
        oldest_line = 0
        for i, line in enumerate(level.lines):
            if line.age > oldest_age:
                oldest_age = line.age
                oldest_line = i
        return oldest_line


class _TickPolicy(ReplacementPolicy):
    """Base for policies that order slots by a logical timestamp."""
    def __init__(self):
        self._tick = 0
        self._stamps: Dict[int, int] = {}

    def _stamp(self, index: int):
        self._tick += 1
        self._stamps[index] = self._tick

    def select_victim(self, level) -> int:
        # min() keeps the first slot on equal stamps
        return min(range(level.capacity), key=lambda i: self._stamps.get(i, 0))

    def on_fill(self, level, index: int):
        self._stamp(index)


class LRUPolicy(_TickPolicy):
    """Evicts the line least recently filled or hit."""
    name = "lru"

    def on_hit(self, level, index: int):
        self._stamp(index)


class FIFOPolicy(_TickPolicy):
    """Evicts the line that was filled earliest; hits do not matter."""
    name = "fifo"


class RandomPolicy(ReplacementPolicy):
    """Evicts a uniformly chosen line from a seeded generator."""
    name = "random"

    def __init__(self, seed: int = 0):
        self._rng = random.Random(seed)

    def select_victim(self, level) -> int:
        return self._rng.randrange(level.capacity)


_POLICIES = {
    OldestAgePolicy.name: lambda seed: OldestAgePolicy(),
    LRUPolicy.name: lambda seed: LRUPolicy(),
    FIFOPolicy.name: lambda seed: FIFOPolicy(),
    RandomPolicy.name: lambda seed: RandomPolicy(seed),
}

POLICY_NAMES = tuple(_POLICIES)


def make_policy(name: str, seed: int = 0) -> ReplacementPolicy:
    """Creates a fresh policy instance by name."""
    if name not in _POLICIES:
        raise ValueError(f"Unknown or unsupported replacement policy: {name}")
    return _POLICIES[name](seed)
