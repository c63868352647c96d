from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
from ..config import LevelConfig

class CacheLine:
    """A single slot of a fully-associative level: Empty or Occupied(frame, age)."""
    __slots__ = ("frame", "age")

    def __init__(self):
        self.frame: Optional[int] = None
        self.age: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.frame is None

    def fill(self, frame: int):
        """Empty -> Occupied, or overwrite of an occupied slot on eviction."""
        self.frame = frame
        self.age = 0

    def __repr__(self):
        if self.is_empty:
            return "CacheLine(Empty)"
        return f"CacheLine(frame={self.frame}, age={self.age})"


class CacheLevel:
    """
    One fully-associative cache level: a single set of `capacity` lines.

    The level tracks occupancy and ages only. Victim selection is delegated
    to the replacement policy passed to `admit`; timing is accounted for by
    the HierarchySimulator.
    """
    def __init__(self, config: LevelConfig):
        self.config = config
        self.name = config.name
        self.line_size_bytes = config.line_size_bytes
        self.capacity = config.capacity
        self.latency_cycles = config.latency_cycles
        self.lines: List[CacheLine] = [CacheLine() for _ in range(self.capacity)]

        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def frame_of(self, address: int) -> int:
        """Frame number of an address at this level's line granularity."""
        return address // self.line_size_bytes

    def probe(self, frame: int) -> Optional[int]:
        """Returns the index of the first slot holding `frame`, or None. No side effects."""
        for i, line in enumerate(self.lines):
            if line.frame == frame:
                return i
        return None

    def first_empty(self) -> Optional[int]:
        for i, line in enumerate(self.lines):
            if line.is_empty:
                return i
        return None

    def age_occupied(self):
        """Advances the age of every occupied line, the hit line included."""
        for line in self.lines:
            if not line.is_empty:
                line.age += 1

    def record_hit(self, index: int, policy) -> None:
        self.hits += 1
        self.age_occupied()
        policy.on_hit(self, index)

    def admit(self, frame: int, policy) -> Tuple[int, Optional[int]]:
        """
        Admits a missed frame into the level.
        Fills the first empty slot if there is one; otherwise overwrites the
        victim chosen by `policy`. Returns (slot index, evicted frame or None).
        """
        self.misses += 1
        index = self.first_empty()
        evicted = None
        if index is None:
            index = policy.select_victim(self)
            if not 0 <= index < self.capacity:
                raise ValueError(f"[{self.name}] Replacement policy chose invalid slot {index}.")
            evicted = self.lines[index].frame
            self.evictions += 1
        self.lines[index].fill(frame)
        policy.on_fill(self, index)
        return index, evicted

    def occupied_lines(self) -> List[Tuple[int, int, int]]:
        """(slot index, frame, age) for every occupied slot, in slot order."""
        return [(i, line.frame, line.age) for i, line in enumerate(self.lines) if not line.is_empty]

    def get_stats(self) -> Dict[str, Any]:
        """Returns a dictionary of cache statistics."""
        occupied = sum(1 for line in self.lines if not line.is_empty)
        total_accesses = self.hits + self.misses
        if total_accesses == 0:
            return {"hit_rate": 0, "miss_rate": 0, "hits": 0, "misses": 0,
                    "evictions": 0, "occupied": occupied}

        hit_rate = self.hits / total_accesses
        miss_rate = self.misses / total_accesses
        return {"hit_rate": hit_rate, "miss_rate": miss_rate, "hits": self.hits,
                "misses": self.misses, "evictions": self.evictions, "occupied": occupied}
