from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..config import SimConfig, RAM_NAME
from ..utils.logging import get_logger
from .cache import CacheLevel
from .replacement import make_policy, ReplacementPolicy

logger = get_logger(__name__)

RAM = RAM_NAME

@dataclass
class Eviction:
    level: str
    evicted_frame: int
    admitted_frame: int

@dataclass
class AccessResult:
    address: int
    served_by: str  # level name or "RAM"
    frame: Optional[int]  # frame at the serving level, None for RAM
    latency: int
    evictions: List[Eviction] = field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return {
            "address": f"{self.address:#x}",
            "served_by": self.served_by,
            "frame": self.frame,
            "latency": self.latency,
            "evictions": [e.__dict__ for e in self.evictions],
        }


class HierarchySimulator:
    """
    A register -> L1 -> L2 -> L3 -> RAM load path.

    Each access probes the levels in order. A level that misses admits the
    frame immediately, before the next level is probed, whether or not a
    deeper level holds it. The first hit ends the cascade; if every level
    misses, RAM serves the load. Every probed level charges its latency.
    """
    def __init__(self, config: Optional[SimConfig] = None):
        self.config = config or SimConfig()
        self.levels: List[CacheLevel] = [CacheLevel(lc) for lc in self.config.levels]
        self.policies: List[ReplacementPolicy] = [
            make_policy(self.config.replacement_policy, self.config.policy_seed + i)
            for i in range(len(self.levels))
        ]
        self.ram_latency_cycles = self.config.ram_latency_cycles
        self.max_address = self.config.max_address

        self.cumulative_cycles = 0
        self.accesses = 0
        self.ram_accesses = 0

    def level(self, name: str) -> CacheLevel:
        for lvl in self.levels:
            if lvl.name == name:
                return lvl
        raise KeyError(name)

    def access(self, address: int) -> AccessResult:
        """Runs one load through the cascade and returns its outcome."""
        if isinstance(address, bool) or not isinstance(address, int):
            raise ValueError(f"Address must be an integer, got {address!r}")
        if not 0 <= address <= self.max_address:
            raise ValueError(f"Address {address:#x} is outside the {self.config.address_bits}-bit address space")

        latency = 0
        evictions: List[Eviction] = []
        result = None
        for level, policy in zip(self.levels, self.policies):
            latency += level.latency_cycles
            frame = level.frame_of(address)
            index = level.probe(frame)

            if index is not None:
                level.record_hit(index, policy)
                result = AccessResult(address, level.name, frame, latency, evictions)
                break

            _, evicted = level.admit(frame, policy)
            if evicted is not None:
                logger.debug(f"{level.name}: evicted frame {evicted} for frame {frame}")
                evictions.append(Eviction(level.name, evicted, frame))

        if result is None:
            latency += self.ram_latency_cycles
            self.ram_accesses += 1
            result = AccessResult(address, RAM, None, latency, evictions)

        self.accesses += 1
        self.cumulative_cycles += latency
        logger.debug(f"{address:#x}: served by {result.served_by}, latency {latency}")
        return result

    def process_access(self, address: int) -> int:
        """Runs one load and returns the cycles it cost."""
        return self.access(address).latency

    def occupied_lines(self, name: str) -> List[Tuple[int, int, int]]:
        return self.level(name).occupied_lines()

    def snapshot(self) -> Dict[str, List[Tuple[int, int, int]]]:
        """Occupied (slot, frame, age) triples of every level."""
        return {lvl.name: lvl.occupied_lines() for lvl in self.levels}

    def hit_path_latency(self, name: str) -> int:
        """Latency of a load served by the named level (or RAM)."""
        latency = 0
        for lvl in self.levels:
            latency += lvl.latency_cycles
            if lvl.name == name:
                return latency
        if name == RAM:
            return latency + self.ram_latency_cycles
        raise KeyError(name)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "accesses": self.accesses,
            "total_cycles": self.cumulative_cycles,
            "ram_accesses": self.ram_accesses,
            "levels": {lvl.name: lvl.get_stats() for lvl in self.levels},
        }
