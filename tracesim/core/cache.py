"""Core cache implementation

The cache is a fixed table of sets; each set has `associativity` lines.
Only bookkeeping is simulated: a line remembers whether it is valid, which
tag it holds and when it was last touched. No block data is stored.

LRU uses a logical clock shared by the whole cache: every access attempt
(hit or miss) stamps the touched line with the next clock value, so the line
with the smallest stamp in a set is the least recently used one. Empty lines
keep stamp 0 and are therefore always chosen before any used line.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .geometry import Geometry

logger = logging.getLogger(__name__)


@dataclass
class CacheLine:
    """container for a cache line (way).

    Fields:
    - valid: whether the line currently holds a block
    - tag: the tag stored in the line (meaningless while invalid)
    - recency: logical time of the last access, 0 for a never-used line
    """

    valid: bool = False
    tag: int = 0
    recency: int = 0

    def clear(self):
        self.valid = False
        self.tag = 0
        self.recency = 0


class LogicalClock:
    """Monotonic access counter used as the LRU signal."""

    def __init__(self, start: int = 1):
        self._start = start
        self.value = start

    def next(self) -> int:
        # hand out the current tick, then advance by exactly one
        tick = self.value
        self.value += 1
        return tick

    def reset(self):
        self.value = self._start


class CacheStore:
    """The sets x ways table of cache lines."""

    def __init__(self, num_sets: int, associativity: int):
        self.num_sets = num_sets
        self.associativity = associativity
        # each line is its own object: no aliasing between (set, way) slots
        self.sets: List[List[CacheLine]] = [
            [CacheLine() for _ in range(associativity)] for _ in range(num_sets)
        ]

    @classmethod
    def allocate(cls, geometry: Geometry) -> "CacheStore":
        logger.debug("allocating %d sets x %d ways", geometry.num_sets, geometry.associativity)
        return cls(geometry.num_sets, geometry.associativity)

    def __getitem__(self, set_index: int) -> List[CacheLine]:
        return self.sets[set_index]

    def __len__(self) -> int:
        return self.num_sets

    def reset(self):
        """Return every line to the empty state."""
        for s in self.sets:
            for line in s:
                line.clear()

    def release(self):
        # nothing external is held; dropping the table is enough
        self.sets = []


@dataclass
class AccessOutcome:
    """What a single access did to the cache.

    `evicted_tag` is set only when a valid line was overwritten.
    """

    hit: bool
    set_index: int
    way_index: int
    evicted_tag: Optional[int] = None

    @property
    def eviction(self) -> bool:
        return self.evicted_tag is not None


def select_victim(lines: List[CacheLine]) -> int:
    """Index of the line with the smallest recency; lowest index wins ties."""
    victim = 0
    for wi in range(1, len(lines)):
        if lines[wi].recency < lines[victim].recency:
            victim = wi
    return victim


def access_once(store: CacheStore, clock: LogicalClock, stats, address: int, geometry: Geometry) -> AccessOutcome:
    """Perform one cache access for `address`.

    `stats` must provide record_hit(), record_miss() and record_eviction().
    """
    set_index, tag = geometry.decompose(address)
    cache_set = store[set_index]

    # search for hit
    for wi, line in enumerate(cache_set):
        if line.valid and line.tag == tag:
            line.recency = clock.next()
            stats.record_hit()
            return AccessOutcome(True, set_index, wi)

    stats.record_miss()

    wi = select_victim(cache_set)
    victim = cache_set[wi]
    evicted_tag = None
    if victim.valid:
        evicted_tag = victim.tag
        stats.record_eviction()

    victim.valid = True
    victim.tag = tag
    victim.recency = clock.next()
    return AccessOutcome(False, set_index, wi, evicted_tag)


__all__ = ["CacheLine", "LogicalClock", "CacheStore", "AccessOutcome", "select_victim", "access_once"]
