"""CacheSimulator coordinates trace replay, the cache store and statistics.

The simulator is the session object: it owns the cache store, the logical
clock and the counters and passes them explicitly to `access_once`.
Records are dispatched by kind:
- L (load) and S (store): one access
- M (modify): two accesses to the same address (load then store)
- anything else (e.g. I instruction fetches) is ignored
"""
import logging
from enum import Enum
from typing import Callable, Iterable, List, NamedTuple, Optional

from .cache import AccessOutcome, CacheStore, LogicalClock, access_once
from .geometry import Geometry
from ..data.stats_export import Statistics

logger = logging.getLogger(__name__)


class Operation(Enum):
    LOAD = 'L'
    STORE = 'S'
    MODIFY = 'M'

    @classmethod
    def from_kind(cls, kind: str) -> Optional["Operation"]:
        try:
            return cls(kind)
        except ValueError:
            return None

    @property
    def accesses(self) -> int:
        return 2 if self is Operation.MODIFY else 1


class TraceRecord(NamedTuple):
    kind: str
    address: int
    # carried through for reporting only; the cache never looks at it
    size: int = 0


class CacheSimulator:
    def __init__(self, geometry: Geometry, stats: Optional[Statistics] = None):
        self.geometry = geometry
        self.store = CacheStore.allocate(geometry)
        self.clock = LogicalClock()
        self.stats = stats or Statistics()
        self.records: List[TraceRecord] = []
        self.index = 0
        self.ignored = 0

    def reset(self):
        # clear stats, cache contents and rewind the record pointer
        self.stats.reset()
        self.store.reset()
        self.clock.reset()
        self.index = 0
        self.ignored = 0

    def close(self):
        self.store.release()

    def access(self, address: int) -> AccessOutcome:
        return access_once(self.store, self.clock, self.stats, address, self.geometry)

    def replay_record(self, record: TraceRecord) -> Optional[List[AccessOutcome]]:
        """Apply one record. Returns its outcomes, or None if the kind is ignored."""
        op = Operation.from_kind(record.kind)
        if op is None:
            self.ignored += 1
            return None
        # modify = load followed by store of the same address
        return [self.access(record.address) for _ in range(op.accesses)]

    def replay(self, records: Iterable[TraceRecord], callback: Optional[Callable[[TraceRecord, List[AccessOutcome]], None]] = None) -> Statistics:
        """Stream `records` through the cache in order."""
        for record in records:
            outcomes = self.replay_record(record)
            if outcomes is not None and callback:
                callback(record, outcomes)
        logger.debug("replay done: %d hits, %d misses, %d evictions, %d ignored",
                     self.stats.hits, self.stats.misses, self.stats.evictions, self.ignored)
        return self.stats

    def load_records(self, records: Iterable[TraceRecord]):
        self.records = list(records)
        self.index = 0
        # records are stepped through with `step()` which advances self.index

    def has_next(self) -> bool:
        return self.index < len(self.records)

    def step(self) -> Optional[dict]:
        """Replay the next record; None once the records are exhausted."""
        if not self.has_next():
            return None
        record = self.records[self.index]
        self.index += 1
        outcomes = self.replay_record(record)
        return {
            'record': record,
            'ignored': outcomes is None,
            'outcomes': outcomes or [],
            'stats': {
                'hits': self.stats.hits,
                'misses': self.stats.misses,
                'evictions': self.stats.evictions,
            },
        }

    def run_all(self, callback: Optional[Callable[[dict], None]] = None):
        while self.has_next():
            info = self.step()
            if callback:
                callback(info)
        return self.stats
