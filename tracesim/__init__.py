"""Trace-driven LRU set-associative cache simulator."""
from tracesim.core.cache import AccessOutcome, CacheLine, CacheStore, LogicalClock, access_once
from tracesim.core.geometry import Geometry, derive_geometry
from tracesim.core.simulator import CacheSimulator, Operation, TraceRecord
from tracesim.data.stats_export import Statistics

__version__ = "0.1.0"

__all__ = [
    "AccessOutcome",
    "CacheLine",
    "CacheSimulator",
    "CacheStore",
    "Geometry",
    "LogicalClock",
    "Operation",
    "Statistics",
    "TraceRecord",
    "access_once",
    "derive_geometry",
]
