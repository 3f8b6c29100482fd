"""Simulation wrapper used by the command line

Validates the configuration, reads the trace file and forwards its
records to the cache simulator.
"""
import logging
from typing import Callable, List, Optional

from tracesim.core.simulator import CacheSimulator
from tracesim.data.stats_export import Statistics
from tracesim.data.trace_parser import read_trace
from tracesim.simulation.config import SimulationConfig

logger = logging.getLogger(__name__)


class Simulation:
    def __init__(self, config: SimulationConfig, sample_every: int = 0):
        self.config = config
        # 0 disables hit-rate history sampling
        self.sample_every = sample_every
        self.simulator: Optional[CacheSimulator] = None
        self.hit_rate_history: List[float] = []
        self._replayed = 0

    def _create_simulator(self):
        # Only build the simulator once, so repeated runs keep the cache warm
        # and keep accumulating statistics.
        if self.simulator is not None:
            return
        geometry = self.config.geometry()
        logger.debug("geometry: %d sets, %d-way, %d-byte blocks",
                     geometry.num_sets, geometry.associativity, geometry.block_size)
        self.simulator = CacheSimulator(geometry)

    def run(self, callback: Optional[Callable] = None) -> Statistics:
        self._create_simulator()
        logger.info("replaying %s", self.config.trace_file)

        def on_record(record, outcomes):
            self._replayed += 1
            if self.sample_every and self._replayed % self.sample_every == 0:
                self.hit_rate_history.append(self.simulator.stats.hit_rate)
            if callback:
                callback(record, outcomes)

        records = read_trace(self.config.trace_file, strict=self.config.strict)
        stats = self.simulator.replay(records, on_record)
        logger.info("finished %s: %d accesses", self.config.trace_file, stats.accesses)
        return stats

    def close(self):
        if self.simulator is not None:
            self.simulator.close()
