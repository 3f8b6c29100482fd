"""Simulation configuration.

Holds the values normally given on the command line and checks them before
any cache is built. The core trusts these checks and does none of its own.
"""
from dataclasses import dataclass
from typing import Optional

from tracesim.core.geometry import ADDRESS_WIDTH, Geometry, derive_geometry
from tracesim.errors import ConfigError

# Limits so a typo cannot ask for a table that never finishes allocating
MAX_SET_INDEX_BITS = 24
MAX_CACHE_LINES = 1 << 24


@dataclass
class SimulationConfig:
    set_index_bits: Optional[int] = None
    associativity: Optional[int] = None
    block_offset_bits: Optional[int] = None
    trace_file: Optional[str] = None
    verbose: bool = False
    strict: bool = False

    def validate(self):
        values = (self.set_index_bits, self.associativity, self.block_offset_bits)
        if any(v is None for v in values) or not self.trace_file:
            raise ConfigError("Missing required command-line argument")
        for name, v in (('set index bits', self.set_index_bits),
                        ('associativity', self.associativity),
                        ('block offset bits', self.block_offset_bits)):
            if v <= 0:
                raise ConfigError(f"{name} must be >= 1, got {v}")
        if self.set_index_bits + self.block_offset_bits > ADDRESS_WIDTH:
            raise ConfigError(
                f"set index bits + block offset bits must not exceed {ADDRESS_WIDTH}, "
                f"got {self.set_index_bits + self.block_offset_bits}"
            )
        if self.set_index_bits > MAX_SET_INDEX_BITS:
            raise ConfigError(f"set index bits must not exceed {MAX_SET_INDEX_BITS}, got {self.set_index_bits}")
        lines = (1 << self.set_index_bits) * self.associativity
        if lines > MAX_CACHE_LINES:
            raise ConfigError(f"cache would hold {lines} lines, limit is {MAX_CACHE_LINES}")

    def geometry(self) -> Geometry:
        self.validate()
        return derive_geometry(self.set_index_bits, self.block_offset_bits, self.associativity)
