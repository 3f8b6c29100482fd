"""Cache geometry and address decomposition.

A geometry is derived from the three configuration integers:
- set_index_bits (s): the cache has 2**s sets
- block_offset_bits (b): each block holds 2**b bytes
- associativity (E): lines per set

Addresses are split as:
  set_index = (address >> b) & (2**s - 1)
  tag = address >> (s + b)
The block offset bits are dropped since block contents are not modelled.
"""

from dataclasses import dataclass, field
from typing import Tuple

ADDRESS_WIDTH = 64
ADDRESS_MASK = (1 << ADDRESS_WIDTH) - 1


@dataclass(frozen=True)
class Geometry:
    set_index_bits: int
    block_offset_bits: int
    associativity: int
    num_sets: int = field(init=False)
    block_size: int = field(init=False)
    set_index_mask: int = field(init=False)

    def __post_init__(self):
        # frozen dataclass: derived fields go through object.__setattr__
        object.__setattr__(self, 'num_sets', 1 << self.set_index_bits)
        object.__setattr__(self, 'block_size', 1 << self.block_offset_bits)
        object.__setattr__(self, 'set_index_mask', self.num_sets - 1)

    def decompose(self, address: int) -> Tuple[int, int]:
        """Split `address` into (set_index, tag)."""
        set_index = (address >> self.block_offset_bits) & self.set_index_mask
        tag = address >> (self.set_index_bits + self.block_offset_bits)
        return set_index, tag


def derive_geometry(set_index_bits: int, block_offset_bits: int, associativity: int) -> Geometry:
    """Build a Geometry from already-validated positive integers."""
    return Geometry(
        set_index_bits=int(set_index_bits),
        block_offset_bits=int(block_offset_bits),
        associativity=int(associativity),
    )


__all__ = ["ADDRESS_WIDTH", "ADDRESS_MASK", "Geometry", "derive_geometry"]
