"""Trace file reader.

Traces use the valgrind lackey format, one access per line:

    I 0400d7d4,8
     L 7ff0005c8,8
     S 7ff0005c8,8
     M 0421c7f0,4

`<kind> <hex address>,<decimal size>`. Data accesses are indented by one
space; instruction fetches are not. Lines that do not match are dropped
(or rejected in strict mode).
"""
import logging
import re
from typing import Iterable, Iterator, Optional

from tracesim.core.geometry import ADDRESS_MASK
from tracesim.core.simulator import TraceRecord
from tracesim.errors import TraceFormatError

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r'^\s*(\S)\s+(?:0[xX])?([0-9a-fA-F]+)\s*,\s*(-?\d+)')


def parse_line(line: str) -> Optional[TraceRecord]:
    """Parse one trace line, returning None if it is blank or malformed."""
    m = _LINE_RE.match(line)
    if m is None:
        return None
    kind, addr, size = m.groups()
    address = int(addr, 16)
    if address > ADDRESS_MASK:
        return None
    return TraceRecord(kind, address, int(size))


def parse_trace(lines: Iterable[str], strict: bool = False) -> Iterator[TraceRecord]:
    for lineno, line in enumerate(lines, start=1):
        record = parse_line(line)
        if record is not None:
            yield record
            continue
        if not line.strip():
            continue
        if strict:
            raise TraceFormatError(f"malformed trace line {line.strip()!r}", lineno, line)
        logger.debug("dropping malformed trace line %d: %r", lineno, line.rstrip('\n'))


def read_trace(path: str, strict: bool = False) -> Iterator[TraceRecord]:
    """Lazily parse the trace file at `path`."""
    # undecodable bytes become U+FFFD so the line is dropped like any other bad line
    with open(path, 'r', encoding='utf-8', errors='replace') as fh:
        yield from parse_trace(fh, strict=strict)
