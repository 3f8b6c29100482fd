"""Exceptions raised outside the simulation core.

The core (geometry, cache store, access engine) never raises: it trusts the
configuration and trace layers to hand it validated input.
"""
from typing import Optional


class TraceSimError(Exception):
    """Base class for all tracesim errors."""


class ConfigError(TraceSimError, ValueError):
    """Invalid or missing simulation configuration."""


class TraceFormatError(TraceSimError, ValueError):
    """A trace line could not be parsed (only raised in strict mode)."""

    def __init__(self, message: str, lineno: Optional[int] = None, line: Optional[str] = None):
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)
        self.lineno = lineno
        self.line = line
