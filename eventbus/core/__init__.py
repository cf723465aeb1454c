"""Core primitives shared across all subsystems.

This module aggregates the error classes, type aliases and the Result value
used by the bus, config and telemetry packages. Higher level packages import
from here to avoid circular dependencies.
"""

from . import errors, result, types

__all__ = ["errors", "result", "types"]
