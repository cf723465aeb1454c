"""Configuration loading and validation package."""

from .loader import load_bus_config
from .models import BusConfig, EventConfig, LoggingConfig, ScopeConfig

__all__ = [
    "BusConfig",
    "EventConfig",
    "LoggingConfig",
    "ScopeConfig",
    "load_bus_config",
]
