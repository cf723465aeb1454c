"""Typed in-process event bus with scoped, freezable registrations.

The subpackages follow the layout of the runtime: ``core`` holds errors, type
aliases and the Result value, ``bus`` the registry itself, ``config`` the
YAML/pydantic declaration layer and ``telemetry`` the logging setup.
"""

from .bus import EventBus, EventDefinition, EventScope, RegistrationInfo, build_event_bus
from .core.result import Err, Ok, Result
from .core.types import EventKey, Handle

__all__ = [
    "EventBus",
    "EventDefinition",
    "EventKey",
    "EventScope",
    "Err",
    "Handle",
    "Ok",
    "RegistrationInfo",
    "Result",
    "build_event_bus",
]
