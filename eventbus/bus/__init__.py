"""Event bus package: catalog, callback registry and scopes."""
from .event_bus import EventBus
from .factory import build_event_bus
from .models import EventDefinition, RegistrationInfo
from .scope import EventScope

__all__ = [
    "EventBus",
    "EventDefinition",
    "EventScope",
    "RegistrationInfo",
    "build_event_bus",
]
