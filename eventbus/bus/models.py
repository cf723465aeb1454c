"""Records owned by :class:`~eventbus.bus.event_bus.EventBus`."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from eventbus.core.types import Handle


@dataclass(frozen=True, slots=True)
class EventDefinition:
    """Declared event; immutable once defined."""

    name: str
    allow_async: bool = False


@dataclass(slots=True)
class CallbackEntry:
    """One slot of an event's callback list.

    Removed entries are replaced by ``None`` in the list, so the position of
    every other entry stays fixed for the lifetime of the bus.
    """

    handle: Handle
    is_async: bool
    callback: Callable[..., Any]
    event_name: str
    scope_id: str = ""

    def info(self) -> RegistrationInfo:
        return RegistrationInfo(handle=self.handle, scope_id=self.scope_id, event_name=self.event_name)


@dataclass(frozen=True, slots=True)
class HandlerRef:
    """Back-reference from a handle to its slot (O(1) removal)."""

    event_name: str
    index: int


@dataclass(frozen=True, slots=True)
class RegistrationInfo:
    """Public snapshot of a live registration.

    ``scope_id`` is the empty string for callbacks registered directly on the
    bus.
    """

    handle: Handle
    scope_id: str
    event_name: str


@dataclass(slots=True)
class ScopeState:
    scope_id: str
    frozen: bool = False


__all__ = [
    "EventDefinition",
    "CallbackEntry",
    "HandlerRef",
    "RegistrationInfo",
    "ScopeState",
]
