"""Scope adapter handed to components that register their own callbacks.

An :class:`EventScope` holds nothing but a back-reference to the bus and its
scope id; all state lives in the bus. Failures come back as
:class:`~eventbus.core.result.Result` values because a frozen scope is an
expected condition (the owning subsystem shut down) that callers branch on.
A scope can check whether it is frozen but cannot freeze or unfreeze itself.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, overload

from eventbus.core.errors import EventBusError, ForeignCallbackError, ScopeFrozenError
from eventbus.core.result import Err, Ok, Result
from eventbus.core.types import (
    AsyncCallback,
    EventKey,
    EventName,
    Handle,
    P,
    Predicate,
    SyncCallback,
)

from .models import EventDefinition, RegistrationInfo

if TYPE_CHECKING:  # pragma: no cover
    from .event_bus import EventBus

logger = logging.getLogger("eventbus.bus")


class EventScope:
    """Register and remove callbacks on behalf of a single component."""

    __slots__ = ("_bus", "_scope_id")

    def __init__(self, bus: "EventBus", scope_id: str) -> None:
        self._bus = bus
        self._scope_id = scope_id

    @property
    def scope_id(self) -> str:
        return self._scope_id

    def is_frozen(self) -> bool:
        return self._bus.is_frozen(self._scope_id)

    @overload
    def on_sync(self, name: EventKey[P], callback: Callable[P, None]) -> Result[Handle]: ...

    @overload
    def on_sync(self, name: str, callback: SyncCallback) -> Result[Handle]: ...

    def on_sync(self, name: EventName, callback: SyncCallback) -> Result[Handle]:
        if self.is_frozen():
            return self._reject(ScopeFrozenError(self._scope_id), "on_sync")
        try:
            return Ok(self._bus.on_sync(name, callback, self._scope_id))
        except EventBusError as exc:
            return self._reject(exc, "on_sync")

    @overload
    def on_async(
        self, name: EventKey[P], callback: Callable[P, Awaitable[None]]
    ) -> Result[Handle]: ...

    @overload
    def on_async(self, name: str, callback: AsyncCallback) -> Result[Handle]: ...

    def on_async(self, name: EventName, callback: AsyncCallback) -> Result[Handle]:
        if self.is_frozen():
            return self._reject(ScopeFrozenError(self._scope_id), "on_async")
        try:
            return Ok(self._bus.on_async(name, callback, self._scope_id))
        except EventBusError as exc:
            return self._reject(exc, "on_async")

    def off(self, handle: Handle) -> Result[None]:
        """Remove a callback previously registered through this scope."""

        if self.is_frozen():
            return self._reject(ScopeFrozenError(self._scope_id), "off")
        try:
            owner = self._bus.describe(handle).scope_id
            if owner != self._scope_id:
                return self._reject(ForeignCallbackError(self._scope_id, handle, owner), "off")
            self._bus.off(handle)
        except EventBusError as exc:
            return self._reject(exc, "off")
        return Ok()

    def list_events(self) -> list[EventDefinition]:
        return self._bus.list_events()

    def list_callbacks(
        self,
        predicate: Predicate[RegistrationInfo] | None = None,
    ) -> list[RegistrationInfo]:
        """Live registrations made through this scope."""

        callbacks = self._bus.list_callbacks(lambda info: info.scope_id == self._scope_id)
        if predicate is None:
            return callbacks
        return [info for info in callbacks if predicate(info)]

    def _reject(self, error: EventBusError, operation: str) -> Result[Any]:
        logger.warning(
            "Scope operation rejected",
            extra={
                "scope_id": self._scope_id,
                "operation": operation,
                "error_type": type(error).__name__,
                "error": str(error),
            },
        )
        return Err(error)

    def __repr__(self) -> str:
        return f"EventScope(scope_id={self._scope_id!r})"


__all__ = ["EventScope"]
