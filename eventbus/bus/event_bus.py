"""In-process event bus: event catalog, callback registry and scopes.

Rules:
- Event names are unique; defining a name twice is an error
- Callbacks fire in registration order
- Removal tombstones the slot (``None``); indices never shift and cleared
  slots are never reused, so outstanding handles stay valid
- Handles are unique across the whole bus
- Async callbacks only on events defined with ``allow_async=True``
- ``emit`` refuses async-enabled events before invoking anything
- Callback exceptions are NOT caught; they abort the remaining pass
- Scopes are frozen/unfrozen only through the bus
- In-memory only, single logical thread, no locking
"""
from __future__ import annotations

import inspect
import logging
import re
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, overload

from eventbus.core.errors import (
    AsyncNotAllowedError,
    DuplicateEventError,
    DuplicateScopeError,
    InvalidCallbackError,
    InvalidEventNameError,
    InvalidScopeIdError,
    PendingResultError,
    SyncOnAsyncEventError,
    UnknownCallbackError,
    UnknownEventError,
    UnknownScopeError,
)
from eventbus.core.types import (
    AsyncCallback,
    EventKey,
    EventName,
    Handle,
    P,
    Predicate,
    SyncCallback,
    event_name,
)

from .models import CallbackEntry, EventDefinition, HandlerRef, RegistrationInfo, ScopeState
from .scope import EventScope

logger = logging.getLogger("eventbus.bus")

_SCOPE_ID_PATTERN = re.compile(r"\w+", re.ASCII)


class EventBus:
    """
    Registry of named events and the callbacks attached to them.

    Bus-level operations raise :class:`~eventbus.core.errors.EventBusError`
    subclasses. Components that want recoverable errors and collective
    freezing go through :meth:`create_scope`.
    """

    def __init__(self) -> None:
        self._events: Dict[str, EventDefinition] = {}
        self._callbacks: Dict[str, List[Optional[CallbackEntry]]] = {}
        self._registrations: Dict[Handle, HandlerRef] = {}
        self._scopes: Dict[str, ScopeState] = {}

    # ------------------------------------------------------------------
    # Event catalog
    # ------------------------------------------------------------------
    def define(self, name: EventName, allow_async: bool = False) -> None:
        """
        Declare a new event.

        Args:
            name:        Event name (or :class:`EventKey`)
            allow_async: Whether async callbacks may be registered. Events
                         allowing async callbacks can only be fired through
                         :meth:`emit_async`.

        Raises:
            InvalidEventNameError: Empty or non-string name
            DuplicateEventError:   Name already defined
        """
        key = event_name(name)
        if not isinstance(key, str) or not key:
            raise InvalidEventNameError(key)
        if key in self._events:
            raise DuplicateEventError(key)

        self._events[key] = EventDefinition(name=key, allow_async=bool(allow_async))
        self._callbacks[key] = []
        logger.info(
            "Event defined",
            extra={"event_name": key, "allow_async": bool(allow_async)},
        )

    def has_event(self, name: EventName) -> bool:
        return event_name(name) in self._events

    def list_events(self) -> list[EventDefinition]:
        """Return every defined event (a new list on each call)."""

        return list(self._events.values())

    # ------------------------------------------------------------------
    # Callback registry
    # ------------------------------------------------------------------
    @overload
    def on_sync(self, name: EventKey[P], callback: Callable[P, None], scope_id: str = "") -> Handle: ...

    @overload
    def on_sync(self, name: str, callback: SyncCallback, scope_id: str = "") -> Handle: ...

    def on_sync(
        self,
        name: EventName,
        callback: SyncCallback,
        scope_id: str = "",
    ) -> Handle:
        """Register a synchronous callback and return its handle.

        ``scope_id`` is filled in by :class:`EventScope`; direct callers leave
        it empty.
        """

        definition = self._require_event(event_name(name))
        return self._push(definition, callback, is_async=False, scope_id=scope_id)

    @overload
    def on_async(
        self, name: EventKey[P], callback: Callable[P, Awaitable[None]], scope_id: str = ""
    ) -> Handle: ...

    @overload
    def on_async(self, name: str, callback: AsyncCallback, scope_id: str = "") -> Handle: ...

    def on_async(
        self,
        name: EventName,
        callback: AsyncCallback,
        scope_id: str = "",
    ) -> Handle:
        """Register an async callback and return its handle.

        Raises:
            UnknownEventError:    Event never defined
            AsyncNotAllowedError: Event defined with ``allow_async=False``
        """

        definition = self._require_event(event_name(name))
        if not definition.allow_async:
            raise AsyncNotAllowedError(definition.name)
        return self._push(definition, callback, is_async=True, scope_id=scope_id)

    def off(self, handle: Handle) -> None:
        """Remove a callback by clearing its slot.

        Raises:
            UnknownCallbackError: Handle unknown or already removed
        """

        ref, entry = self._require_live(handle)
        self._callbacks[ref.event_name][ref.index] = None
        logger.debug(
            "Callback removed",
            extra={
                "handle": handle,
                "event_name": entry.event_name,
                "scope_id": entry.scope_id,
                "is_async": entry.is_async,
            },
        )

    def describe(self, handle: Handle) -> RegistrationInfo:
        """Return the event name and scope id a live handle belongs to."""

        _ref, entry = self._require_live(handle)
        return entry.info()

    def list_callbacks(
        self,
        predicate: Predicate[RegistrationInfo] | None = None,
    ) -> list[RegistrationInfo]:
        """Snapshot of live registrations across the bus, in registration order."""

        info: list[RegistrationInfo] = []
        for ref in self._registrations.values():
            entry = self._callbacks[ref.event_name][ref.index]
            if entry is not None:
                info.append(entry.info())
        if predicate is None:
            return info
        return [item for item in info if predicate(item)]

    def callback_count(self, name: EventName) -> int:
        """Number of live callbacks attached to ``name``."""

        key = self._require_event(event_name(name)).name
        return sum(1 for entry in self._callbacks[key] if entry is not None)

    # ------------------------------------------------------------------
    # Firing
    # ------------------------------------------------------------------
    @overload
    def emit(self, name: EventKey[P], *args: P.args, **kwargs: P.kwargs) -> None: ...

    @overload
    def emit(self, name: str, *args: Any, **kwargs: Any) -> None: ...

    def emit(self, name: EventName, *args: Any, **kwargs: Any) -> None:
        """
        Fire a synchronous event.

        Invokes every live callback in registration order. Exceptions raised by
        a callback propagate and the remaining callbacks are skipped.

        Raises:
            UnknownEventError:     Event never defined
            SyncOnAsyncEventError: Event allows async callbacks
            PendingResultError:    A callback returned an awaitable
        """
        definition = self._require_event(event_name(name))
        if definition.allow_async:
            raise SyncOnAsyncEventError(definition.name)

        callbacks = self._callbacks[definition.name]
        # Entries appended mid-fire wait for the next pass; tombstones set
        # mid-fire are honoured because the live list is indexed.
        for index in range(len(callbacks)):
            entry = callbacks[index]
            if entry is None:
                continue
            result = entry.callback(*args, **kwargs)
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                raise PendingResultError(entry.event_name, entry.handle)

    @overload
    async def emit_async(self, name: EventKey[P], *args: P.args, **kwargs: P.kwargs) -> None: ...

    @overload
    async def emit_async(self, name: str, *args: Any, **kwargs: Any) -> None: ...

    async def emit_async(self, name: EventName, *args: Any, **kwargs: Any) -> None:
        """
        Fire an event, awaiting each callback before starting the next.

        Both sync and async callbacks run, strictly in registration order.
        There is no timeout: a callback that never completes blocks the pass.

        Raises:
            UnknownEventError: Event never defined
        """
        definition = self._require_event(event_name(name))

        callbacks = self._callbacks[definition.name]
        for index in range(len(callbacks)):
            entry = callbacks[index]
            if entry is None:
                continue
            result = entry.callback(*args, **kwargs)
            if inspect.isawaitable(result):
                await result

    # ------------------------------------------------------------------
    # Scope manager
    # ------------------------------------------------------------------
    def create_scope(self, scope_id: str) -> EventScope:
        """
        Create a named scope for one component.

        Raises:
            InvalidScopeIdError: Empty id or characters outside [A-Za-z0-9_]
            DuplicateScopeError: Scope already created
        """
        if not isinstance(scope_id, str) or not scope_id:
            raise InvalidScopeIdError(
                str(scope_id),
                "must not be empty; the empty id marks callbacks registered directly on the bus",
            )
        if not _SCOPE_ID_PATTERN.fullmatch(scope_id):
            raise InvalidScopeIdError(
                scope_id,
                "must only contain lower and upper case letters, digits and underscore",
            )
        if scope_id in self._scopes:
            raise DuplicateScopeError(scope_id)

        self._scopes[scope_id] = ScopeState(scope_id=scope_id)
        logger.info("Event scope created", extra={"scope_id": scope_id})
        return EventScope(self, scope_id)

    def freeze_scope(self, scope_id: str) -> None:
        """Block registration and removal through ``scope_id``.

        Existing callbacks of the scope stay attached and keep firing.
        """

        self._require_scope(scope_id).frozen = True
        logger.info("Event scope frozen", extra={"scope_id": scope_id})

    def unfreeze_scope(self, scope_id: str) -> None:
        self._require_scope(scope_id).frozen = False
        logger.info("Event scope unfrozen", extra={"scope_id": scope_id})

    def is_frozen(self, scope_id: str) -> bool:
        return self._require_scope(scope_id).frozen

    def list_scopes(self) -> list[tuple[str, bool]]:
        """Return ``(scope_id, frozen)`` pairs in creation order."""

        return [(state.scope_id, state.frozen) for state in self._scopes.values()]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _require_event(self, name: str) -> EventDefinition:
        definition = self._events.get(name)
        if definition is None:
            raise UnknownEventError(name)
        return definition

    def _require_scope(self, scope_id: str) -> ScopeState:
        state = self._scopes.get(scope_id)
        if state is None:
            raise UnknownScopeError(scope_id)
        return state

    def _require_live(self, handle: Handle) -> Tuple[HandlerRef, CallbackEntry]:
        ref = self._registrations.get(handle)
        entry = None if ref is None else self._callbacks[ref.event_name][ref.index]
        if ref is None or entry is None:
            raise UnknownCallbackError(handle)
        return ref, entry

    def _push(
        self,
        definition: EventDefinition,
        callback: Callable[..., Any],
        *,
        is_async: bool,
        scope_id: str,
    ) -> Handle:
        if not callable(callback):
            raise InvalidCallbackError(callback)

        handle = Handle(str(uuid.uuid4()))
        callbacks = self._callbacks[definition.name]
        self._registrations[handle] = HandlerRef(
            event_name=definition.name,
            index=len(callbacks),
        )
        callbacks.append(
            CallbackEntry(
                handle=handle,
                is_async=is_async,
                callback=callback,
                event_name=definition.name,
                scope_id=scope_id,
            )
        )
        logger.debug(
            "Callback registered",
            extra={
                "handle": handle,
                "event_name": definition.name,
                "scope_id": scope_id,
                "is_async": is_async,
                "callback": getattr(callback, "__qualname__", repr(callback)),
            },
        )
        return handle


__all__ = ["EventBus"]
