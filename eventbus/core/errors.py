"""Error hierarchy shared by the event bus subsystems.

Bus-level operations raise the classes below; they signal programmer errors
(unknown names, duplicate ids, malformed scope ids) that correct code should
not hit. Scope-level operations carry the same classes inside a
:class:`~eventbus.core.result.Result` instead of raising them.
"""
from __future__ import annotations


class CoreError(Exception):
    """Base class for all custom exceptions in the package."""


class ConfigurationError(CoreError):
    """Raised when configuration files are missing or invalid."""


class ResultError(CoreError):
    """Raised by :meth:`Result.expect` when the result holds an error."""


class EventBusError(CoreError):
    """Base error for event bus operations."""


class InvalidEventNameError(EventBusError):
    """Event name is empty or not a string."""

    def __init__(self, event_name: object):
        self.event_name = event_name
        super().__init__(f"Event name must be a non-empty string, got {event_name!r}.")


class DuplicateEventError(EventBusError):
    """Event with the same name has already been defined."""

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(f"Event '{event_name}' already exists.")


class UnknownEventError(EventBusError):
    """Event name was never defined on the bus."""

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(f"Event '{event_name}' not found.")


class AsyncNotAllowedError(EventBusError):
    """Async callback registered on an event defined without async support."""

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(
            f"Event '{event_name}' does not allow async callbacks."
        )


class SyncOnAsyncEventError(EventBusError):
    """Synchronous fire requested for an event that allows async callbacks."""

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(
            f"Cannot synchronously fire event '{event_name}' which allows "
            f"async callbacks; use emit_async."
        )


class InvalidCallbackError(EventBusError):
    """Object passed as a callback is not callable."""

    def __init__(self, callback: object):
        self.callback = callback
        super().__init__(f"Callback must be callable, got {type(callback).__name__}.")


class UnknownCallbackError(EventBusError):
    """Handle is unknown or its callback has already been removed."""

    def __init__(self, handle: str):
        self.handle = handle
        super().__init__(f"Callback with id '{handle}' not found.")


class InvalidScopeIdError(EventBusError):
    """Scope id is empty or contains characters outside ``\\w``."""

    def __init__(self, scope_id: str, reason: str):
        self.scope_id = scope_id
        super().__init__(f"Invalid scope id {scope_id!r}: {reason}")


class DuplicateScopeError(EventBusError):
    """Scope with the same id has already been created."""

    def __init__(self, scope_id: str):
        self.scope_id = scope_id
        super().__init__(f"Event scope with id '{scope_id}' has already been created.")


class UnknownScopeError(EventBusError):
    """Scope id was never created on the bus."""

    def __init__(self, scope_id: str):
        self.scope_id = scope_id
        super().__init__(f"Event scope '{scope_id}' does not exist.")


class ScopeFrozenError(EventBusError):
    """Registration or removal attempted through a frozen scope."""

    def __init__(self, scope_id: str):
        self.scope_id = scope_id
        super().__init__(f"Event scope '{scope_id}' has been frozen.")


class ForeignCallbackError(EventBusError):
    """Scope attempted to remove a callback registered through another scope."""

    def __init__(self, scope_id: str, handle: str, owner_scope_id: str):
        self.scope_id = scope_id
        self.handle = handle
        self.owner_scope_id = owner_scope_id
        owner = f"scope '{owner_scope_id}'" if owner_scope_id else "the bus directly"
        super().__init__(
            f"Scope '{scope_id}' cannot remove callback '{handle}' "
            f"registered through {owner}."
        )


class PendingResultError(EventBusError):
    """Callback fired through ``emit`` returned an awaitable."""

    def __init__(self, event_name: str, handle: str):
        self.event_name = event_name
        self.handle = handle
        super().__init__(
            f"Callback '{handle}' on event '{event_name}' returned an awaitable; "
            f"emit never awaits, use an event with allow_async and emit_async."
        )
