"""Shared type aliases for readability and contract enforcement.

Handles and event names are plain strings at runtime. The aliases below
keep them apart in signatures, and :class:`EventKey` lets a
caller bind an event name to a callback signature so static checkers can
verify the arguments passed to ``on_sync``/``emit``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, NewType, ParamSpec, TypeAlias, TypeVar, Union

P = ParamSpec("P")
T = TypeVar("T")

Handle = NewType("Handle", str)

Predicate: TypeAlias = Callable[[T], bool]
SyncCallback: TypeAlias = Callable[..., None]
AsyncCallback: TypeAlias = Callable[..., Awaitable[None]]


@dataclass(frozen=True)
class EventKey(Generic[P]):
    """Event name bound to the parameters its callbacks receive.

    ``LOGIN = EventKey[[str, int]]("on_login")`` declares an event whose
    callbacks take a username and a timestamp. Registration and firing are
    overloaded on the key, so a checker rejects callbacks and arguments that
    do not match. Every bus operation also accepts the bare name, unchecked.
    """

    name: str

    def __str__(self) -> str:
        return self.name


EventName: TypeAlias = Union[str, EventKey[...]]


def event_name(name: EventName) -> str:
    """Return the string name for ``name`` (key or plain string)."""

    if isinstance(name, EventKey):
        return name.name
    return name
