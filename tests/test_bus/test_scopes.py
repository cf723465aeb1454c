from __future__ import annotations

import asyncio

import pytest

from eventbus.bus.event_bus import EventBus
from eventbus.bus.scope import EventScope
from eventbus.core.errors import (
    AsyncNotAllowedError,
    DuplicateScopeError,
    ForeignCallbackError,
    InvalidScopeIdError,
    ScopeFrozenError,
    UnknownCallbackError,
    UnknownEventError,
    UnknownScopeError,
)
from eventbus.core.types import EventKey


def test_create_scope_should_accept_word_ids(bus: EventBus) -> None:
    scope = bus.create_scope("abc_1")
    assert isinstance(scope, EventScope)
    assert scope.scope_id == "abc_1"
    assert scope.is_frozen() is False


@pytest.mark.parametrize("scope_id", ["", "has space", "has-dash", "tab\t", "trailing\n", "ümlaut"])
def test_create_scope_should_reject_invalid_ids(bus: EventBus, scope_id: str) -> None:
    with pytest.raises(InvalidScopeIdError):
        bus.create_scope(scope_id)
    assert bus.list_scopes() == []


def test_create_scope_should_reject_duplicates(bus: EventBus) -> None:
    bus.create_scope("S1")
    with pytest.raises(DuplicateScopeError) as exc_info:
        bus.create_scope("S1")
    assert exc_info.value.scope_id == "S1"


def test_freeze_controls_should_reject_unknown_scope(bus: EventBus) -> None:
    with pytest.raises(UnknownScopeError):
        bus.freeze_scope("nope")
    with pytest.raises(UnknownScopeError):
        bus.unfreeze_scope("nope")
    with pytest.raises(UnknownScopeError):
        bus.is_frozen("nope")


def test_scope_should_not_expose_freeze_controls(bus: EventBus) -> None:
    scope = bus.create_scope("S1")
    assert not hasattr(scope, "freeze")
    assert not hasattr(scope, "unfreeze")
    assert not hasattr(scope, "freeze_scope")


def test_scope_registration_should_tag_scope_id(ping_bus: EventBus, recorder) -> None:
    scope = ping_bus.create_scope("S1")
    result = scope.on_sync("ping", recorder.make("a"))
    assert result.success
    handle = result.unwrap()
    assert ping_bus.describe(handle).scope_id == "S1"

    async_result = scope.on_async("shutdown", recorder.make_async("b"))
    assert async_result.success
    assert [info.event_name for info in scope.list_callbacks()] == ["ping", "shutdown"]


def test_scope_should_wrap_bus_errors_in_result(ping_bus: EventBus, recorder) -> None:
    scope = ping_bus.create_scope("S1")

    unknown = scope.on_sync("missing", recorder.make("a"))
    assert not unknown.success
    assert isinstance(unknown.error, UnknownEventError)

    not_async = scope.on_async("ping", recorder.make_async("a"))
    assert isinstance(not_async.error, AsyncNotAllowedError)

    missing = scope.off("00000000-0000-0000-0000-000000000000")  # type: ignore[arg-type]
    assert isinstance(missing.error, UnknownCallbackError)
    assert ping_bus.list_callbacks() == []


def test_frozen_scope_should_reject_without_mutation(ping_bus: EventBus, recorder) -> None:
    scope = ping_bus.create_scope("abc_1")
    handle = scope.on_sync("ping", recorder.make("a")).unwrap()
    ping_bus.freeze_scope("abc_1")
    assert scope.is_frozen() is True
    before = ping_bus.list_callbacks()

    results = [
        scope.on_sync("ping", recorder.make("b")),
        scope.on_async("shutdown", recorder.make_async("c")),
        scope.off(handle),
    ]
    for result in results:
        assert not result.success
        assert isinstance(result.error, ScopeFrozenError)

    assert ping_bus.list_callbacks() == before
    ping_bus.emit("ping")
    assert recorder.labels == ["a"]

    ping_bus.unfreeze_scope("abc_1")
    assert scope.is_frozen() is False
    assert scope.on_sync("ping", recorder.make("b")).success
    assert scope.on_async("shutdown", recorder.make_async("c")).success
    assert scope.off(handle).success
    assert len(ping_bus.list_callbacks()) == 2


def test_freezing_one_scope_should_not_affect_others(ping_bus: EventBus, recorder) -> None:
    storage = ping_bus.create_scope("storage")
    network = ping_bus.create_scope("network")
    ping_bus.freeze_scope("storage")
    assert not storage.on_sync("ping", recorder.make("a")).success
    assert network.on_sync("ping", recorder.make("b")).success
    assert ping_bus.list_scopes() == [("storage", True), ("network", False)]


def test_scope_off_should_reject_foreign_callbacks(ping_bus: EventBus, recorder) -> None:
    first = ping_bus.create_scope("first")
    second = ping_bus.create_scope("second")
    handle = first.on_sync("ping", recorder.make("a")).unwrap()
    direct = ping_bus.on_sync("ping", recorder.make("b"))

    foreign = second.off(handle)
    assert isinstance(foreign.error, ForeignCallbackError)
    assert foreign.error.owner_scope_id == "first"

    bus_owned = first.off(direct)
    assert isinstance(bus_owned.error, ForeignCallbackError)
    assert bus_owned.error.owner_scope_id == ""

    ping_bus.emit("ping")
    assert recorder.labels == ["a", "b"]


def test_scope_off_twice_should_return_error(ping_bus: EventBus, recorder) -> None:
    scope = ping_bus.create_scope("S1")
    handle = scope.on_sync("ping", recorder.make("a")).unwrap()
    assert scope.off(handle).success
    second = scope.off(handle)
    assert isinstance(second.error, UnknownCallbackError)


def test_scope_listings_should_filter_callbacks_but_not_events(ping_bus: EventBus, recorder) -> None:
    scope = ping_bus.create_scope("S1")
    scope.on_sync("ping", recorder.make("a"))
    ping_bus.on_sync("ping", recorder.make("b"))
    assert [event.name for event in scope.list_events()] == ["ping", "shutdown"]
    assert [info.scope_id for info in scope.list_callbacks()] == ["S1"]
    assert scope.list_callbacks(lambda info: info.event_name == "shutdown") == []


def test_frozen_scope_callbacks_should_keep_firing(ping_bus: EventBus, recorder) -> None:
    scope = ping_bus.create_scope("S1")
    scope.on_async("shutdown", recorder.make_async("a"))
    ping_bus.freeze_scope("S1")
    asyncio.run(ping_bus.emit_async("shutdown"))
    assert recorder.labels == ["a"]


def test_scope_ping_end_to_end(bus: EventBus, recorder) -> None:
    bus.define("ping", False)
    scope = bus.create_scope("S1")
    handle_a = scope.on_sync("ping", recorder.make("a")).unwrap()
    scope.on_sync("ping", recorder.make("b")).unwrap()

    bus.emit("ping")
    assert recorder.labels == ["a", "b"]

    assert scope.off(handle_a).success
    bus.emit("ping")
    assert recorder.labels == ["a", "b", "b"]


def test_scope_should_accept_event_keys(bus: EventBus) -> None:
    login = EventKey[[str, int]]("on_login")
    bus.define(login)
    scope = bus.create_scope("auth")
    calls: list[tuple[str, int]] = []

    def on_login(username: str, timestamp: int) -> None:
        calls.append((username, timestamp))

    handle = scope.on_sync(login, on_login).unwrap()
    bus.emit(login, "alice", 1)
    assert calls == [("alice", 1)]
    assert bus.describe(handle).scope_id == "auth"
    assert scope.off(handle).success
