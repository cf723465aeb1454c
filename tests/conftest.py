from __future__ import annotations

import asyncio
from pathlib import Path
from textwrap import dedent
from typing import Any, Callable

import pytest

from eventbus.bus.event_bus import EventBus


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def ping_bus(bus: EventBus) -> EventBus:
    bus.define("ping")
    bus.define("shutdown", allow_async=True)
    return bus


class CallRecorder:
    """Collects ``(label, args)`` tuples in call order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def make(self, label: str) -> Callable[..., None]:
        def _callback(*args: Any) -> None:
            self.calls.append((label, args))

        _callback.__qualname__ = f"recorder.{label}"
        return _callback

    def make_async(self, label: str, delay: float = 0.0) -> Callable[..., Any]:
        async def _callback(*args: Any) -> None:
            if delay:
                await asyncio.sleep(delay)
            self.calls.append((label, args))

        _callback.__qualname__ = f"recorder.{label}"
        return _callback

    @property
    def labels(self) -> list[str]:
        return [label for label, _ in self.calls]


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(dedent(content), encoding="utf-8")
        return path

    return _write
