"""Build a ready-to-use bus from a :class:`BusConfig`."""
from __future__ import annotations

import logging
from typing import Dict, Tuple

from eventbus.config.models import BusConfig

from .event_bus import EventBus
from .scope import EventScope

logger = logging.getLogger("eventbus.bus")


def build_event_bus(config: BusConfig) -> Tuple[EventBus, Dict[str, EventScope]]:
    """Define every configured event and create every configured scope.

    Scopes flagged ``frozen`` are frozen after creation, so their components
    can inspect them but not register until the owner unfreezes them through
    the bus. Returns the bus and the scopes keyed by id.
    """

    bus = EventBus()
    for event in config.events:
        bus.define(event.name, allow_async=event.allow_async)

    scopes: Dict[str, EventScope] = {}
    for scope_cfg in config.scopes:
        scopes[scope_cfg.id] = bus.create_scope(scope_cfg.id)
        if scope_cfg.frozen:
            bus.freeze_scope(scope_cfg.id)

    logger.info(
        "Built event bus",
        extra={
            "n_events": len(config.events),
            "scope_ids": list(scopes),
            "frozen_scope_ids": [cfg.id for cfg in config.scopes if cfg.frozen],
        },
    )
    return bus, scopes


__all__ = ["build_event_bus"]
