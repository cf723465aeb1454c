"""Typed configuration models for declaring an event bus up front.

The config subsystem relies on pydantic to validate YAML files and to provide
strongly-typed objects to :func:`eventbus.bus.factory.build_event_bus`. A bus
config lists the events to define, the scopes to create and the logging
settings used by :func:`eventbus.telemetry.configure_logging`.
"""
from __future__ import annotations

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_SCOPE_ID_PATTERN = re.compile(r"\w+", re.ASCII)


class EventConfig(BaseModel):
    """Single event definition (name + async flag)."""

    name: str = Field(..., min_length=1)
    allow_async: bool = False

    model_config = ConfigDict(frozen=True)


class ScopeConfig(BaseModel):
    """Scope created at startup; ``frozen`` scopes are frozen right away."""

    id: str = Field(..., min_length=1)
    frozen: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("id")
    @classmethod
    def _check_word_characters(cls, value: str) -> str:
        if not _SCOPE_ID_PATTERN.fullmatch(value):
            raise ValueError("scope id must only contain letters, digits and underscore")
        return value


class LoggingConfig(BaseModel):
    """Logging switches for the JSON log handlers."""

    level: str = Field("INFO")
    log_dir: Optional[str] = None
    logger_name: str = Field("eventbus", min_length=1)

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level


class BusConfig(BaseModel):
    """Top-level bus config: events, scopes and logging.

    Event names and scope ids must be unique; the bus itself would reject the
    duplicates later, but failing at load time points at the config file.
    """

    events: List[EventConfig] = Field(default_factory=list)
    scopes: List[ScopeConfig] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def _reject_duplicates(self) -> "BusConfig":
        names = [event.name for event in self.events]
        duplicated_names = sorted({name for name in names if names.count(name) > 1})
        if duplicated_names:
            raise ValueError(f"duplicate event names: {duplicated_names}")
        ids = [scope.id for scope in self.scopes]
        duplicated_ids = sorted({scope_id for scope_id in ids if ids.count(scope_id) > 1})
        if duplicated_ids:
            raise ValueError(f"duplicate scope ids: {duplicated_ids}")
        return self
