"""YAML loader for the config subsystem.

The helper here consumes one YAML file, validates it via models.py and
returns a typed :class:`BusConfig`. The expected layout is::

    events:
      - name: ping
      - name: shutdown
        allow_async: true
    scopes:
      - id: storage
      - id: legacy_plugin
        frozen: true
    logging:
      level: DEBUG
      log_dir: logs
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import ValidationError

from eventbus.core.errors import ConfigurationError

from .models import BusConfig

logger = logging.getLogger("eventbus.config")

_DEFAULT_CONFIG_PATH = Path("config") / "eventbus.yml"


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"YAML root must be a mapping in {path}")
    return data


def load_bus_config(path: Path | str = _DEFAULT_CONFIG_PATH) -> BusConfig:
    """Load an event bus config file (events, scopes, logging).

    Validation errors from pydantic are re-raised as
    :class:`ConfigurationError` naming the offending file.
    """

    path = Path(path)
    data = _read_yaml(path)
    try:
        config = BusConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid bus config in {path}: {exc}") from exc
    logger.debug(
        "Bus config loaded",
        extra={
            "config_path": str(path),
            "n_events": len(config.events),
            "n_scopes": len(config.scopes),
        },
    )
    return config
