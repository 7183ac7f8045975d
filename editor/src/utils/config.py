"""Configuration loading for the panel store

Reads optional display defaults from a JSON file:

    {
      "panel_width": 400,
      "panel_height": 300,
      "dancer_opacity": 1.0,
      "symbol_opacity": 0.5,
      "log_level": "DEBUG"
    }

Missing file or missing keys fall back to the values in constants.

At startup, configure() loads the file and applies its log level:

    store = PanelStore(config=configure(path))
"""

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from constants import (
    DEFAULT_PANEL_WIDTH, DEFAULT_PANEL_HEIGHT, OPACITY_FULL, DEFAULT_LOG_LEVEL
)
from utils.logger import loggerRaise, setup_logging

_logger = logging.getLogger('Config')


@dataclass(frozen=True)
class StoreConfig:
    """Display defaults applied when a PanelStore is created"""
    panel_width: float = DEFAULT_PANEL_WIDTH
    panel_height: float = DEFAULT_PANEL_HEIGHT
    dancer_opacity: float = OPACITY_FULL
    symbol_opacity: float = OPACITY_FULL
    log_level: str = DEFAULT_LOG_LEVEL


_NUMERIC_KEYS = {'panel_width', 'panel_height', 'dancer_opacity', 'symbol_opacity'}


def load_config(path: Optional[str] = None) -> StoreConfig:
    """Load store configuration from a JSON file

    Args:
        path: Path to the JSON config file, or None for defaults

    Returns:
        StoreConfig with file values overriding the defaults

    Raises:
        ValueError: If the file is not a JSON object or holds invalid values
    """
    config = StoreConfig()
    if path is None or not os.path.exists(path):
        return config

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a JSON object, got {type(data).__name__}")
        overrides = _validated_overrides(data)
    except (json.JSONDecodeError, ValueError) as e:
        loggerRaise(ValueError(f"Invalid config file {path}: {e}"), "Error loading config")

    _logger.debug(f"Loaded config from {path}: {sorted(overrides)}")
    return replace(config, **overrides)


def _validated_overrides(data: dict) -> dict:
    known = {f.name for f in fields(StoreConfig)}
    overrides = {}

    for key, value in data.items():
        if key not in known:
            _logger.warning(f"Ignoring unknown config key: {key}")
            continue

        if key in _NUMERIC_KEYS:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{key} must be a number, got {value!r}")
            if key.startswith('panel_') and not value > 0:
                raise ValueError(f"{key} must be positive, got {value}")
            if key.endswith('_opacity') and not 0.0 <= value <= 1.0:
                raise ValueError(f"{key} must be between 0 and 1, got {value}")
        elif not isinstance(value, str):
            raise ValueError(f"{key} must be a string, got {value!r}")
        elif key == 'log_level' and not isinstance(getattr(logging, value.upper(), None), int):
            raise ValueError(f"Unknown log level: {value!r}")

        overrides[key] = value

    return overrides


def configure(path: Optional[str] = None) -> StoreConfig:
    """Load the config file and apply its logging level

    Args:
        path: Path to the JSON config file, or None for defaults

    Returns:
        The loaded StoreConfig
    """
    config = load_config(path)
    setup_logging(config.log_level)
    return config
