"""Layered display-switch configuration and monitor resolution."""

from __future__ import annotations

from .domain import (
    EMPTY_INPUT_SOURCES,
    MONITOR_SLOT_COUNT,
    Configuration,
    InputSources,
    PerMonitorConfiguration,
    SwitchDirection,
    resolve,
)
from .loader import load, load_from_string

__all__ = [
    "EMPTY_INPUT_SOURCES",
    "MONITOR_SLOT_COUNT",
    "Configuration",
    "InputSources",
    "PerMonitorConfiguration",
    "SwitchDirection",
    "load",
    "load_from_string",
    "resolve",
]
