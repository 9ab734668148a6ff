"""Pick the input source a monitor should switch to on USB hotplug events."""

from __future__ import annotations

from .configuration import (
    Configuration,
    InputSources,
    PerMonitorConfiguration,
    SwitchDirection,
    load,
    load_from_string,
    resolve,
)
from .errors import (
    ConfigurationError,
    DirectoryResolutionError,
    InvalidInputSourceError,
    MissingRequiredFieldError,
    SourceReadError,
)
from .input_source import InputSource, SymbolicInputSource

__all__ = [
    "Configuration",
    "ConfigurationError",
    "DirectoryResolutionError",
    "InputSource",
    "InputSources",
    "InvalidInputSourceError",
    "MissingRequiredFieldError",
    "PerMonitorConfiguration",
    "SourceReadError",
    "SwitchDirection",
    "SymbolicInputSource",
    "load",
    "load_from_string",
    "resolve",
]
