"""Convert a merged raw layer into a typed ``Configuration``.

This is the second loading phase. Each known field is converted explicitly;
the first failure aborts the conversion, so a configuration is either built
completely or not at all.
"""

from __future__ import annotations

import typing as typ

from display_switch.configuration.domain import (
    MONITOR_SLOT_COUNT,
    Configuration,
    InputSources,
    PerMonitorConfiguration,
)
from display_switch.errors import (
    InvalidInputSourceError,
    MissingRequiredFieldError,
    SourceReadError,
)
from display_switch.input_source import InputSource
from display_switch.logging import get_logger, log_debug

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from display_switch.configuration.layers import RawSection, RawValue

USB_DEVICE_KEY = "usb_device"
MONITOR_ID_KEY = "monitor_id"
ON_USB_CONNECT_KEY = "on_usb_connect"
ON_USB_DISCONNECT_KEY = "on_usb_disconnect"

MONITOR_SECTIONS: typ.Final[tuple[str, ...]] = tuple(
    f"monitor{slot}" for slot in range(1, MONITOR_SLOT_COUNT + 1)
)
_INPUT_SOURCE_KEYS: typ.Final = (ON_USB_CONNECT_KEY, ON_USB_DISCONNECT_KEY)
_TOP_LEVEL_KEYS: typ.Final = frozenset(
    {USB_DEVICE_KEY, *_INPUT_SOURCE_KEYS, *MONITOR_SECTIONS},
)
_SECTION_KEYS: typ.Final = frozenset({MONITOR_ID_KEY, *_INPUT_SOURCE_KEYS})

logger = get_logger(__name__)


def _scalar(raw: cabc.Mapping[str, RawValue], key: str, field: str) -> str | None:
    value = raw.get(key)
    if isinstance(value, dict):
        msg = f"Configuration field {field!r} must be a value, not a section."
        raise SourceReadError(msg)
    return value


def _input_source(
    raw: cabc.Mapping[str, RawValue],
    key: str,
    field: str,
) -> InputSource | None:
    token = _scalar(raw, key, field)
    if token is None:
        return None
    try:
        return InputSource.parse(token)
    except InvalidInputSourceError as exc:
        raise InvalidInputSourceError(token, field=field) from exc


def _input_sources(raw: cabc.Mapping[str, RawValue], scope: str) -> InputSources:
    prefix = f"{scope}." if scope else ""
    return InputSources(
        on_usb_connect=_input_source(
            raw, ON_USB_CONNECT_KEY, f"{prefix}{ON_USB_CONNECT_KEY}"
        ),
        on_usb_disconnect=_input_source(
            raw, ON_USB_DISCONNECT_KEY, f"{prefix}{ON_USB_DISCONNECT_KEY}"
        ),
    )


def _log_unknown(keys: cabc.Iterable[str], known: frozenset[str], scope: str) -> None:
    for key in sorted(set(keys) - known):
        log_debug(logger, "Ignoring unknown configuration key %s%s", scope, key)


def _monitor(section_name: str, section: RawSection) -> PerMonitorConfiguration:
    _log_unknown(section, _SECTION_KEYS, f"{section_name}.")
    field = f"{section_name}.{MONITOR_ID_KEY}"
    monitor_id = _scalar(section, MONITOR_ID_KEY, field)
    if monitor_id is None:
        raise MissingRequiredFieldError(field)
    return PerMonitorConfiguration(
        monitor_id=monitor_id,
        input_sources=_input_sources(section, section_name),
    )


def _monitor_slot(
    raw: cabc.Mapping[str, RawValue],
    section_name: str,
) -> PerMonitorConfiguration | None:
    section = raw.get(section_name)
    if section is None:
        return None
    if not isinstance(section, dict):
        msg = f"Configuration field {section_name!r} must be a section."
        raise SourceReadError(msg)
    return _monitor(section_name, section)


def build_configuration(raw: cabc.Mapping[str, RawValue]) -> Configuration:
    """Convert a merged raw layer into a ``Configuration``.

    Parameters
    ----------
    raw : Mapping[str, RawValue]
        Merged file and environment layers with lower-cased names.

    Returns
    -------
    Configuration
        The typed configuration. ``usb_device`` is lower-cased; per-monitor
        overrides are stored as configured and merged only at resolution.

    Raises
    ------
    MissingRequiredFieldError
        If ``usb_device`` or a present section's ``monitor_id`` is absent.
    InvalidInputSourceError
        If any input-source value cannot be parsed.
    SourceReadError
        If a value appears where a section is expected, or vice versa.
    """
    _log_unknown(raw, _TOP_LEVEL_KEYS, "")
    usb_device = _scalar(raw, USB_DEVICE_KEY, USB_DEVICE_KEY)
    if usb_device is None:
        raise MissingRequiredFieldError(USB_DEVICE_KEY)
    return Configuration(
        usb_device=usb_device.lower(),
        input_sources=_input_sources(raw, ""),
        monitors=tuple(_monitor_slot(raw, name) for name in MONITOR_SECTIONS),
    )


__all__ = (
    "MONITOR_ID_KEY",
    "MONITOR_SECTIONS",
    "ON_USB_CONNECT_KEY",
    "ON_USB_DISCONNECT_KEY",
    "USB_DEVICE_KEY",
    "build_configuration",
)
