"""Raw configuration layers.

Loading happens in two phases. This module is the first: each source (the INI
file, then the environment) is read into a loosely typed, string-keyed
mapping, and the mappings are merged in precedence order. Nothing here knows
what the keys mean; ``display_switch.configuration.mapping`` converts the
merged mapping into typed values.

A layer maps top-level keys to strings and section names to
``{key: value}`` dictionaries::

    {
        "usb_device": "dead:beef",
        "on_usb_connect": "Hdmi1",
        "monitor1": {"monitor_id": "dell", "on_usb_connect": "0x0f"},
    }
"""

from __future__ import annotations

import configparser
import typing as typ

from display_switch.errors import SourceReadError
from display_switch.logging import get_logger, log_debug

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

type RawSection = dict[str, str]
type RawValue = str | RawSection
type RawLayer = dict[str, RawValue]

#: Prefix shared by environment variables that override file keys.
ENV_PREFIX = "DISPLAY_SWITCH"
#: Separates a section name from a key inside an environment variable name.
ENV_SECTION_SEPARATOR = "__"

_TOP_LEVEL_SECTION = "display-switch:top-level"
_UNUSED_DEFAULT_SECTION = "display-switch:defaults"
_QUOTES = frozenset({'"', "'"})

logger = get_logger(__name__)


def _unquote(value: str) -> str:
    stripped = value.strip()
    if len(stripped) >= 2 and stripped[0] == stripped[-1] and stripped[0] in _QUOTES:
        return stripped[1:-1]
    return stripped


def _assign_section(layer: RawLayer, name: str, values: RawSection) -> None:
    existing = layer.get(name)
    if existing is None:
        layer[name] = dict(values)
    elif isinstance(existing, dict):
        existing.update(values)
    else:
        msg = f"Configuration key {name!r} is both a value and a section."
        raise SourceReadError(msg)


def _assign_value(layer: RawLayer, name: str, value: str) -> None:
    if isinstance(layer.get(name), dict):
        msg = f"Configuration key {name!r} is both a section and a value."
        raise SourceReadError(msg)
    layer[name] = value


def parse_ini_text(text: str, origin: str = "<string>") -> RawLayer:
    """Parse INI text into a raw layer.

    Keys that appear before the first section header are top-level keys.
    Section and key names are lower-cased and values lose one pair of
    surrounding quotes.

    Parameters
    ----------
    text : str
        INI document.
    origin : str, optional
        Name of the source, used in error messages.

    Returns
    -------
    RawLayer
        The parsed layer.

    Raises
    ------
    SourceReadError
        If the text is not valid INI.
    """
    parser = configparser.ConfigParser(
        interpolation=None,
        default_section=_UNUSED_DEFAULT_SECTION,
    )
    try:
        parser.read_string(f"[{_TOP_LEVEL_SECTION}]\n{text}", source=origin)
    except configparser.Error as exc:
        msg = f"Failed to parse configuration {origin}: {exc}"
        raise SourceReadError(msg) from exc

    layer: RawLayer = {}
    for section in parser.sections():
        values = {key: _unquote(value) for key, value in parser.items(section)}
        if section == _TOP_LEVEL_SECTION:
            for key, value in values.items():
                _assign_value(layer, key, value)
        else:
            _assign_section(layer, section.strip().lower(), values)
    return layer


def read_file_layer(path: Path) -> RawLayer:
    """Read and parse the INI configuration file at ``path``.

    Raises
    ------
    SourceReadError
        If the file cannot be read or is not valid INI.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read configuration file {path}: {exc}"
        raise SourceReadError(msg) from exc
    return parse_ini_text(text, origin=str(path))


def read_environment_layer(
    environ: cabc.Mapping[str, str],
    prefix: str = ENV_PREFIX,
) -> RawLayer:
    """Collect configuration overrides from environment variables.

    ``DISPLAY_SWITCH_USB_DEVICE`` sets the top-level ``usb_device`` key and
    ``DISPLAY_SWITCH_MONITOR1__MONITOR_ID`` sets ``monitor_id`` in the
    ``monitor1`` section. Other variables are ignored.

    Parameters
    ----------
    environ : Mapping[str, str]
        Environment to scan, usually ``os.environ``.
    prefix : str, optional
        Variable name prefix, without the trailing underscore.

    Returns
    -------
    RawLayer
        Overrides keyed by lower-cased names.
    """
    marker = f"{prefix.upper()}_"
    layer: RawLayer = {}
    for name in sorted(environ):
        if not name.upper().startswith(marker):
            continue
        key = name[len(marker) :].lower()
        section, separator, option = key.partition(ENV_SECTION_SEPARATOR)
        if not separator:
            _assign_value(layer, key, environ[name])
        elif section and option:
            _assign_section(layer, section, {option: environ[name]})
        else:
            log_debug(logger, "Ignoring malformed environment override %s", name)
    return layer


def merge_layers(*layers: cabc.Mapping[str, RawValue]) -> RawLayer:
    """Merge raw layers, later layers winning key by key.

    Sections are merged per key, so an environment override of one section key
    leaves the file's other keys in that section untouched. The inputs are not
    modified.

    Raises
    ------
    SourceReadError
        If one layer uses a name as a section and another as a plain value.
    """
    merged: RawLayer = {}
    for layer in layers:
        for key, value in layer.items():
            if isinstance(value, dict):
                _assign_section(merged, key, value)
            else:
                _assign_value(merged, key, value)
    return merged


__all__ = (
    "ENV_PREFIX",
    "ENV_SECTION_SEPARATOR",
    "RawLayer",
    "RawSection",
    "RawValue",
    "merge_layers",
    "parse_ini_text",
    "read_environment_layer",
    "read_file_layer",
)
