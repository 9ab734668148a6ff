"""Load the display-switch configuration once at start-up.

The INI file is read first and environment variables prefixed with
``DISPLAY_SWITCH`` are applied on top of it, so the environment wins on any
key both define. The merged layer is then converted into an immutable
``Configuration``. Any failure aborts the load.

Examples
--------
>>> config = load()  # platform default path, os.environ overlay
>>> config.resolve("DELL U2720Q", SwitchDirection.CONNECT)
"""

from __future__ import annotations

import os
import typing as typ

from display_switch import paths
from display_switch.configuration.layers import (
    ENV_PREFIX,
    merge_layers,
    parse_ini_text,
    read_environment_layer,
    read_file_layer,
)
from display_switch.configuration.mapping import build_configuration
from display_switch.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from display_switch.configuration.domain import Configuration
    from display_switch.configuration.layers import RawLayer

logger = get_logger(__name__)


def _build(
    file_layer: RawLayer,
    environ: cabc.Mapping[str, str] | None,
) -> Configuration:
    layers = [file_layer]
    if environ is not None:
        layers.append(read_environment_layer(environ, ENV_PREFIX))
    return build_configuration(merge_layers(*layers))


def load(
    config_file: Path | None = None,
    *,
    environ: cabc.Mapping[str, str] | None = None,
) -> Configuration:
    """Load the configuration from a file and the environment.

    Parameters
    ----------
    config_file : Path | None, optional
        Configuration file to read. Defaults to
        ``display_switch.paths.config_file_path()``, whose directory is
        created if missing. The log directory is not touched here; callers
        that log to a file create it through
        ``display_switch.paths.log_file_path()``.
    environ : Mapping[str, str] | None, optional
        Environment overlay; ``os.environ`` when omitted.

    Returns
    -------
    Configuration
        The loaded configuration.

    Raises
    ------
    DirectoryResolutionError
        If the default configuration directory cannot be determined or created.
    SourceReadError
        If the file cannot be read or parsed, or the layers conflict.
    InvalidInputSourceError
        If an input-source value cannot be parsed.
    MissingRequiredFieldError
        If a required field is absent.
    """
    path = config_file if config_file is not None else paths.config_file_path()
    configuration = _build(
        read_file_layer(path),
        os.environ if environ is None else environ,
    )
    log_info(logger, "Configuration loaded (%s): %r", path, configuration)
    return configuration


def load_from_string(
    text: str,
    *,
    environ: cabc.Mapping[str, str] | None = None,
) -> Configuration:
    """Load a configuration from INI text.

    Unlike ``load`` no environment overlay is applied unless ``environ`` is
    given, and the filesystem is never touched.
    """
    return _build(parse_ini_text(text), environ)


__all__ = ("load", "load_from_string")
