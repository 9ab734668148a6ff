"""Logging helpers for femtologging integration.

The display-switch daemon logs to the terminal or, when asked, to a file in
the platform log directory. These helpers keep level handling and
percent-style formatting consistent across the package.

Examples
--------
Configure logging and emit a message:

>>> level, used_default = configure_logging("DEBUG")
>>> log_info(get_logger(__name__), "Switching %s to %s", "DELL", "Hdmi1")
"""

from __future__ import annotations

import enum
import typing as typ
import warnings

from femtologging import basicConfig, get_logger

if typ.TYPE_CHECKING:
    from pathlib import Path


class LogLevel(enum.StrEnum):
    """Supported log levels for femtologging."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def normalise_level(level: str | None) -> tuple[LogLevel, bool]:
    """Map a requested level name onto a supported ``LogLevel``.

    Parameters
    ----------
    level : str | None
        Requested level name in any case, or None for the default.

    Returns
    -------
    tuple[LogLevel, bool]
        The effective level and whether the INFO default had to be used
        because the request was missing or unknown.
    """
    requested = level.strip().upper() if level else None
    if not requested or requested not in LogLevel.__members__:
        return (LogLevel.INFO, True)
    normalised = LogLevel(requested)
    if normalised is LogLevel.WARN:
        warnings.warn(
            "LogLevel.WARN is deprecated; use LogLevel.WARNING instead.",
            DeprecationWarning,
            stacklevel=3,
        )
        normalised = LogLevel.WARNING
    return (normalised, False)


def configure_logging(
    level: str | None,
    *,
    force: bool = False,
    log_file: Path | None = None,
) -> tuple[str, bool]:
    """Configure femtologging and return the normalised level.

    Parameters
    ----------
    level : str | None
        Requested log level, or None to use the default.
    force : bool, optional
        Whether to force reconfiguration of logging handlers.
    log_file : Path | None, optional
        File that receives log records, typically
        ``display_switch.paths.log_file_path()``. Records then go to the file
        only; terminal output is not kept alongside it.

    Returns
    -------
    tuple[str, bool]
        A tuple of (effective_level, used_default), where used_default is True
        when the input was missing or invalid.
    """
    normalised, used_default = normalise_level(level)
    if log_file is None:
        basicConfig(level=normalised, force=force)
    else:
        basicConfig(level=normalised, filename=str(log_file), force=force)
    return (normalised, used_default)


class _SupportsLog(typ.Protocol):
    """Protocol for loggers supporting the femtologging API."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> None: ...


def _emit(
    logger: _SupportsLog,
    level: LogLevel,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None,
) -> None:
    """Format a percent-style template and emit it at ``level``."""
    message = template % args if args else template
    logger.log(level, message, exc_info=exc_info, stack_info=False)


def log_debug(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Format and emit a DEBUG log message."""
    _emit(logger, LogLevel.DEBUG, template, args, exc_info)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Format and emit an INFO log message.

    Parameters
    ----------
    logger : _SupportsLog
        Logger instance that supports the femtologging log API.
    template : str
        Percent-style format string for the log message.
    *args : object
        Arguments interpolated into the template.
    exc_info : object | None, optional
        Exception info to attach to the log record.

    Raises
    ------
    TypeError
        If the template and arguments do not align for percent formatting.
    """
    _emit(logger, LogLevel.INFO, template, args, exc_info)


__all__ = (
    "LogLevel",
    "configure_logging",
    "get_logger",
    "log_debug",
    "log_info",
    "normalise_level",
)
