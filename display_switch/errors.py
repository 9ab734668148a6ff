"""Exceptions raised while loading a display-switch configuration.

Every load-time failure is fatal: the loader raises one of these errors and
no partial configuration is produced. Resolution of a monitor against a
loaded configuration never raises.

Examples
--------
>>> from display_switch.errors import InvalidInputSourceError
>>> raise InvalidInputSourceError("not-a-source")
"""

import typing as typ


class ConfigurationError(Exception):
    """Base exception with structured metadata for configuration loading."""

    error_code: typ.ClassVar[str] = "configuration_error"
    default_retryable: typ.ClassVar[bool] = False

    code: str
    retryable: bool

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        retryable: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else type(self).error_code
        self.retryable = (
            type(self).default_retryable if retryable is None else retryable
        )


class DirectoryResolutionError(ConfigurationError):
    """Raised when a platform configuration or log directory is unusable."""

    error_code: typ.ClassVar[str] = "directory_resolution"


class SourceReadError(ConfigurationError):
    """Raised when the file or environment layer cannot be read or merged."""

    error_code: typ.ClassVar[str] = "source_read"


class InvalidInputSourceError(ConfigurationError, ValueError):
    """Raised when a token is not a symbolic, hexadecimal or decimal source.

    Attributes
    ----------
    token : str
        The offending token, exactly as supplied.
    """

    error_code: typ.ClassVar[str] = "invalid_input_source"

    token: str

    def __init__(self, token: str, *, field: str | None = None) -> None:
        where = f" for {field!r}" if field else ""
        super().__init__(f"Invalid input source{where}: {token!r}")
        self.token = token


class MissingRequiredFieldError(ConfigurationError, LookupError):
    """Raised when a required configuration field is absent.

    Attributes
    ----------
    field : str
        Dotted name of the missing field, e.g. ``monitor2.monitor_id``.
    """

    error_code: typ.ClassVar[str] = "missing_required_field"

    field: str

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required configuration field: {field!r}")
        self.field = field


__all__ = (
    "ConfigurationError",
    "DirectoryResolutionError",
    "InvalidInputSourceError",
    "MissingRequiredFieldError",
    "SourceReadError",
)
