"""Typed configuration model and monitor resolution.

A configuration holds one global pair of input sources (the *default slice*)
and up to six per-monitor overrides. Resolving a monitor is a two-step
lookup-then-merge: the first override whose identifier fragment matches the
monitor wins, and the global default fills whichever direction it leaves
unset. Later matching overrides are never consulted.

Examples
--------
>>> default = InputSources(InputSource(0x10), InputSource(0x20))
>>> override = PerMonitorConfiguration("dell", InputSources(InputSource(0x11)))
>>> config = Configuration("dead:beef", default, (override,) + (None,) * 5)
>>> config.resolve("DELL U2720Q", SwitchDirection.DISCONNECT)
InputSource(value=32)
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    from display_switch.input_source import InputSource

#: Number of per-monitor override slots, ``monitor1`` to ``monitor6``.
MONITOR_SLOT_COUNT: typ.Final = 6


class SwitchDirection(enum.StrEnum):
    """Whether the watched USB device was connected or disconnected."""

    CONNECT = "connect"
    DISCONNECT = "disconnect"


@dc.dataclass(frozen=True, slots=True)
class InputSources:
    """Optional input sources for each switch direction.

    Attributes
    ----------
    on_usb_connect : InputSource | None
        Source selected when the USB device is connected.
    on_usb_disconnect : InputSource | None
        Source selected when the USB device is disconnected.
    """

    on_usb_connect: InputSource | None = None
    on_usb_disconnect: InputSource | None = None

    def merge(self, default: InputSources) -> InputSources:
        """Return this slice with unset directions taken from ``default``."""
        return InputSources(
            on_usb_connect=(
                self.on_usb_connect
                if self.on_usb_connect is not None
                else default.on_usb_connect
            ),
            on_usb_disconnect=(
                self.on_usb_disconnect
                if self.on_usb_disconnect is not None
                else default.on_usb_disconnect
            ),
        )

    def source(self, direction: SwitchDirection) -> InputSource | None:
        """Return the source configured for ``direction``, if any."""
        match direction:
            case SwitchDirection.CONNECT:
                return self.on_usb_connect
            case SwitchDirection.DISCONNECT:
                return self.on_usb_disconnect


EMPTY_INPUT_SOURCES: typ.Final = InputSources()


@dc.dataclass(frozen=True, slots=True)
class PerMonitorConfiguration:
    """Input-source override for monitors whose identifier matches a fragment.

    Attributes
    ----------
    monitor_id : str
        Identifier fragment, matched case-insensitively as a substring so that
        vendor strings carrying serials or revision suffixes still match.
    input_sources : InputSources
        Override slice, stored as configured and merged only at resolution.
    """

    monitor_id: str
    input_sources: InputSources = EMPTY_INPUT_SOURCES

    def matches(self, monitor_id: str) -> bool:
        """Return whether this override applies to ``monitor_id``."""
        return self.monitor_id.lower() in monitor_id.lower()


@dc.dataclass(frozen=True, slots=True)
class Configuration:
    """Immutable display-switch configuration.

    Attributes
    ----------
    usb_device : str
        Watched USB device as lower-case ``vendor:product``.
    input_sources : InputSources
        Global default slice.
    monitors : tuple[PerMonitorConfiguration | None, ...]
        Exactly ``MONITOR_SLOT_COUNT`` override slots in declared order; the
        order is the tie-break when several fragments match one monitor.
    """

    usb_device: str
    input_sources: InputSources = EMPTY_INPUT_SOURCES
    monitors: tuple[PerMonitorConfiguration | None, ...] = (None,) * (
        MONITOR_SLOT_COUNT
    )

    def __post_init__(self) -> None:
        """Ensure the fixed slot layout."""
        if len(self.monitors) != MONITOR_SLOT_COUNT:
            msg = (
                f"Expected {MONITOR_SLOT_COUNT} monitor slots, "
                f"got {len(self.monitors)}."
            )
            raise ValueError(msg)

    def monitor(self, slot: int) -> PerMonitorConfiguration | None:
        """Return the override in 1-based ``slot``."""
        if not 1 <= slot <= MONITOR_SLOT_COUNT:
            msg = f"Monitor slot must be between 1 and {MONITOR_SLOT_COUNT}."
            raise IndexError(msg)
        return self.monitors[slot - 1]

    def matching_monitor(self, monitor_id: str) -> PerMonitorConfiguration | None:
        """Return the first override, in slot order, matching ``monitor_id``."""
        return next(
            (
                candidate
                for candidate in self.monitors
                if candidate is not None and candidate.matches(monitor_id)
            ),
            None,
        )

    def configuration_for_monitor(self, monitor_id: str) -> InputSources:
        """Return the effective slice for ``monitor_id``.

        Parameters
        ----------
        monitor_id : str
            Raw monitor identifier reported by the display enumerator.

        Returns
        -------
        InputSources
            The matching override merged over the global default, or the
            global default alone when no override matches.
        """
        matched = self.matching_monitor(monitor_id)
        if matched is None:
            return EMPTY_INPUT_SOURCES.merge(self.input_sources)
        return matched.input_sources.merge(self.input_sources)

    def resolve(
        self,
        monitor_id: str,
        direction: SwitchDirection,
    ) -> InputSource | None:
        """Return the source to switch ``monitor_id`` to, if one is configured."""
        return self.configuration_for_monitor(monitor_id).source(direction)


def resolve(
    configuration: Configuration,
    monitor_id: str,
    direction: SwitchDirection,
) -> InputSource | None:
    """Resolve the input source for one monitor and hotplug direction.

    ``None`` means nothing is configured for this direction and the caller
    should leave the monitor alone.
    """
    return configuration.resolve(monitor_id, direction)


__all__ = (
    "EMPTY_INPUT_SOURCES",
    "MONITOR_SLOT_COUNT",
    "Configuration",
    "InputSources",
    "PerMonitorConfiguration",
    "SwitchDirection",
    "resolve",
)
