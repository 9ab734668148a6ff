"""Input-source values and their textual encodings.

An input source is the MCCS "input select" (VCP feature ``0x60``) code of a
physical video input on a monitor. Configuration files may spell it three
ways: a symbolic name such as ``DisplayPort2``, a hexadecimal literal such as
``0x10``, or a decimal literal such as ``16``.

Examples
--------
>>> InputSource.parse("DisplayPort2").value
16
>>> InputSource.parse("0X1a").value
26
>>> str(InputSource.parse("17"))
'Hdmi1'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as typ

from display_switch.errors import InvalidInputSourceError

#: Largest code accepted; VCP feature values are 16 bits wide.
MAX_INPUT_SOURCE_VALUE = 0xFFFF

_HEX_TOKEN = re.compile(r"0[xX](?P<digits>[0-9a-fA-F]+)")
_DECIMAL_TOKEN = re.compile(r"[0-9]+")


class SymbolicInputSource(enum.IntEnum):
    """Standard input codes defined by the MCCS input-select feature."""

    Vga1 = 0x01
    Vga2 = 0x02
    Dvi1 = 0x03
    Dvi2 = 0x04
    CompositeVideo1 = 0x05
    CompositeVideo2 = 0x06
    SVideo1 = 0x07
    SVideo2 = 0x08
    Tuner1 = 0x09
    Tuner2 = 0x0A
    Tuner3 = 0x0B
    ComponentVideo1 = 0x0C
    ComponentVideo2 = 0x0D
    ComponentVideo3 = 0x0E
    DisplayPort1 = 0x0F
    DisplayPort2 = 0x10
    Hdmi1 = 0x11
    Hdmi2 = 0x12


_SYMBOLIC_BY_NAME: typ.Final[dict[str, SymbolicInputSource]] = {
    member.name.lower(): member for member in SymbolicInputSource
}
_SYMBOLIC_BY_VALUE: typ.Final[dict[int, SymbolicInputSource]] = {
    member.value: member for member in SymbolicInputSource
}


def _parse_numeric(token: str) -> int | None:
    """Return the integer spelled by a hex or decimal token, if any."""
    if (match := _HEX_TOKEN.fullmatch(token)) is not None:
        return int(match.group("digits"), 16)
    if _DECIMAL_TOKEN.fullmatch(token) is not None:
        return int(token, 10)
    return None


@dc.dataclass(frozen=True, slots=True)
class InputSource:
    """An immutable input-source code.

    Attributes
    ----------
    value : int
        Numeric code sent to the monitor, in ``0..0xFFFF``.
    """

    value: int

    def __post_init__(self) -> None:
        """Reject codes that cannot be transmitted to a monitor."""
        if not 0 <= self.value <= MAX_INPUT_SOURCE_VALUE:
            raise InvalidInputSourceError(str(self.value))

    @classmethod
    def parse(cls, token: str) -> InputSource:
        """Parse a symbolic, hexadecimal or decimal input-source token.

        Parameters
        ----------
        token : str
            Text to parse. Symbolic names and hex digits are matched without
            regard to case; surrounding whitespace is ignored.

        Returns
        -------
        InputSource
            The parsed input source.

        Raises
        ------
        InvalidInputSourceError
            If the token matches none of the accepted forms, or spells a code
            outside ``0..0xFFFF``.
        """
        candidate = token.strip()
        symbolic = _SYMBOLIC_BY_NAME.get(candidate.lower())
        if symbolic is not None:
            return cls(int(symbolic))
        numeric = _parse_numeric(candidate)
        if numeric is None or numeric > MAX_INPUT_SOURCE_VALUE:
            raise InvalidInputSourceError(token)
        return cls(numeric)

    @property
    def symbolic(self) -> SymbolicInputSource | None:
        """Return the standard name for this code, when it has one."""
        return _SYMBOLIC_BY_VALUE.get(self.value)

    def __str__(self) -> str:
        symbolic = self.symbolic
        if symbolic is not None:
            return symbolic.name
        return f"0x{self.value:02x}"


__all__ = (
    "MAX_INPUT_SOURCE_VALUE",
    "InputSource",
    "SymbolicInputSource",
)
