"""Shared fixtures for display-switch tests.

Examples
--------
Run the whole suite:

>>> pytest -v
"""

from __future__ import annotations

import textwrap
import typing as typ

import pytest

from display_switch import paths

if typ.TYPE_CHECKING:
    from pathlib import Path

#: Global defaults plus two overlapping per-monitor overrides.
REFERENCE_CONFIG = textwrap.dedent(
    """\
    usb_device = "dead:BEEF"
    on_usb_connect = "0x10"
    on_usb_disconnect = "0x20"

    [monitor1]
    monitor_id = 123
    on_usb_connect = 0x11

    [monitor2]
    monitor_id = 45
    on_usb_connect = 0x12
    on_usb_disconnect = 0x13
    """
)


@pytest.fixture
def reference_config_text() -> str:
    """Provide the reference INI document."""
    return REFERENCE_CONFIG


@pytest.fixture
def linux_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point the platform directories at an empty Linux home under tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.setattr(paths.platform, "system", lambda: "Linux")
    return home
