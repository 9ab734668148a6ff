"""Tests for loading configurations from files and the environment."""

from __future__ import annotations

import textwrap
import typing as typ

import pytest

from display_switch.configuration import (
    SwitchDirection,
    load,
    load_from_string,
)
from display_switch.errors import (
    ConfigurationError,
    DirectoryResolutionError,
    InvalidInputSourceError,
    MissingRequiredFieldError,
    SourceReadError,
)
from display_switch.input_source import InputSource

if typ.TYPE_CHECKING:
    from pathlib import Path


def _ini(text: str) -> str:
    return textwrap.dedent(text)


def test_usb_device_is_lower_cased() -> None:
    """The device identifier is normalised at load time."""
    config = load_from_string(
        'usb_device = "DEAD:BEEF"\non_usb_connect = "DisplayPort2"\n'
    )

    assert config.usb_device == "dead:beef"


def test_symbolic_input_sources() -> None:
    """Quoted and bare symbolic names both load."""
    config = load_from_string(
        _ini(
            """\
            usb_device = "dead:BEEF"
            on_usb_connect = "DisplayPort2"
            on_usb_disconnect = DisplayPort1
            """
        )
    )

    assert config.input_sources.on_usb_connect == InputSource(0x10)
    assert config.input_sources.on_usb_disconnect == InputSource(0x0F)


def test_decimal_input_sources() -> None:
    """Decimal literals load as their integer value."""
    config = load_from_string(
        "usb_device = dead:beef\non_usb_connect = 22\non_usb_disconnect = 33\n"
    )

    assert config.input_sources.on_usb_connect == InputSource(22)
    assert config.input_sources.on_usb_disconnect == InputSource(33)


def test_hexadecimal_input_sources() -> None:
    """Hex literals load as their integer value."""
    config = load_from_string(
        'usb_device = dead:beef\non_usb_connect = "0x10"\non_usb_disconnect = 0X2a\n'
    )

    assert config.input_sources.on_usb_connect == InputSource(0x10)
    assert config.input_sources.on_usb_disconnect == InputSource(0x2A)


def test_per_monitor_overrides_are_stored_unmerged(reference_config_text: str) -> None:
    """Overrides keep only what their own section sets."""
    config = load_from_string(reference_config_text)

    first = config.monitor(1)
    assert first is not None, "Expected monitor1 to be loaded."
    assert first.monitor_id == "123"
    assert first.input_sources.on_usb_connect == InputSource(0x11)
    assert first.input_sources.on_usb_disconnect is None, (
        "Overrides must not be merged with the global default at load time."
    )
    assert config.monitors[2:] == (None, None, None, None)


@pytest.mark.parametrize(
    ("monitor_id", "connect", "disconnect"),
    [("333", 0x10, 0x20), ("1234", 0x11, 0x20), ("2345", 0x12, 0x13)],
)
def test_reference_resolution(
    reference_config_text: str,
    monitor_id: str,
    connect: int,
    disconnect: int,
) -> None:
    """Loaded overrides merge over the global default when resolved."""
    config = load_from_string(reference_config_text)

    assert config.resolve(monitor_id, SwitchDirection.CONNECT) == InputSource(connect)
    assert config.resolve(monitor_id, SwitchDirection.DISCONNECT) == (
        InputSource(disconnect)
    )


@pytest.mark.parametrize(
    "text",
    [
        "usb_device = x\non_usb_connect = not-a-source\n",
        "usb_device = x\non_usb_disconnect = not-a-source\n",
        "usb_device = x\n[monitor4]\nmonitor_id = a\n"
        "on_usb_connect = not-a-source\n",
        "usb_device = x\n[monitor6]\nmonitor_id = a\n"
        "on_usb_disconnect = not-a-source\n",
    ],
)
def test_invalid_input_source_rejects_configuration(text: str) -> None:
    """Any bad token fails the whole load."""
    with pytest.raises(InvalidInputSourceError) as excinfo:
        load_from_string(text)

    assert excinfo.value.token == "not-a-source"


def test_missing_usb_device_is_rejected() -> None:
    """The device identifier is required."""
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        load_from_string("on_usb_connect = Hdmi1\n")

    assert excinfo.value.field == "usb_device"


def test_monitor_section_requires_monitor_id() -> None:
    """A present monitor section must name its fragment."""
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        load_from_string("usb_device = x\n[monitor2]\non_usb_connect = Hdmi1\n")

    assert excinfo.value.field == "monitor2.monitor_id"


def test_unknown_sections_and_keys_are_ignored() -> None:
    """Extra sections, such as a seventh monitor, do not affect loading."""
    config = load_from_string(
        "usb_device = x\nextra = 1\n[monitor7]\nmonitor_id = a\n[monitor1]\n"
        "monitor_id = b\ncolour = blue\n"
    )

    assert all(slot is None for slot in config.monitors[1:])
    assert config.monitor(1) is not None


def test_section_used_as_value_is_rejected() -> None:
    """A top-level input source cannot be a section."""
    with pytest.raises(SourceReadError, match="on_usb_connect"):
        load_from_string("usb_device = x\n[on_usb_connect]\nvalue = 1\n")


def test_environment_overrides_file_values(reference_config_text: str) -> None:
    """Environment variables win over file keys."""
    config = load_from_string(
        reference_config_text,
        environ={
            "DISPLAY_SWITCH_USB_DEVICE": "1050:0407",
            "DISPLAY_SWITCH_ON_USB_DISCONNECT": "Hdmi2",
            "DISPLAY_SWITCH_MONITOR1__ON_USB_DISCONNECT": "Vga1",
        },
    )

    assert config.usb_device == "1050:0407"
    assert config.resolve("333", SwitchDirection.DISCONNECT) == InputSource(0x12)
    assert config.resolve("1234", SwitchDirection.DISCONNECT) == InputSource(0x01)
    assert config.resolve("1234", SwitchDirection.CONNECT) == InputSource(0x11)


def test_environment_can_supply_required_fields() -> None:
    """A file missing usb_device loads when the environment provides it."""
    config = load_from_string(
        "on_usb_connect = Hdmi1\n",
        environ={"DISPLAY_SWITCH_USB_DEVICE": "DEAD:BEEF"},
    )

    assert config.usb_device == "dead:beef"


def test_load_reads_explicit_file(tmp_path: Path, reference_config_text: str) -> None:
    """An explicit path is read and the given environment applied."""
    config_file = tmp_path / "custom.ini"
    config_file.write_text(reference_config_text, encoding="utf-8")

    config = load(config_file, environ={"DISPLAY_SWITCH_ON_USB_CONNECT": "Hdmi1"})

    assert config.resolve("333", SwitchDirection.CONNECT) == InputSource(0x11)


def test_load_uses_process_environment_by_default(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    reference_config_text: str,
) -> None:
    """Without an explicit mapping the process environment is overlaid."""
    config_file = tmp_path / "display-switch.ini"
    config_file.write_text(reference_config_text, encoding="utf-8")
    monkeypatch.setenv("DISPLAY_SWITCH_USB_DEVICE", "ABCD:1234")

    config = load(config_file)

    assert config.usb_device == "abcd:1234"


def test_load_defaults_to_platform_config_file(
    linux_home: Path,
    reference_config_text: str,
) -> None:
    """The platform configuration file is used when no path is given."""
    config_dir = linux_home / ".config" / "display-switch"
    config_dir.mkdir(parents=True)
    (config_dir / "display-switch.ini").write_text(
        reference_config_text, encoding="utf-8"
    )

    config = load(environ={})

    assert config.usb_device == "dead:beef"


def test_load_creates_config_directory_before_failing_on_missing_file(
    linux_home: Path,
) -> None:
    """A missing default file fails the load after the directory is created."""
    with pytest.raises(SourceReadError):
        load(environ={})

    assert (linux_home / ".config" / "display-switch").is_dir()


def test_load_leaves_log_directory_to_callers(
    linux_home: Path,
    reference_config_text: str,
) -> None:
    """Loading only prepares the configuration directory."""
    config_file = linux_home / "display-switch.ini"
    config_file.write_text(reference_config_text, encoding="utf-8")

    load(config_file, environ={})

    assert not (linux_home / ".local" / "share" / "display-switch").exists(), (
        "Expected the log directory to be created by log_file_path, not load."
    )


def test_load_reports_unusable_config_directory(
    monkeypatch: pytest.MonkeyPatch,
    linux_home: Path,
) -> None:
    """Directory creation failures abort the load."""
    blocker = linux_home / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(blocker))

    with pytest.raises(DirectoryResolutionError):
        load(environ={})


def test_load_errors_share_a_base_class(tmp_path: Path) -> None:
    """Callers can catch every load failure with one except clause."""
    with pytest.raises(ConfigurationError) as excinfo:
        load(tmp_path / "absent.ini", environ={})

    assert excinfo.value.retryable is False
