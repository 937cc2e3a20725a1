import subprocess
from unittest import mock

import pytest

from settings_pages.about import (
    Info,
    architecture,
    capitalize_first,
    format_size,
    hardware_model,
    operating_system,
    parse_cpu_model,
    parse_lspci,
    parse_os_release,
    processor_name,
    read_to_string,
)


def _dmi(tmp_path, vendor=None, name=None, version=None):
    for filename, value in (
        ("sys_vendor", vendor),
        ("board_name", name),
        ("board_version", version),
    ):
        if value is not None:
            (tmp_path / filename).write_text(value)
    return tmp_path


def test_read_to_string_reads_file(tmp_path):
    path = tmp_path / "f"
    path.write_text("hello\nworld")
    assert read_to_string(path) == "hello\nworld"


def test_read_to_string_missing(tmp_path):
    assert read_to_string(tmp_path / "missing") is None


def test_read_to_string_invalid_utf8(tmp_path):
    path = tmp_path / "bad"
    path.write_bytes(b"\xff\xfe\xfa")
    assert read_to_string(path) is None


def test_architecture_trims(tmp_path):
    path = tmp_path / "arch"
    path.write_text("x86_64\n")
    assert architecture(path) == "x86_64"
    assert architecture(tmp_path / "nope") == ""


def test_hardware_model_full(tmp_path):
    dmi = _dmi(tmp_path, "System76\n", "Thelio\n", "thelio-r2\n")
    assert hardware_model(dmi) == "System76 Thelio (thelio-r2)"


def test_hardware_model_strips_vendor_prefix(tmp_path):
    dmi = _dmi(tmp_path, "Acme", "Acme Rocket", "")
    assert hardware_model(dmi) == "Acme Rocket"


def test_hardware_model_name_equals_vendor(tmp_path):
    dmi = _dmi(tmp_path, "Acme", "Acme", "2.0")
    assert hardware_model(dmi) == "Acme (2.0)"


def test_hardware_model_ignored_product_version(tmp_path):
    dmi = _dmi(tmp_path, "System76", "Dev One", "1.0")
    assert hardware_model(dmi) == "System76 Dev One"


def test_hardware_model_vendor_only(tmp_path):
    dmi = _dmi(tmp_path, "Acme\n")
    assert hardware_model(dmi) == "Acme"


def test_hardware_model_no_vendor(tmp_path):
    dmi = _dmi(tmp_path, None, "Board", "1")
    assert hardware_model(dmi) == ""


def test_parse_os_release_quoted():
    text = 'NAME="Pop!_OS"\nPRETTY_NAME="Pop!_OS 22.04 LTS"\nID=pop\n'
    assert parse_os_release(text) == "Pop!_OS 22.04 LTS"


def test_parse_os_release_unquoted_and_missing():
    assert parse_os_release("PRETTY_NAME=Plain\r\n") == "Plain"
    assert parse_os_release("NAME=Other\n") == ""


def test_operating_system_file(tmp_path):
    path = tmp_path / "os-release"
    path.write_text('PRETTY_NAME="Example OS"\n')
    assert operating_system(path) == "Example OS"
    assert operating_system(tmp_path / "none") == ""


def test_parse_cpu_model():
    text = "processor\t: 0\nmodel name\t: AMD Ryzen 7 5800X\nmodel name\t: other\n"
    assert parse_cpu_model(text) == "AMD Ryzen 7 5800X"


def test_parse_cpu_model_without_colon_stops():
    assert parse_cpu_model("model name broken\nmodel name : later\n") == ""


def test_processor_name_file(tmp_path):
    path = tmp_path / "cpuinfo"
    path.write_text("model name : Test CPU\n")
    assert processor_name(path) == "Test CPU"


def test_parse_lspci():
    text = (
        "00:00.0 Host bridge: Something\n"
        "01:00.0 VGA compatible controller: NVIDIA Corporation GA104\n"
        "02:00.0 VGA broken line\n"
    )
    assert parse_lspci(text) == ["NVIDIA Corporation GA104"]


def test_capitalize_first():
    assert capitalize_first("wayland") == "Wayland"
    assert capitalize_first("") == ""
    assert capitalize_first("éclair") == "éclair"


@pytest.mark.parametrize(
    ("size", "expected"),
    [(1024, "1.00 KiB"), (1536 * 1024**2, "1.50 GiB"), (0, "0.00 B")],
)
def test_format_size_pinned(size, expected):
    assert format_size(size) == expected


def test_format_size_units_grow():
    units = [format_size(1024**n).split(" ")[1] for n in range(4)]
    assert len(set(units)) == 4
    assert all(format_size(1024**n).startswith("1.00 ") for n in range(4))


def test_info_load_environment(monkeypatch):
    monkeypatch.setenv("XDG_SESSION_TYPE", "wayland")
    monkeypatch.delenv("XDG_SESSION_DESKTOP", raising=False)
    monkeypatch.setenv("XDG_CURRENT_DESKTOP", "cosmic")
    output = subprocess.CompletedProcess(
        ["lspci"], 0, stdout=b"03:00.0 VGA compatible controller: Intel UHD\n"
    )
    with mock.patch("subprocess.run", return_value=output):
        info = Info.load()
    assert info.windowing_system == "Wayland"
    assert info.desktop_environment == "Cosmic"
    assert info.graphics == ["Intel UHD"]
    assert info.memory.endswith("B")


def test_info_load_without_lspci(monkeypatch):
    monkeypatch.delenv("XDG_SESSION_DESKTOP", raising=False)
    monkeypatch.delenv("XDG_CURRENT_DESKTOP", raising=False)
    monkeypatch.setenv("DESKTOP_SESSION", "gnome")
    with mock.patch("subprocess.run", side_effect=FileNotFoundError):
        info = Info.load()
    assert info.graphics == []
    assert info.desktop_environment == "Gnome"