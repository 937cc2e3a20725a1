"""System information shown on the "About" settings page."""

from __future__ import annotations

import os
import socket
import subprocess
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import psutil

DMI_DIR = Path("/sys/devices/virtual/dmi/id")
ARCH_PATH = Path("/proc/sys/kernel/arch")
OS_RELEASE_PATH = Path("/etc/os-release")
CPUINFO_PATH = Path("/proc/cpuinfo")

VERSION_IGNORING_PRODUCTS = frozenset({"Dev One"})

_BINARY_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def _lines(text: str) -> Iterator[str]:
    """Split text into lines on '\\n', dropping a trailing '\\r' from each."""
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    for part in parts:
        yield part.removesuffix("\r")


def read_to_string(path: str | os.PathLike[str]) -> str | None:
    """Read a whole file as UTF-8, or return None if it cannot be read or decoded."""
    try:
        data = Path(path).read_bytes()
    except OSError:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def architecture(path: str | os.PathLike[str] = ARCH_PATH) -> str:
    """Return the kernel architecture name, or an empty string."""
    value = read_to_string(path)
    return value.strip() if value is not None else ""


def hardware_model(dmi_dir: str | os.PathLike[str] = DMI_DIR) -> str:
    """Build a hardware model description from the DMI vendor, board name and version."""
    dmi = Path(dmi_dir)
    vendor = read_to_string(dmi / "sys_vendor")
    if vendor is None:
        return ""
    vendor = vendor.strip()
    model = vendor

    name = read_to_string(dmi / "board_name")
    if name is None:
        return model
    name = name.strip()

    if name and name != vendor:
        # Ensure that the name does not contain the vendor.
        if name.startswith(vendor):
            name = name[len(vendor):].strip()
        model = f"{model} {name}"

    version = read_to_string(dmi / "board_version")
    if version is not None:
        version = version.strip()
        if version and name not in VERSION_IGNORING_PRODUCTS:
            model = f"{model} ({version})"

    return model


def parse_os_release(text: str) -> str:
    """Extract PRETTY_NAME from the contents of an os-release file."""
    for line in _lines(text):
        if line.startswith("PRETTY_NAME="):
            value = line[len("PRETTY_NAME="):]
            value = value.removeprefix('"').removesuffix('"')
            return value.strip()
    return ""


def operating_system(path: str | os.PathLike[str] = OS_RELEASE_PATH) -> str:
    """Return the pretty name of the operating system, or an empty string."""
    text = read_to_string(path)
    return parse_os_release(text) if text is not None else ""


def parse_cpu_model(text: str) -> str:
    """Extract the first 'model name' value from /proc/cpuinfo contents."""
    for line in _lines(text):
        if line.startswith("model name"):
            rest = line[len("model name"):].lstrip()
            if rest.startswith(":"):
                return rest[1:].strip()
            return ""
    return ""


def processor_name(path: str | os.PathLike[str] = CPUINFO_PATH) -> str:
    """Return the processor model name, or an empty string."""
    text = read_to_string(path)
    return parse_cpu_model(text) if text is not None else ""


def parse_lspci(text: str) -> list[str]:
    """Return the descriptions of VGA devices listed in lspci output."""
    devices = []
    for line in _lines(text):
        pos = line.find("VGA")
        if pos < 0:
            continue
        rest = line[pos + 3:]
        sep = rest.find(": ")
        if sep >= 0:
            devices.append(rest[sep + 2:])
    return devices


def capitalize_first(value: str) -> str:
    """Uppercase the first character if it is ASCII."""
    if value and value[0].isascii():
        return value[0].upper() + value[1:]
    return value


def format_size(size: int) -> str:
    """Format a byte count with the largest fitting binary unit and two decimals."""
    value = float(size)
    unit = _BINARY_UNITS[0]
    for next_unit in _BINARY_UNITS[1:]:
        if value < 1024:
            break
        value /= 1024
        unit = next_unit
    return f"{value:.2f} {unit}"


def _total_disk_capacity() -> int:
    total = 0
    for partition in psutil.disk_partitions():
        try:
            total += psutil.disk_usage(partition.mountpoint).total
        except OSError:
            continue
    return total


def _desktop_session() -> str | None:
    for name in ("XDG_SESSION_DESKTOP", "XDG_CURRENT_DESKTOP", "DESKTOP_SESSION"):
        value = os.environ.get(name)
        if value is not None:
            return value
    return None


def _graphics() -> list[str]:
    try:
        result = subprocess.run(["lspci"], capture_output=True, check=False)
    except OSError:
        return []
    try:
        stdout = result.stdout.decode("utf-8")
    except UnicodeDecodeError:
        return []
    return parse_lspci(stdout)


@dataclass
class Info:
    """A snapshot of the system's hardware and software description."""

    desktop_environment: str = ""
    device_name: str = ""
    disk_capacity: str = ""
    graphics: list[str] = field(default_factory=list)
    hardware_model: str = ""
    memory: str = ""
    operating_system: str = ""
    os_architecture: str = ""
    processor: str = ""
    windowing_system: str = ""

    @classmethod
    def load(cls) -> Info:
        """Gather information about the running system."""
        info = cls(
            os_architecture=architecture(),
            hardware_model=hardware_model(),
            operating_system=operating_system(),
            processor=processor_name(),
            disk_capacity=format_size(_total_disk_capacity()),
            memory=format_size(psutil.virtual_memory().total),
        )

        try:
            info.device_name = socket.gethostname()
        except OSError:
            pass

        session_type = os.environ.get("XDG_SESSION_TYPE")
        if session_type is not None:
            info.windowing_system = capitalize_first(session_type)

        desktop = _desktop_session()
        if desktop is not None:
            info.desktop_environment = capitalize_first(desktop)

        info.graphics = _graphics()
        return info