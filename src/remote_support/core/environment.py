"""Environment detection for OS type, privileges and CPU architecture."""

import os
import platform
from enum import Enum
from pathlib import Path


class OSType(Enum):
    """Operating system type."""

    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"
    UNKNOWN = "unknown"


class UnsupportedArchitectureError(RuntimeError):
    """Raised when the CPU architecture has no driver build."""

    pass


# platform.machine() values seen on Windows (PROCESSOR_ARCHITECTURE) and elsewhere
ARCH_TOKENS = {
    "amd64": "amd64",
    "x86_64": "amd64",
    "x86": "x86",
    "i386": "x86",
    "i686": "x86",
    "arm64": "arm64",
    "aarch64": "arm64",
    "arm": "arm32",
    "armv7l": "arm32",
}


def detect_os_type() -> OSType:
    """Detect operating system type."""
    system = platform.system().lower()
    os_map = {
        "windows": OSType.WINDOWS,
        "darwin": OSType.MACOS,
        "linux": OSType.LINUX,
    }
    return os_map.get(system, OSType.UNKNOWN)


def get_architecture() -> str:
    """Map the CPU architecture to a driver build token.

    Raises:
        UnsupportedArchitectureError: If the architecture is not one of
            amd64, x86, arm64 or arm32.
    """
    machine = platform.machine().lower()
    try:
        return ARCH_TOKENS[machine]
    except KeyError:
        raise UnsupportedArchitectureError(f"Unsupported architecture: {machine or 'unknown'}") from None


def get_windows_dir() -> Path:
    """Get the Windows directory (usually C:\\Windows)."""
    return Path(os.environ.get("WINDIR") or os.environ.get("SystemRoot") or "C:\\Windows")


def get_windows_drive() -> Path:
    """Get the root of the drive Windows is installed on."""
    return Path(get_windows_dir().anchor or "C:\\")


def get_appdata_dir() -> Path:
    """Get the current user's roaming AppData directory."""
    return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
