"""Windows platform calls (privileges, registry PATH, environment broadcast)."""

import ctypes
import sys

from remote_support.utils.output import info, ok

ENVIRONMENT_KEY = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"

HWND_BROADCAST = 0xFFFF
WM_SETTINGCHANGE = 0x001A
SMTO_ABORTIFHUNG = 0x0002
BROADCAST_TIMEOUT_MS = 1000


class WindowsPlatform:
    """Thin wrapper over winreg and user32/shell32.

    Kept as an object so the provisioning flow can be exercised with a
    fake platform on any OS.
    """

    def is_elevated(self) -> bool:
        """Check if the process runs with administrative privileges."""
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError):
            return False

    def get_system_path(self) -> str:
        """Read the machine-wide PATH value."""
        import winreg

        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, ENVIRONMENT_KEY, 0, winreg.KEY_READ) as key:
            try:
                value, _ = winreg.QueryValueEx(key, "Path")
            except FileNotFoundError:
                return ""
        return value or ""

    def set_system_path(self, value: str) -> None:
        """Write the machine-wide PATH value."""
        import winreg

        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, ENVIRONMENT_KEY, 0, winreg.KEY_SET_VALUE) as key:
            winreg.SetValueEx(key, "Path", 0, winreg.REG_EXPAND_SZ, value)

    def broadcast_environment_change(self) -> None:
        """Notify running applications that environment variables changed."""
        result = ctypes.c_void_p()
        ctypes.windll.user32.SendMessageTimeoutW(
            HWND_BROADCAST,
            WM_SETTINGCHANGE,
            0,
            "Environment",
            SMTO_ABORTIFHUNG,
            BROADCAST_TIMEOUT_MS,
            ctypes.byref(result),
        )


def get_platform() -> WindowsPlatform:
    """Get the platform implementation for this host."""
    if sys.platform != "win32":
        raise OSError("Registry and privilege calls are only available on Windows")
    return WindowsPlatform()


def add_to_system_path(folder: str, platform: WindowsPlatform) -> bool:
    """Append folder to the machine-wide PATH. Idempotent.

    Args:
        folder: Folder to add
        platform: Platform implementation

    Returns:
        True if PATH was changed, False if folder was already present.
    """
    path_value = platform.get_system_path()
    entries = [entry for entry in path_value.split(";") if entry]
    if any(entry.lower() == folder.lower() for entry in entries):
        info(f"'{folder}' is already in system PATH.")
        return False

    trimmed = path_value.rstrip(";")
    platform.set_system_path(f"{trimmed};{folder}" if trimmed else folder)
    ok(f"Added '{folder}' to system PATH.")
    platform.broadcast_environment_change()
    return True
