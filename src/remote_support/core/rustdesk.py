"""RustDesk agent paths, configuration files and installer."""

import tempfile
from dataclasses import dataclass
from pathlib import Path

from remote_support.core.environment import get_appdata_dir, get_windows_dir
from remote_support.utils.download import download_file, get_latest_release_tag
from remote_support.utils.process import run

RUSTDESK_REPO = "rustdesk/rustdesk"
RUSTDESK_RELEASES = f"https://github.com/{RUSTDESK_REPO}/releases/download"
RUSTDESK_EXE = "RustDesk.exe"
LOCAL_INSTALLER_PATTERN = "rustdesk-*.msi"
RENDEZVOUS_PORT = 21116

CONFIG_TEMPLATE = """\
password = '{password}'
salt = '{salt}'
"""

CONFIG2_TEMPLATE = """\
rendezvous_server = '{host}:{port}'
nat_type = 1
serial = 0
unlock_pin = ''
trusted_devices = ''

[options]
local-ip-addr = '{local_ip}'
custom-rendezvous-server = '{host}'
verification-method = 'use-both-passwords'
av1-test = 'Y'
relay-server = '{host}'
allow-remote-config-modification = 'Y'
enable-lan-discovery = 'N'
key = '{key}'
"""


def get_service_config_dir() -> Path:
    """Get the RustDesk config dir of the LocalService profile (used by the service)."""
    return get_windows_dir() / "ServiceProfiles" / "LocalService" / "AppData" / "Roaming" / "RustDesk"


def get_user_config_dir() -> Path:
    """Get the current user's RustDesk config dir."""
    return get_appdata_dir() / "RustDesk"


@dataclass
class ExistingInstall:
    """A location showing RustDesk was installed or configured before."""

    description: str
    path: Path


def find_existing_installs(
    install_folder: Path,
    service_config_dir: Path | None = None,
    user_config_dir: Path | None = None,
) -> list[ExistingInstall]:
    """Find traces of a previous RustDesk installation.

    Checks the service config dir, the user config dir and the RustDesk
    executable in the install folder.
    """
    service_config_dir = service_config_dir or get_service_config_dir()
    user_config_dir = user_config_dir or get_user_config_dir()

    found = []
    if service_config_dir.is_dir():
        found.append(ExistingInstall("RustDesk service config found in:", service_config_dir))
    if user_config_dir.is_dir():
        found.append(ExistingInstall("RustDesk app config found in:", user_config_dir))
    if (install_folder / RUSTDESK_EXE).is_file():
        found.append(ExistingInstall("RustDesk app found in:", install_folder))
    return found


def get_latest_installer_url() -> str:
    """Get the download URL of the latest x86_64 MSI package."""
    version = get_latest_release_tag(RUSTDESK_REPO)
    return f"{RUSTDESK_RELEASES}/{version}/rustdesk-{version}-x86_64.msi"


def download_installer() -> Path:
    """Download the latest MSI package to the temp dir."""
    path = Path(tempfile.gettempdir()) / "rustdesk-installer.msi"
    return download_file(get_latest_installer_url(), path)


def render_config(password: str, salt: str) -> str:
    """Render RustDesk.toml (access password)."""
    return CONFIG_TEMPLATE.format(password=password, salt=salt)


def render_config2(local_ip: str, host: str, key: str) -> str:
    """Render RustDesk2.toml (rendezvous, relay and verification options)."""
    return CONFIG2_TEMPLATE.format(local_ip=local_ip, host=host, port=RENDEZVOUS_PORT, key=key)


def write_config(
    service_config_dir: Path,
    *,
    password: str,
    salt: str,
    local_ip: str,
    host: str,
    key: str,
) -> tuple[Path, Path]:
    """Write both RustDesk config files into <service_config_dir>/config."""
    config_dir = service_config_dir / "config"
    config_dir.mkdir(parents=True, exist_ok=True)

    config_file = config_dir / "RustDesk.toml"
    config_file.write_text(render_config(password, salt), encoding="utf-8")

    config2_file = config_dir / "RustDesk2.toml"
    config2_file.write_text(render_config2(local_ip, host, key), encoding="utf-8")

    return config_file, config2_file


def install_msi(installer_path: Path, install_folder: Path) -> None:
    """Run the MSI package silently."""
    # msiexec parses its own command line and wants PROPERTY="value" quoting
    run(
        f'msiexec /i "{installer_path}" /qn INSTALLFOLDER="{install_folder}" '
        'CREATESTARTMENUSHORTCUTS="Y" CREATEDESKTOPSHORTCUTS="N" INSTALLPRINTER="N"'
    )
