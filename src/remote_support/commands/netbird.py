"""NetBird provisioning step."""

from dataclasses import dataclass
from pathlib import Path

from remote_support.core import netbird, wintun
from remote_support.core.config import InstallerConfig
from remote_support.utils.output import info, ok, section, warn
from remote_support.utils.paths import find_local_installer, get_install_folder
from remote_support.utils.process import run


@dataclass
class NetbirdSetup:
    """Outcome of the NetBird step."""

    folder: Path
    exe: Path
    ip: str


def setup_netbird(
    config: InstallerConfig,
    install_folder: Path | None = None,
    cwd: Path | None = None,
) -> NetbirdSetup:
    """Install NetBird if needed, start its service and join the support VPN.

    This step:
    - Runs a local netbird_installer_*.exe, or downloads the latest release
      plus the Wintun driver, when netbird.exe is missing
    - Installs and starts the NetBird service
    - Runs `netbird up` unless management and signal are already connected
    - Reads the assigned VPN IP (empty if not connected)
    """
    section("NetBird")

    folder = install_folder or get_install_folder("Netbird")
    exe = folder / netbird.NETBIRD_EXE

    if not exe.is_file():
        local_installer = find_local_installer(netbird.LOCAL_INSTALLER_PATTERN, cwd)
        if local_installer:
            info(f"Found local NetBird installer: {local_installer.name}")
            info("Launching installer...")
            run([str(local_installer)], verbose=True)

    if not exe.is_file():
        info("Installing NetBird")
        netbird.download_and_install(exe)
        wintun.install(folder, config.wintun_version)

    netbird.ensure_service(exe)
    ok("NetBird service is running.")

    status = netbird.get_status(exe)
    if not netbird.is_connected(status):
        info("Connecting to VPN...")
        netbird.up(exe, config.mgmt_url, config.effective_netbird_key)
        ok("NetBird agent started.")
        status = netbird.get_status(exe)

    ip = netbird.parse_ip(status)
    if ip:
        ok(f"Connected to Aeon Support VPN at {ip}")
    else:
        warn("Agent failed to connect to Aeon Support VPN")

    return NetbirdSetup(folder=folder, exe=exe, ip=ip or "")
