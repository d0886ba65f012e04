"""NetBird client management."""

import re
import shutil
import tempfile
from pathlib import Path

from remote_support.utils.download import download_file, extract_tar_gz, get_latest_release_tag, get_temp_dir
from remote_support.utils.output import info
from remote_support.utils.process import run

NETBIRD_REPO = "netbirdio/netbird"
NETBIRD_RELEASES = f"https://github.com/{NETBIRD_REPO}/releases/download"
NETBIRD_EXE = "netbird.exe"
LOCAL_INSTALLER_PATTERN = "netbird_installer_*.exe"

IP_PATTERN = re.compile(r"IP:\s*(\d+\.\d+\.\d+\.\d+)")


def is_connected(status: str) -> bool:
    """Check if `netbird status` output reports management and signal connected."""
    return "Management: Connected" in status and "Signal: Connected" in status


def parse_ip(status: str) -> str | None:
    """Extract the assigned NetBird IP from `netbird status` output."""
    match = IP_PATTERN.search(status)
    return match.group(1) if match else None


def get_status(exe: Path) -> str:
    """Get `netbird status` output text."""
    info("Checking NetBird status...")
    result = run([str(exe), "status"], ignore_error=True)
    return result.stdout


def ensure_service(exe: Path) -> None:
    """Install and start the NetBird service.

    Both calls fail harmlessly when the service is already installed or
    running, so their errors are ignored.
    """
    run([str(exe), "service", "install"], ignore_error=True)
    run([str(exe), "service", "start"], ignore_error=True)


def up(exe: Path, mgmt_url: str, setup_key: str) -> None:
    """Connect to the NetBird management server with a setup key."""
    run([str(exe), "up", "--management-url", mgmt_url, "--setup-key", setup_key])


def get_latest_version() -> str:
    """Get the latest NetBird release version (without leading 'v')."""
    return get_latest_release_tag(NETBIRD_REPO).lstrip("v")


def get_binary_url(version: str) -> str:
    """Get the download URL of the signed Windows amd64 archive."""
    return f"{NETBIRD_RELEASES}/v{version}/netbird_{version}_windows_amd64_signed.tar.gz"


def install_binary(archive_path: Path, output_path: Path) -> None:
    """Extract netbird.exe from a release archive to output_path."""
    info("Extracting NetBird binary...")
    extract_dir = get_temp_dir("netbird_extract")
    try:
        extract_tar_gz(archive_path, extract_dir)
        src = extract_dir / NETBIRD_EXE
        if not src.is_file():
            raise FileNotFoundError(f"{NETBIRD_EXE} not found in extracted archive.")
        shutil.copyfile(src, output_path)
    finally:
        shutil.rmtree(extract_dir, ignore_errors=True)


def download_and_install(output_path: Path) -> None:
    """Download the latest NetBird release and install its binary."""
    url = get_binary_url(get_latest_version())
    archive_path = Path(tempfile.gettempdir()) / "netbird_win.tar.gz"
    download_file(url, archive_path)
    try:
        install_binary(archive_path, output_path)
    finally:
        archive_path.unlink(missing_ok=True)
