"""Wintun network driver installation."""

import shutil
import tempfile
from pathlib import Path

from remote_support.core.environment import get_architecture
from remote_support.utils.download import download_file, extract_zip, get_temp_dir
from remote_support.utils.output import info, ok

WINTUN_DLL = "wintun.dll"


def get_download_url(version: str) -> str:
    """Get the Wintun release zip URL."""
    return f"https://www.wintun.net/builds/wintun-{version}.zip"


def find_dll(extract_dir: Path, arch: str) -> Path:
    """Locate wintun.dll for arch inside an extracted release."""
    dll = extract_dir / "wintun" / "bin" / arch / WINTUN_DLL
    if not dll.is_file():
        raise FileNotFoundError(f"{WINTUN_DLL} not found for architecture {arch}.")
    return dll


def install(destination: Path, version: str) -> bool:
    """Install wintun.dll into destination. Idempotent.

    Returns:
        True if the driver was installed, False if it was already present.
    """
    dll_dest = destination / WINTUN_DLL
    if dll_dest.exists():
        return False

    info("Installing Wintun driver...")
    # Resolve first so an unsupported CPU fails before any download
    arch = get_architecture()

    zip_path = Path(tempfile.gettempdir()) / f"wintun-{version}.zip"
    extract_dir = get_temp_dir(f"wintun-{version}")
    try:
        download_file(get_download_url(version), zip_path)
        extract_zip(zip_path, extract_dir)
        shutil.copyfile(find_dll(extract_dir, arch), dll_dest)
    finally:
        zip_path.unlink(missing_ok=True)
        shutil.rmtree(extract_dir, ignore_errors=True)

    ok(f"Wintun driver installed to {dll_dest}")
    return True
