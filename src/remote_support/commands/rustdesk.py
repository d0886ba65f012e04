"""RustDesk provisioning step."""

from pathlib import Path

import typer

from remote_support.core import rustdesk
from remote_support.core.config import InstallerConfig
from remote_support.utils.output import error, info, ok, section, warn
from remote_support.utils.password import generate_password
from remote_support.utils.paths import find_local_installer, get_install_folder


def abort_if_installed(
    install_folder: Path,
    service_config_dir: Path,
    user_config_dir: Path | None = None,
) -> None:
    """Exit the installer if RustDesk was installed or configured before.

    Prints each location found and the cleanup steps, then exits with
    code 1.
    """
    existing = rustdesk.find_existing_installs(install_folder, service_config_dir, user_config_dir)
    if not existing:
        return

    for item in existing:
        warn(item.description)
        info(f"   {item.path}")

    error("RustDesk appears to be partially installed or previously configured.")
    info("Please uninstall RustDesk with 'rustdesk --uninstall', then delete any config folders.")
    info("Then run this installer again.")
    raise typer.Exit(1)


def setup_rustdesk(
    config: InstallerConfig,
    netbird_ip: str,
    install_folder: Path | None = None,
    cwd: Path | None = None,
    service_config_dir: Path | None = None,
    user_config_dir: Path | None = None,
) -> str:
    """Install RustDesk configured for the support network.

    Returns:
        The generated access password.
    """
    section("RustDesk")

    folder = install_folder or get_install_folder("RustDesk")
    service_config_dir = service_config_dir or rustdesk.get_service_config_dir()

    abort_if_installed(folder, service_config_dir, user_config_dir)

    local_installer = find_local_installer(rustdesk.LOCAL_INSTALLER_PATTERN, cwd)
    if local_installer:
        info(f"Found local RustDesk installer: {local_installer.name}")
        installer = local_installer
    else:
        info("Downloading RustDesk...")
        installer = rustdesk.download_installer()

    try:
        info("Configuring RustDesk...")
        password = generate_password()
        salt = generate_password(6, 0)  # no uppers
        rustdesk.write_config(
            service_config_dir,
            password=password,
            salt=salt,
            local_ip=netbird_ip,
            host=config.support_host,
            key=config.rustdesk_key,
        )

        info("Installing RustDesk...")
        rustdesk.install_msi(installer, folder)
    finally:
        if local_installer is None:
            installer.unlink(missing_ok=True)

    ok(f"RustDesk service installed. Password is '{password}'.")
    return password
