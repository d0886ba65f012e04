"""Install folder resolution and local installer lookup."""

from pathlib import Path

from remote_support.core.environment import get_windows_drive


def get_install_candidates() -> list[Path]:
    """Candidate parent folders for application installs, in priority order."""
    current_drive = Path(Path.cwd().anchor)
    windows_drive = get_windows_drive()
    return [
        current_drive / "Programs",
        windows_drive / "Programs",
        windows_drive / "Program Files",
    ]


def get_install_folder(app_name: str, candidates: list[Path] | None = None) -> Path:
    """Resolve the install folder for an application.

    An existing <candidate>/<app_name> folder wins. Otherwise the folder
    is created under the first candidate that exists.

    Args:
        app_name: Application folder name (e.g., "Netbird")
        candidates: Parent folders in priority order (default: see
            get_install_candidates)

    Returns:
        Path to the install folder.

    Raises:
        FileNotFoundError: If none of the candidates exist.
    """
    if candidates is None:
        candidates = get_install_candidates()

    for parent in candidates:
        full_path = parent / app_name
        if full_path.is_dir():
            return full_path

    for parent in candidates:
        if parent.is_dir():
            full_path = parent / app_name
            full_path.mkdir(parents=True, exist_ok=True)
            return full_path

    raise FileNotFoundError(f"Can't find a suitable destination for {app_name}.")


def find_local_installer(pattern: str, directory: Path | None = None) -> Path | None:
    """Find an installer package matching pattern in directory (default: cwd)."""
    directory = directory or Path.cwd()
    matches = sorted(p for p in directory.glob(pattern) if p.is_file())
    return matches[0] if matches else None
