"""HTTP download and archive extraction helpers."""

import shutil
import tempfile
import zipfile
from pathlib import Path

import httpx

from remote_support.utils.output import info
from remote_support.utils.process import run

USER_AGENT = "AeonRemoteSetup/1.0"
GITHUB_API = "https://api.github.com/repos"


def make_client() -> httpx.Client:
    """Create an HTTP client with the installer's defaults.

    No timeout is applied; GitHub asset URLs redirect to a CDN.
    """
    return httpx.Client(
        headers={"User-Agent": USER_AGENT},
        timeout=None,
        follow_redirects=True,
    )


def get_latest_release_tag(repo: str, client: httpx.Client | None = None) -> str:
    """Get the tag name of the latest GitHub release of owner/repo."""
    url = f"{GITHUB_API}/{repo}/releases/latest"
    if client is None:
        with make_client() as client:
            resp = client.get(url)
    else:
        resp = client.get(url)
    resp.raise_for_status()
    tag = resp.json().get("tag_name")
    if not tag:
        raise ValueError(f"No tag_name in latest release of {repo}")
    return tag


def download_file(url: str, path: Path, client: httpx.Client | None = None) -> Path:
    """Download url to path, raising httpx.HTTPStatusError on non-2xx.

    A partially written file is removed when the download fails.
    """
    info(f"Downloading: {url}")
    own_client = client is None
    if own_client:
        client = make_client()
    try:
        with client.stream("GET", url) as resp:
            resp.raise_for_status()
            with open(path, "wb") as f:
                for chunk in resp.iter_bytes():
                    f.write(chunk)
    except Exception:
        path.unlink(missing_ok=True)
        raise
    finally:
        if own_client:
            client.close()
    return path


def get_temp_dir(name: str) -> Path:
    """Return an empty directory under the system temp dir."""
    path = Path(tempfile.gettempdir()) / name
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path


def extract_zip(zip_path: Path, extract_to: Path) -> Path:
    """Extract a zip archive into a fresh directory."""
    info(f"Extracting archive to: {extract_to}")
    if extract_to.exists():
        shutil.rmtree(extract_to)
    extract_to.mkdir(parents=True)
    with zipfile.ZipFile(zip_path) as zf:
        zf.extractall(extract_to)
    return extract_to


def extract_tar_gz(archive_path: Path, extract_to: Path) -> Path:
    """Extract a .tar.gz archive with the system tar command."""
    run(["tar", "-xzf", str(archive_path), "-C", str(extract_to)])
    return extract_to
