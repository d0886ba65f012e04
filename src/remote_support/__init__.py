"""Remote support installer (NetBird + RustDesk)."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("remote-support")
except PackageNotFoundError:
    __version__ = "0.0.0.dev"
