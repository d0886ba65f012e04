"""Installer configuration: defaults, secrets file, environment and CLI overrides."""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

# Template values. Real values come from secrets.yaml or the environment.
DEFAULT_GUEST_KEY = "<ENTER-GUEST-KEY>"
DEFAULT_SUBSCRIBER_KEY = "<ENTER-SUBSCRIBER-KEY>"
DEFAULT_MGMT_URL = "https://<netbird-management>:<port>"
DEFAULT_RUSTDESK_KEY = "<ENTER-RUSTDESK-PUBLIC-KEY>"
DEFAULT_VALET_URL = "http://<valet-vpn-url>:<port>"
DEFAULT_SUPPORT_HOST = "support.aeonhacs.vpn"
DEFAULT_WINTUN_VERSION = "0.14.1"

SECRETS_FILENAME = "secrets.yaml"

# secrets.yaml key -> environment variable
ENV_OVERRIDES = {
    "guest_key": "REMOTE_SUPPORT_GUEST_KEY",
    "subscriber_key": "REMOTE_SUPPORT_SUBSCRIBER_KEY",
    "mgmt_url": "REMOTE_SUPPORT_MGMT_URL",
    "rustdesk_key": "REMOTE_SUPPORT_RUSTDESK_KEY",
    "valet_url": "REMOTE_SUPPORT_VALET_URL",
    "support_host": "REMOTE_SUPPORT_HOST",
}


@dataclass(frozen=True)
class InstallerConfig:
    """Settings for one installer run."""

    enroll: bool = True
    netbird_key: str = ""  # explicit --netbird-key override
    guest_key: str = DEFAULT_GUEST_KEY
    subscriber_key: str = DEFAULT_SUBSCRIBER_KEY
    mgmt_url: str = DEFAULT_MGMT_URL
    rustdesk_key: str = DEFAULT_RUSTDESK_KEY
    valet_url: str = DEFAULT_VALET_URL
    support_host: str = DEFAULT_SUPPORT_HOST
    wintun_version: str = DEFAULT_WINTUN_VERSION

    @property
    def effective_netbird_key(self) -> str:
        """Setup key used for `netbird up`.

        An explicit override wins; otherwise the key is chosen by
        enrollment mode.
        """
        if self.netbird_key:
            return self.netbird_key
        return self.subscriber_key if self.enroll else self.guest_key

    def placeholders(self) -> list[str]:
        """Names of settings still holding template values."""
        checks = {
            "netbird key": self.effective_netbird_key,
            "mgmt url": self.mgmt_url,
            "rustdesk key": self.rustdesk_key,
        }
        if self.enroll:
            checks["valet url"] = self.valet_url
        return [name for name, value in checks.items() if is_placeholder(value)]


def is_placeholder(value: str) -> bool:
    """Check if a value is an unfilled template value like <ENTER-KEY>."""
    return value.startswith("<") or "://<" in value


def get_config_dir() -> Path:
    """Get the installer's per-user config directory."""
    return Path.home() / ".config" / "remote-support"


def find_secrets_file() -> Path | None:
    """Locate secrets.yaml.

    Search order: REMOTE_SUPPORT_SECRETS, the working directory, then
    ~/.config/remote-support.
    """
    explicit = os.environ.get("REMOTE_SUPPORT_SECRETS")
    if explicit:
        return Path(explicit)
    for candidate in (Path.cwd() / SECRETS_FILENAME, get_config_dir() / SECRETS_FILENAME):
        if candidate.is_file():
            return candidate
    return None


def load_secrets(path: Path | None) -> dict[str, str]:
    """Load known settings from a secrets YAML file.

    Returns:
        Dict of setting name to value. Missing files, malformed YAML,
        unknown keys and empty values are ignored.
    """
    if path is None or not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError:
        return {}
    if not isinstance(data, dict):
        return {}
    return {
        key: str(value)
        for key, value in data.items()
        if key in ENV_OVERRIDES and value is not None and str(value).strip()
    }


def load_env() -> dict[str, str]:
    """Load settings from REMOTE_SUPPORT_* environment variables."""
    result = {}
    for key, env_var in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            result[key] = value
    return result


def load_config(
    *,
    guest: bool = False,
    netbird_key: str | None = None,
    mgmt_url: str | None = None,
    rustdesk_key: str | None = None,
    secrets_path: Path | None = None,
) -> InstallerConfig:
    """Build the run configuration.

    Precedence, lowest first: built-in defaults, secrets file,
    environment variables, CLI flags.
    """
    if secrets_path is None:
        secrets_path = find_secrets_file()

    values: dict[str, object] = {}
    values.update(load_secrets(secrets_path))
    values.update(load_env())

    values["enroll"] = not guest
    if netbird_key:
        values["netbird_key"] = netbird_key
    if mgmt_url:
        values["mgmt_url"] = mgmt_url
    if rustdesk_key:
        values["rustdesk_key"] = rustdesk_key

    known = {f.name for f in fields(InstallerConfig)}
    return replace(InstallerConfig(), **{k: v for k, v in values.items() if k in known})
