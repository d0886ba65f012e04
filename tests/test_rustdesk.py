"""Tests for RustDesk configuration and the RustDesk provisioning step."""

from pathlib import Path
from unittest.mock import patch

import pytest
import typer

from remote_support.commands.rustdesk import setup_rustdesk
from remote_support.core import rustdesk
from remote_support.core.config import InstallerConfig


@pytest.fixture
def layout(tmp_path: Path) -> dict[str, Path]:
    """Empty install folder and not-yet-existing config dirs."""
    install_folder = tmp_path / "Programs" / "RustDesk"
    install_folder.mkdir(parents=True)
    workdir = tmp_path / "work"
    workdir.mkdir()
    return {
        "install_folder": install_folder,
        "service_config_dir": tmp_path / "LocalService" / "RustDesk",
        "user_config_dir": tmp_path / "User" / "RustDesk",
        "cwd": workdir,
    }


def run_setup(layout: dict[str, Path], config: InstallerConfig | None = None, ip: str = "100.64.0.5") -> str:
    return setup_rustdesk(
        config or InstallerConfig(rustdesk_key="PUBKEY="),
        ip,
        install_folder=layout["install_folder"],
        cwd=layout["cwd"],
        service_config_dir=layout["service_config_dir"],
        user_config_dir=layout["user_config_dir"],
    )


class TestFindExistingInstalls:
    """Tests for detecting a previous RustDesk install."""

    def test_clean_host(self, layout):
        found = rustdesk.find_existing_installs(
            layout["install_folder"], layout["service_config_dir"], layout["user_config_dir"]
        )
        assert found == []

    def test_detects_each_location(self, layout):
        layout["service_config_dir"].mkdir(parents=True)
        layout["user_config_dir"].mkdir(parents=True)
        (layout["install_folder"] / "RustDesk.exe").write_bytes(b"MZ")

        found = rustdesk.find_existing_installs(
            layout["install_folder"], layout["service_config_dir"], layout["user_config_dir"]
        )
        assert [item.path for item in found] == [
            layout["service_config_dir"],
            layout["user_config_dir"],
            layout["install_folder"],
        ]


class TestRenderConfig:
    """Tests for RustDesk config file contents."""

    def test_password_file(self):
        assert rustdesk.render_config("Ab3dEf9h", "x1y2z3") == "password = 'Ab3dEf9h'\nsalt = 'x1y2z3'\n"

    def test_options_file(self):
        content = rustdesk.render_config2("100.64.0.5", "support.example.vpn", "PUBKEY=")
        lines = content.splitlines()

        assert "rendezvous_server = 'support.example.vpn:21116'" in lines
        assert "nat_type = 1" in lines
        assert "unlock_pin = ''" in lines
        assert "trusted_devices = ''" in lines
        assert "[options]" in lines
        options = lines[lines.index("[options]") + 1 :]
        assert "local-ip-addr = '100.64.0.5'" in options
        assert "custom-rendezvous-server = 'support.example.vpn'" in options
        assert "relay-server = 'support.example.vpn'" in options
        assert "verification-method = 'use-both-passwords'" in options
        assert "key = 'PUBKEY='" in options

    def test_write_config(self, tmp_path):
        config_file, config2_file = rustdesk.write_config(
            tmp_path / "RustDesk",
            password="Ab3dEf9h",
            salt="x1y2z3",
            local_ip="",
            host="support.aeonhacs.vpn",
            key="K",
        )
        assert config_file == tmp_path / "RustDesk" / "config" / "RustDesk.toml"
        assert config2_file.name == "RustDesk2.toml"
        assert "password = 'Ab3dEf9h'" in config_file.read_text()
        assert "local-ip-addr = ''" in config2_file.read_text()


class TestLatestInstallerUrl:
    @patch("remote_support.core.rustdesk.get_latest_release_tag", return_value="1.3.2")
    def test_url(self, mock_tag):
        assert rustdesk.get_latest_installer_url() == (
            "https://github.com/rustdesk/rustdesk/releases/download/1.3.2/rustdesk-1.3.2-x86_64.msi"
        )
        mock_tag.assert_called_once_with("rustdesk/rustdesk")


class TestSetupRustdesk:
    """Tests for the RustDesk provisioning step."""

    @pytest.mark.parametrize("conflict", ["service_config_dir", "user_config_dir", "exe"])
    @patch("remote_support.core.rustdesk.install_msi")
    @patch("remote_support.core.rustdesk.download_installer")
    def test_existing_install_exits(self, mock_download, mock_install, layout, conflict):
        if conflict == "exe":
            (layout["install_folder"] / "RustDesk.exe").write_bytes(b"MZ")
        else:
            layout[conflict].mkdir(parents=True)

        with pytest.raises(typer.Exit) as exc_info:
            run_setup(layout)

        assert exc_info.value.exit_code == 1
        mock_download.assert_not_called()
        mock_install.assert_not_called()
        assert not (layout["service_config_dir"] / "config").exists()

    @patch("remote_support.core.rustdesk.install_msi")
    @patch("remote_support.core.rustdesk.download_installer")
    def test_downloads_configures_and_installs(self, mock_download, mock_install, layout, tmp_path):
        downloaded = tmp_path / "rustdesk-installer.msi"
        downloaded.write_bytes(b"MSI")
        mock_download.return_value = downloaded

        password = run_setup(layout)

        config_dir = layout["service_config_dir"] / "config"
        assert f"password = '{password}'" in (config_dir / "RustDesk.toml").read_text()
        assert "local-ip-addr = '100.64.0.5'" in (config_dir / "RustDesk2.toml").read_text()
        assert "key = 'PUBKEY='" in (config_dir / "RustDesk2.toml").read_text()
        mock_install.assert_called_once_with(downloaded, layout["install_folder"])
        assert not downloaded.exists()

    @patch("remote_support.core.rustdesk.install_msi")
    @patch("remote_support.core.rustdesk.write_config", side_effect=PermissionError("access denied"))
    @patch("remote_support.core.rustdesk.download_installer")
    def test_downloaded_installer_removed_when_config_fails(
        self, mock_download, mock_write, mock_install, layout, tmp_path
    ):
        downloaded = tmp_path / "rustdesk-installer.msi"
        downloaded.write_bytes(b"MSI")
        mock_download.return_value = downloaded

        with pytest.raises(PermissionError):
            run_setup(layout)

        mock_install.assert_not_called()
        assert not downloaded.exists()

    @patch("remote_support.core.rustdesk.install_msi")
    @patch("remote_support.core.rustdesk.download_installer")
    def test_local_installer_kept(self, mock_download, mock_install, layout):
        local = layout["cwd"] / "rustdesk-1.3.2-x86_64.msi"
        local.write_bytes(b"MSI")

        run_setup(layout)

        mock_download.assert_not_called()
        mock_install.assert_called_once_with(local, layout["install_folder"])
        assert local.exists()

    @patch("remote_support.core.rustdesk.install_msi")
    @patch("remote_support.core.rustdesk.download_installer")
    def test_salt_has_no_uppercase(self, mock_download, mock_install, layout, tmp_path):
        mock_download.return_value = tmp_path / "rustdesk-installer.msi"

        run_setup(layout)

        content = (layout["service_config_dir"] / "config" / "RustDesk.toml").read_text()
        salt = content.split("salt = '")[1].split("'")[0]
        assert len(salt) == 6
        assert salt == salt.lower()

    @patch("remote_support.core.rustdesk.install_msi")
    @patch("remote_support.core.rustdesk.download_installer")
    def test_password_shape(self, mock_download, mock_install, layout, tmp_path):
        mock_download.return_value = tmp_path / "rustdesk-installer.msi"

        password = run_setup(layout)

        assert len(password) == 8
        assert any(c.isupper() for c in password)
        assert any(c.islower() for c in password)
        assert any(c.isdigit() for c in password)
