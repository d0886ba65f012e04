"""Main CLI application."""

import typer
from rich.markup import escape

from remote_support import __version__
from remote_support.commands.netbird import setup_netbird
from remote_support.commands.rustdesk import setup_rustdesk
from remote_support.core.config import load_config
from remote_support.core.environment import OSType, detect_os_type
from remote_support.core.platform import add_to_system_path, get_platform
from remote_support.core.subscription import subscribe
from remote_support.utils.output import err_console, error, info, ok, panel, section

HELP_ALIASES = ("-?", "--?")

app = typer.Typer(
    name="remote-support",
    help="Aeon Remote Support installer (NetBird + RustDesk)",
    add_completion=False,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"remote-support {__version__}")
        raise typer.Exit()


def preflight() -> None:
    """Exit unless running on Windows with administrative privileges."""
    if detect_os_type() != OSType.WINDOWS:
        error("This installer is only supported on Windows.")
        raise typer.Exit(1)
    if not get_platform().is_elevated():
        error("This installer must be run with administrative privileges.")
        raise typer.Exit(1)


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": ["-h", "--help"],
    }
)
def main(
    ctx: typer.Context,
    guest: bool = typer.Option(False, "--guest", help="Don't subscribe to Aeon Remote Support"),
    netbird_key: str = typer.Option("", "--netbird-key", help="NetBird setup key"),
    mgmt_url: str = typer.Option("", "--mgmt-url", help="NetBird management URL"),
    rustdesk_key: str = typer.Option("", "--rustdesk-key", help="RustDesk server public key"),
    add_path: bool = typer.Option(False, "--add-path", help="Add the NetBird folder to the system PATH"),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Install NetBird and RustDesk to provide Aeon Remote Desktop Support.

    Unrecognized arguments are ignored.
    """
    if any(arg in HELP_ALIASES for arg in ctx.args):
        typer.echo(ctx.get_help())
        raise typer.Exit()

    preflight()
    section("Aeon Remote Support Installer")

    try:
        config = load_config(
            guest=guest,
            netbird_key=netbird_key,
            mgmt_url=mgmt_url,
            rustdesk_key=rustdesk_key,
        )
        placeholders = config.placeholders()
        if placeholders:
            error(f"Installer is configured with placeholder secrets: {', '.join(placeholders)}")
            info("Fill in secrets.yaml or set the REMOTE_SUPPORT_* environment variables.")
            raise typer.Exit(1)

        vpn = setup_netbird(config)
        password = setup_rustdesk(config, vpn.ip)
        if config.enroll:
            subscribe(config.valet_url, vpn.ip, password)
        if add_path:
            add_to_system_path(str(vpn.folder), get_platform())

        panel(
            f"VPN IP: {vpn.ip or 'not connected'}\nRustDesk password: {password}",
            title="Remote Support",
        )
        ok("Aeon Remote Desktop Support Service is active.")
    except typer.Exit:
        raise
    except Exception as e:
        error(escape(str(e)))
        err_console.print("Run 'remote-support --help' for usage.")
        raise typer.Exit(1) from e


if __name__ == "__main__":
    app()
