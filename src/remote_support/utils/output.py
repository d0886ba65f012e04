"""Rich console output helpers."""

from rich.console import Console
from rich.panel import Panel

console = Console()
err_console = Console(stderr=True)


def info(msg: str) -> None:
    """Print an info message."""
    console.print(f"[blue]INFO:[/blue] {msg}")


def ok(msg: str) -> None:
    """Print a success message."""
    console.print(f"[green]OK:[/green] {msg}")


def warn(msg: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]WARN:[/yellow] {msg}")


def error(msg: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]ERROR:[/red] {msg}")


def section(title: str) -> None:
    """Print a section header."""
    console.print(f"\n[bold]=== {title} ===[/bold]")


def panel(content: str, title: str | None = None) -> None:
    """Print content in a panel."""
    console.print(Panel(content, title=title))


def raw(text: str, *, stderr: bool = False) -> None:
    """Print captured process output without markup interpretation."""
    target = err_console if stderr else console
    target.print(text, markup=False, highlight=False)
