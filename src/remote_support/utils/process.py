"""Subprocess execution helpers."""

import subprocess
from dataclasses import dataclass

from remote_support.utils.output import raw


@dataclass
class CommandResult:
    """Result of a command execution."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        """Check if command succeeded."""
        return self.returncode == 0


class CommandError(RuntimeError):
    """Raised when a command exits with a non-zero code."""

    def __init__(self, cmd: list[str] | str, result: CommandResult):
        self.cmd = cmd
        self.result = result
        super().__init__(f"'{format_command(cmd)}' failed with exit code {result.returncode}.")


def format_command(cmd: list[str] | str) -> str:
    """Render a command for messages."""
    return cmd if isinstance(cmd, str) else subprocess.list2cmdline(cmd)


def run(
    cmd: list[str] | str,
    *,
    ignore_error: bool = False,
    verbose: bool = False,
) -> CommandResult:
    """Run a command to completion, capturing both output streams.

    A non-zero exit code raises CommandError unless ignore_error is set.
    When the command fails, or verbose is set, the captured output is
    printed before returning or raising.

    cmd may be a preformatted Windows command line for tools that parse
    their own arguments (msiexec).
    """
    try:
        proc = subprocess.run(cmd, capture_output=True, encoding="utf-8", errors="replace")
        result = CommandResult(
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
    except FileNotFoundError:
        result = CommandResult(returncode=-1, stdout="", stderr=f"Command not found: {format_command(cmd)}")

    failed = not ignore_error and not result.success

    if verbose or failed:
        if result.stdout.strip():
            raw(result.stdout)
        if result.stderr.strip():
            raw(result.stderr, stderr=True)

    if failed:
        raise CommandError(cmd, result)
    return result
