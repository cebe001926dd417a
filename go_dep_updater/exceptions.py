"""Custom exceptions for go-dep-updater."""

from __future__ import annotations


class UpdaterError(Exception):
    """Base exception for all updater errors."""


class CommandError(UpdaterError):
    """Raised when an external command exits non-zero (or times out).

    The combined stdout/stderr of the command is kept on ``output`` and
    embedded in the message.
    """

    def __init__(
        self,
        args: list[str],
        cwd: str,
        returncode: int | None,
        output: str,
    ):
        self.cmd = list(args)
        self.cwd = cwd
        self.returncode = returncode
        self.output = output
        status = "timed out" if returncode is None else f"exit {returncode}"
        super().__init__(f"{' '.join(self.cmd)} failed ({status}): {output.strip()}")


class ScanError(UpdaterError):
    """Raised when the directory walk cannot continue."""
