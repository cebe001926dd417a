"""Single seam for running external tools (git, go)."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

from go_dep_updater.exceptions import CommandError

log = structlog.get_logger("go_dep_updater.runner")


@runtime_checkable
class CommandRunner(Protocol):
    """Interface for running an external command in a given directory.

    Implementations return the combined stdout/stderr text on success and
    raise :class:`CommandError` (carrying that text) on non-zero exit.
    """

    def run(self, args: list[str], cwd: Path) -> str: ...


class SubprocessRunner:
    """Run commands with :func:`subprocess.run`, stderr merged into stdout.

    ``cwd`` is always passed explicitly; the process working directory is
    never changed.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def run(self, args: list[str], cwd: Path) -> str:
        log.debug("runner.exec", cmd=" ".join(args), cwd=str(cwd))
        try:
            proc = subprocess.run(
                args,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            output = e.output or ""
            if isinstance(output, bytes):
                output = output.decode(errors="replace")
            raise CommandError(args, str(cwd), None, output) from e
        except OSError as e:
            # Executable missing or cwd unusable.
            raise CommandError(args, str(cwd), 127, str(e)) from e

        if proc.returncode != 0:
            raise CommandError(args, str(cwd), proc.returncode, proc.stdout)
        return proc.stdout
