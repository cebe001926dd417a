"""Git operations used by the upgrade pipeline."""

from __future__ import annotations

from pathlib import Path

import structlog

from go_dep_updater.exceptions import CommandError
from go_dep_updater.runner import CommandRunner

log = structlog.get_logger("go_dep_updater.vcs")


class Git:
    """Thin wrapper over the ``git`` CLI.

    Every method takes the project directory explicitly and raises
    :class:`CommandError` on failure, except :meth:`has_uncommitted_changes`.
    """

    def __init__(self, runner: CommandRunner, executable: str = "git") -> None:
        self._runner = runner
        self._git = executable

    def _run(self, project_dir: Path, *args: str) -> str:
        return self._runner.run([self._git, *args], project_dir)

    def has_uncommitted_changes(self, project_dir: Path) -> bool:
        """True if ``git status --porcelain`` reports anything.

        A failing status command also produces output (its error text), so
        a directory git cannot inspect counts as dirty.
        """
        try:
            out = self._run(project_dir, "status", "--porcelain")
        except CommandError:
            log.debug("git.status_failed", cwd=str(project_dir), exc_info=True)
            return True
        return len(out) > 0

    def current_branch(self, project_dir: Path) -> str:
        return self._run(project_dir, "rev-parse", "--abbrev-ref", "HEAD").strip()

    def checkout(self, project_dir: Path, branch: str) -> None:
        self._run(project_dir, "checkout", branch)

    def pull(self, project_dir: Path) -> None:
        self._run(project_dir, "pull")

    def commit(self, project_dir: Path, files: list[str], message: str) -> None:
        """Stage exactly *files* and commit them with *message*."""
        self._run(project_dir, "add", *files)
        self._run(project_dir, "commit", "-m", message)

    def push(self, project_dir: Path) -> None:
        self._run(project_dir, "push")
