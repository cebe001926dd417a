"""Go toolchain operations used by the upgrade pipeline."""

from __future__ import annotations

from pathlib import Path

from go_dep_updater.exceptions import CommandError
from go_dep_updater.runner import CommandRunner


class GoTool:
    """Thin wrapper over the ``go`` CLI. Failures raise :class:`CommandError`."""

    def __init__(self, runner: CommandRunner, executable: str = "go") -> None:
        self._runner = runner
        self._go = executable

    def _run(self, project_dir: Path, *args: str) -> str:
        return self._runner.run([self._go, *args], project_dir)

    def get(self, project_dir: Path, dependency: str, version: str) -> None:
        """Pin *dependency* to *version*, then tidy go.mod/go.sum."""
        self._run(project_dir, "get", f"{dependency}@{version}")
        self._run(project_dir, "mod", "tidy")

    def vet(self, project_dir: Path) -> None:
        self._run(project_dir, "vet", "./...")

    def test(self, project_dir: Path) -> None:
        self._run(project_dir, "test", "./...")

    def build(self, project_dir: Path, entry_point: str, artifact: str) -> None:
        """Build *entry_point* into a throwaway *artifact* and delete it."""
        self._run(project_dir, "build", "-o", artifact, entry_point)
        artifact_path = project_dir / artifact
        try:
            artifact_path.unlink()
        except OSError as e:
            raise CommandError(
                ["rm", artifact], str(project_dir), 1, f"could not remove build artifact: {e}"
            ) from e
