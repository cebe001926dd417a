"""Shared pytest fixtures for go-dep-updater tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from go_dep_updater.exceptions import CommandError

DEP = "github.com/foo/bar"

GO_MOD = f"""module example.com/app

go 1.21

require (
\t{DEP} v1.2.0
\tgithub.com/other/lib v0.4.1 // indirect
)
"""


class FakeRunner:
    """Records every command and answers from canned outputs.

    ``outputs`` maps a command prefix (tuple of args) to its stdout;
    ``failures`` maps a command prefix to the output of a failing run.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], Path]] = []
        self.outputs: dict[tuple[str, ...], str] = {}
        self.failures: dict[tuple[str, ...], str] = {}
        self.side_effects: dict[tuple[str, ...], Callable[[list[str], Path], None]] = {}

    @staticmethod
    def _lookup(table: dict[tuple[str, ...], str], args: list[str]) -> str | None:
        for prefix, value in table.items():
            if tuple(args[: len(prefix)]) == prefix:
                return value
        return None

    def run(self, args: list[str], cwd: Path) -> str:
        self.calls.append((list(args), cwd))
        for prefix, effect in self.side_effects.items():
            if tuple(args[: len(prefix)]) == prefix:
                effect(args, cwd)
        failure = self._lookup(self.failures, args)
        if failure is not None:
            raise CommandError(args, str(cwd), 1, failure)
        return self._lookup(self.outputs, args) or ""

    @property
    def commands(self) -> list[list[str]]:
        return [args for args, _ in self.calls]

    def ran(self, *prefix: str) -> bool:
        return any(tuple(args[: len(prefix)]) == prefix for args in self.commands)

    def count(self, *prefix: str) -> int:
        return sum(1 for args in self.commands if tuple(args[: len(prefix)]) == prefix)


@pytest.fixture
def runner() -> FakeRunner:
    r = FakeRunner()
    r.outputs[("git", "rev-parse")] = "master\n"
    # go build drops a binary named by -o; the tool deletes it afterwards
    r.side_effects[("go", "build")] = lambda args, cwd: (cwd / args[3]).write_text("bin")
    return r


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """A Go module directory pinning DEP at v1.2.0."""
    project = tmp_path / "app"
    project.mkdir()
    (project / "go.mod").write_text(GO_MOD)
    (project / "go.sum").write_text("")
    return project
