"""Decision sources for per-project confirmation."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO, runtime_checkable

import click

_YES_ANSWERS = ("y", "yes")


@runtime_checkable
class DecisionSource(Protocol):
    def confirm(self, question: str) -> bool: ...


class AlwaysYes:
    def confirm(self, question: str) -> bool:
        return True


class AlwaysNo:
    def confirm(self, question: str) -> bool:
        return False


class InteractivePrompt:
    """Ask on the terminal; only an exact ``y`` or ``yes`` counts as yes.

    The answer is compared case-sensitively after stripping the trailing
    newline. End of input counts as no. The question is written to stdout,
    or to stderr with *err* set (stdout then carries only the JSON summary).
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        out: TextIO | None = None,
        err: bool = False,
    ) -> None:
        self._stdin = stdin
        self._out = out
        self._err = err

    def confirm(self, question: str) -> bool:
        stdin = self._stdin or sys.stdin
        click.echo(
            click.style(f">>> {question}", fg="yellow"),
            file=self._out,
            err=self._err,
        )
        line = stdin.readline()
        if not line:
            return False
        return line.removesuffix("\n") in _YES_ANSWERS
