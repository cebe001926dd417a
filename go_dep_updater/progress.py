"""Per-project record of which pipeline steps ran and how they ended."""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass
class StepRecord:
    step: str
    status: str  # "running" | "completed" | "failed" | "skipped"
    started: float | None = None
    finished: float | None = None
    note: str = ""

    @property
    def duration(self) -> float | None:
        if self.started is None or self.finished is None:
            return None
        return round(self.finished - self.started, 2)

    def to_dict(self) -> dict:
        return {
            "step": self.step,
            "status": self.status,
            "duration": self.duration,
            "note": self.note,
        }


class ProgressTracker:
    """Ordered step records for one pipeline run."""

    def __init__(self) -> None:
        self.steps: list[StepRecord] = []

    def _get(self, step: str) -> StepRecord | None:
        for record in reversed(self.steps):
            if record.step == step:
                return record
        return None

    def _finish(self, step: str, status: str, note: str) -> None:
        record = self._get(step)
        if record is not None and record.status == "running":
            record.status = status
            record.finished = time.monotonic()
            record.note = note

    def start_step(self, step: str) -> None:
        self.steps.append(StepRecord(step, "running", started=time.monotonic()))

    def complete_step(self, step: str, detail: str = "") -> None:
        self._finish(step, "completed", detail)

    def fail_step(self, step: str, error: str) -> None:
        self._finish(step, "failed", error)

    def skip_step(self, step: str, reason: str) -> None:
        self.steps.append(StepRecord(step, "skipped", note=reason))

    def status_of(self, step: str) -> str | None:
        record = self._get(step)
        return record.status if record else None

    @property
    def failed_step(self) -> str | None:
        """Name of the step that ended the run, if one failed."""
        return next((r.step for r in self.steps if r.status == "failed"), None)
