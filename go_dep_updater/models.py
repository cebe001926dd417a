"""Data models for projects and upgrade results."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from go_dep_updater.progress import ProgressTracker


@dataclass(frozen=True)
class Project:
    """A Go project discovered from its manifest file."""

    path: Path  # project directory
    manifest: Path  # e.g. <path>/go.mod

    @property
    def name(self) -> str:
        return self.path.name

    @classmethod
    def from_manifest(cls, manifest: Path) -> Project:
        return cls(path=manifest.parent, manifest=manifest)


@dataclass(frozen=True)
class DependencyRef:
    """A (name, version) pair read from a manifest line."""

    name: str
    version: str  # opaque token, or Unknown / NotFound


class UpgradeOutcome(str, enum.Enum):
    SKIPPED_NO_UPGRADE_NEEDED = "skipped-no-upgrade-needed"
    SKIPPED_DRY_RUN = "skipped-dry-run"
    SKIPPED_BY_USER = "skipped-by-user"
    SKIPPED_UNCOMMITTED_CHANGES = "skipped-uncommitted-changes"
    SKIPPED_BRANCH_ERROR = "skipped-branch-error"
    FAILED_PULL = "failed-pull"
    FAILED_DEPENDENCY_UPDATE = "failed-dependency-update"
    ABORTED_AFTER_VET_FAILURE = "aborted-after-vet-failure"
    ABORTED_AFTER_TEST_FAILURE = "aborted-after-test-failure"
    ABORTED_AFTER_BUILD_FAILURE = "aborted-after-build-failure"
    FAILED_COMMIT = "failed-commit"
    FAILED_PUSH = "failed-push"
    SUCCEEDED = "succeeded"


# Outcomes where the dependency was already updated but the tree failed
# verification and was left as-is.
ABORTED_OUTCOMES = frozenset(
    {
        UpgradeOutcome.ABORTED_AFTER_VET_FAILURE,
        UpgradeOutcome.ABORTED_AFTER_TEST_FAILURE,
        UpgradeOutcome.ABORTED_AFTER_BUILD_FAILURE,
    }
)


@dataclass
class UpgradeResult:
    """Result of running the upgrade pipeline on one project."""

    project: Project
    outcome: UpgradeOutcome
    current_version: str
    target_version: str
    error: str | None = None
    progress: ProgressTracker = field(default_factory=ProgressTracker)

    @property
    def succeeded(self) -> bool:
        return self.outcome is UpgradeOutcome.SUCCEEDED

    @property
    def aborted(self) -> bool:
        return self.outcome in ABORTED_OUTCOMES

    def to_dict(self) -> dict:
        return {
            "project": self.project.name,
            "path": str(self.project.path),
            "outcome": self.outcome.value,
            "current_version": self.current_version,
            "target_version": self.target_version,
            "error": self.error,
            "failed_step": self.progress.failed_step,
            "steps": [s.to_dict() for s in self.progress.steps],
        }
