"""Scan a tree and run the upgrade pipeline per project."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from pathlib import Path

import structlog

from go_dep_updater.config import UpdaterConfig
from go_dep_updater.gotool import GoTool
from go_dep_updater.models import Project, UpgradeOutcome, UpgradeResult
from go_dep_updater.pipeline import UpgradePipeline
from go_dep_updater.prompt import DecisionSource, InteractivePrompt
from go_dep_updater.runner import CommandRunner, SubprocessRunner
from go_dep_updater.scanner import find_manifests
from go_dep_updater.vcs import Git

log = structlog.get_logger("go_dep_updater.updater")


def build_pipeline(
    config: UpdaterConfig,
    runner: CommandRunner | None = None,
    decisions: DecisionSource | None = None,
) -> UpgradePipeline:
    """Wire the default git/go backends around a single command runner."""
    runner = runner or SubprocessRunner(timeout=config.timeout)
    if decisions is None and config.confirm_each:
        decisions = InteractivePrompt()
    return UpgradePipeline(
        git=Git(runner),
        go=GoTool(runner),
        config=config,
        decisions=decisions,
    )


def iter_updates(
    root: Path,
    dependency: str,
    target_version: str,
    pipeline: UpgradePipeline,
    config: UpdaterConfig,
) -> Iterator[UpgradeResult]:
    """Yield one result per manifest found under *root*, in scan order.

    A :class:`ScanError` from the directory walk propagates and ends the
    iteration; per-project failures never do.
    """
    for manifest in find_manifests(root, config.manifest_name):
        project = Project.from_manifest(manifest)
        yield pipeline.run(project, dependency, target_version)


def update_all(
    root: Path,
    dependency: str,
    target_version: str,
    config: UpdaterConfig | None = None,
    runner: CommandRunner | None = None,
    decisions: DecisionSource | None = None,
) -> list[UpgradeResult]:
    config = config or UpdaterConfig()
    pipeline = build_pipeline(config, runner=runner, decisions=decisions)
    results = list(iter_updates(Path(root), dependency, target_version, pipeline, config))
    counts = summarize(results)
    log.info(
        "updater.finished",
        projects=len(results),
        **{outcome.value: n for outcome, n in counts.items()},
    )
    return results


def summarize(results: list[UpgradeResult]) -> Counter[UpgradeOutcome]:
    return Counter(r.outcome for r in results)
