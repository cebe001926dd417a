"""UpgradePipeline: the per-project upgrade workflow."""

from __future__ import annotations

from typing import Any, Callable

import structlog

from go_dep_updater.config import UpdaterConfig
from go_dep_updater.exceptions import CommandError
from go_dep_updater.gotool import GoTool
from go_dep_updater.inspector import get_dependency_version, should_upgrade
from go_dep_updater.models import Project, UpgradeOutcome, UpgradeResult
from go_dep_updater.progress import ProgressTracker
from go_dep_updater.prompt import AlwaysYes, DecisionSource
from go_dep_updater.vcs import Git

_ABORT_MESSAGE = "aborted due to unwanted project state after update"


class UpgradePipeline:
    """Run the upgrade workflow for a single project.

    Steps run in order and the first failure ends the project:

        decide -> confirm -> clean tree -> main branch -> pull ->
        go get + tidy -> vet -> test -> build (executables only) ->
        commit -> push

    Nothing is rolled back. Failures after the dependency update (vet,
    test, build) are reported as "aborted" outcomes because the working
    tree is left modified.
    """

    def __init__(
        self,
        git: Git,
        go: GoTool,
        config: UpdaterConfig | None = None,
        decisions: DecisionSource | None = None,
        logger: Any = None,
    ) -> None:
        self._git = git
        self._go = go
        self._config = config or UpdaterConfig()
        self._decisions = decisions or AlwaysYes()
        self._log = logger or structlog.get_logger("go_dep_updater.pipeline")

    def run(self, project: Project, dependency: str, target_version: str) -> UpgradeResult:
        cfg = self._config
        log = self._log.bind(project=project.name)
        progress = ProgressTracker()

        def result(outcome: UpgradeOutcome, error: str | None = None) -> UpgradeResult:
            return UpgradeResult(
                project=project,
                outcome=outcome,
                current_version=current,
                target_version=target_version,
                error=error,
                progress=progress,
            )

        # ── decide ───────────────────────────────────────────────────────
        progress.start_step("decide")
        current = get_dependency_version(project.manifest, dependency, cfg.exact_match).version
        if not should_upgrade(current, target_version):
            progress.complete_step("decide", detail=f"current={current}")
            log.debug("pipeline.upgrade_not_needed", path=str(project.path), current=current)
            return result(UpgradeOutcome.SKIPPED_NO_UPGRADE_NEEDED)
        progress.complete_step("decide", detail=f"{current} -> {target_version}")

        if cfg.dry_run:
            log.info(
                "pipeline.would_update",
                dependency=dependency,
                current=current,
                target=target_version,
            )
            return result(UpgradeOutcome.SKIPPED_DRY_RUN)

        # ── confirm ──────────────────────────────────────────────────────
        if cfg.confirm_each:
            if not self._decisions.confirm(f"Continue with {project.path}?"):
                progress.skip_step("confirm", "declined")
                log.debug("pipeline.skipped_by_user", path=str(project.path))
                return result(UpgradeOutcome.SKIPPED_BY_USER)

        log.info(
            "pipeline.updating",
            dependency=dependency,
            current=current,
            target=target_version,
        )

        # ── clean tree ───────────────────────────────────────────────────
        log.info("pipeline.checking_uncommitted_changes")
        progress.start_step("clean_tree")
        if self._git.has_uncommitted_changes(project.path):
            progress.fail_step("clean_tree", "uncommitted changes")
            log.warning("pipeline.uncommitted_changes", detail="skipping update")
            return result(UpgradeOutcome.SKIPPED_UNCOMMITTED_CHANGES)
        progress.complete_step("clean_tree")

        # ── main branch ──────────────────────────────────────────────────
        log.info("pipeline.checking_branch", main_branch=cfg.main_branch)
        err = self._step(progress, "branch", lambda: self._ensure_main_branch(project, log))
        if err:
            log.error("pipeline.branch_failed", error=err)
            return result(UpgradeOutcome.SKIPPED_BRANCH_ERROR, err)

        # ── pull ─────────────────────────────────────────────────────────
        log.info("pipeline.pulling")
        err = self._step(progress, "pull", lambda: self._git.pull(project.path))
        if err:
            log.error("pipeline.pull_failed", error=err)
            return result(UpgradeOutcome.FAILED_PULL, err)

        # ── go get + tidy ────────────────────────────────────────────────
        log.info("pipeline.go_get", dependency=dependency, version=target_version)
        err = self._step(
            progress,
            "update",
            lambda: self._go.get(project.path, dependency, target_version),
        )
        if err:
            log.error("pipeline.update_failed", error=err)
            return result(UpgradeOutcome.FAILED_DEPENDENCY_UPDATE, err)
        log.info("pipeline.dependency_updated", dependency=dependency, version=target_version)

        # ── verify: vet, test, build ─────────────────────────────────────
        log.info("pipeline.go_vet")
        err = self._step(progress, "vet", lambda: self._go.vet(project.path))
        if err:
            log.error("pipeline.vet_failed", error=err, status=_ABORT_MESSAGE)
            return result(UpgradeOutcome.ABORTED_AFTER_VET_FAILURE, err)

        log.info("pipeline.go_test")
        err = self._step(progress, "test", lambda: self._go.test(project.path))
        if err:
            log.error("pipeline.test_failed", error=err, status=_ABORT_MESSAGE)
            return result(UpgradeOutcome.ABORTED_AFTER_TEST_FAILURE, err)

        if (project.path / cfg.entry_point).exists():
            log.info("pipeline.go_build", entry_point=cfg.entry_point)
            err = self._step(
                progress,
                "build",
                lambda: self._go.build(project.path, cfg.entry_point, cfg.build_artifact),
            )
            if err:
                log.error("pipeline.build_failed", error=err, status=_ABORT_MESSAGE)
                return result(UpgradeOutcome.ABORTED_AFTER_BUILD_FAILURE, err)
        else:
            progress.skip_step("build", f"no {cfg.entry_point}")

        # ── commit + push ────────────────────────────────────────────────
        log.info("pipeline.committing")
        message = commit_message(dependency, target_version)
        err = self._step(
            progress,
            "commit",
            lambda: self._git.commit(
                project.path, [cfg.manifest_name, cfg.lock_name], message
            ),
        )
        if err:
            log.error("pipeline.commit_failed", error=err)
            return result(UpgradeOutcome.FAILED_COMMIT, err)

        log.info("pipeline.pushing")
        err = self._step(progress, "push", lambda: self._git.push(project.path))
        if err:
            log.error("pipeline.push_failed", error=err)
            return result(UpgradeOutcome.FAILED_PUSH, err)

        log.info("pipeline.done")
        return result(UpgradeOutcome.SUCCEEDED)

    def _ensure_main_branch(self, project: Project, log: Any) -> None:
        main = self._config.main_branch
        if self._git.current_branch(project.path) != main:
            log.info("pipeline.switching_branch", main_branch=main)
            self._git.checkout(project.path, main)

    @staticmethod
    def _step(progress: ProgressTracker, name: str, action: Callable[[], None]) -> str | None:
        """Run *action* as step *name*; return the error text on failure."""
        progress.start_step(name)
        try:
            action()
        except CommandError as e:
            progress.fail_step(name, str(e))
            return str(e)
        progress.complete_step(name)
        return None


def commit_message(dependency: str, version: str) -> str:
    return f"Updated {dependency} to version {version}"
