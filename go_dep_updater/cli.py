"""CLI entry point: go-dep-updater.

Usage:
    go-dep-updater ~/src github.com/foo/bar v1.3.0
    go-dep-updater ~/src github.com/foo/bar v1.3.0 confirm-each
    go-dep-updater ~/src github.com/foo/bar v1.3.0 --dry-run --json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from go_dep_updater.config import UpdaterConfig
from go_dep_updater.core.logging import setup_logging
from go_dep_updater.exceptions import ScanError
from go_dep_updater.inspector import is_known_version
from go_dep_updater.models import UpgradeOutcome, UpgradeResult
from go_dep_updater.prompt import InteractivePrompt
from go_dep_updater.updater import summarize, update_all

CONFIRM_EACH = "confirm-each"

_OUTCOME_ICONS = {
    UpgradeOutcome.SUCCEEDED: "+",
    UpgradeOutcome.SKIPPED_NO_UPGRADE_NEEDED: "=",
    UpgradeOutcome.SKIPPED_DRY_RUN: "~",
    UpgradeOutcome.ABORTED_AFTER_VET_FAILURE: "!",
    UpgradeOutcome.ABORTED_AFTER_TEST_FAILURE: "!",
    UpgradeOutcome.ABORTED_AFTER_BUILD_FAILURE: "!",
}


def _print_summary(results: list[UpgradeResult], verbose: bool) -> None:
    # Projects that do not list the dependency are left out.
    relevant = [r for r in results if is_known_version(r.current_version)]
    click.echo(
        f"\nScanned {len(results)} project(s), {len(relevant)} pin "
        f"the dependency:"
    )
    for r in relevant:
        icon = _OUTCOME_ICONS.get(r.outcome, "-")
        failed = r.progress.failed_step
        at = f" (at {failed})" if failed else ""
        click.echo(
            f"  [{icon}] {r.project.name:30s} {r.current_version} -> "
            f"{r.target_version}  {r.outcome.value}{at}"
        )
        if verbose:
            for step in r.progress.steps:
                duration = f" ({step.duration}s)" if step.duration else ""
                click.echo(f"        {step.step}: {step.status}{duration}")

    aborted = [r for r in relevant if r.aborted]
    if aborted:
        click.echo(
            "\nLeft modified after a failed check (manual cleanup needed):",
            err=True,
        )
        for r in aborted:
            click.echo(f"  {r.project.path}", err=True)

    counts = summarize(results)
    if counts:
        click.echo("\nOutcomes:")
        for outcome, n in sorted(counts.items(), key=lambda kv: kv[0].value):
            click.echo(f"  {outcome.value}: {n}")


@click.command()
@click.argument("root", type=click.Path(file_okay=False, path_type=Path))
@click.argument("dependency")
@click.argument("target_version")
@click.argument("mode", required=False, default=None)
@click.option("--main-branch", default=None, help="Branch to upgrade on (default: master)")
@click.option("--manifest", "manifest_name", default=None, help="Manifest filename (default: go.mod)")
@click.option("--entry-point", default=None, help="File marking an executable (default: main.go)")
@click.option(
    "--exact-match",
    is_flag=True,
    default=False,
    help="Match the dependency as a whole token instead of a substring",
)
@click.option("--dry-run", is_flag=True, default=False, help="Report what would change, touch nothing")
@click.option("--timeout", type=float, default=None, help="Per-command timeout in seconds")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the summary as JSON")
@click.option("--log-format", type=click.Choice(["console", "json"]), default=None)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    root: Path,
    dependency: str,
    target_version: str,
    mode: str | None,
    main_branch: str | None,
    manifest_name: str | None,
    entry_point: str | None,
    exact_match: bool,
    dry_run: bool,
    timeout: float | None,
    as_json: bool,
    log_format: str | None,
    verbose: bool,
) -> None:
    """Upgrade DEPENDENCY to TARGET_VERSION in every Go module under ROOT.

    Pass the literal MODE ``confirm-each`` to be asked before each project.
    """
    setup_logging(level="DEBUG" if verbose else None, fmt=log_format)

    try:
        config = UpdaterConfig.from_env()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    config = config.with_overrides(
        main_branch=main_branch,
        manifest_name=manifest_name,
        entry_point=entry_point,
        timeout=timeout,
        confirm_each=mode == CONFIRM_EACH,
        exact_match=True if exact_match else None,
        dry_run=dry_run,
    )

    try:
        # Keep stdout parseable when the summary is JSON.
        decisions = InteractivePrompt(err=True) if as_json and config.confirm_each else None
        results = update_all(
            root, dependency, target_version, config=config, decisions=decisions
        )
    except ScanError as e:
        click.echo(f"Error walking the path: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        _print_summary(results, verbose)


if __name__ == "__main__":
    main()
