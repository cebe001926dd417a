"""go-dep-updater: bump a Go dependency across every module under a directory tree."""

from go_dep_updater.config import UpdaterConfig
from go_dep_updater.models import Project, UpgradeOutcome, UpgradeResult
from go_dep_updater.updater import update_all

__all__ = ["Project", "UpdaterConfig", "UpgradeOutcome", "UpgradeResult", "update_all"]
