"""Runtime configuration for the updater."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

_ENV_PREFIX = "GO_DEP_UPDATER_"

_TRUTHY = {"1", "true", "yes", "on"}


def _env(name: str, default: str) -> str:
    return os.environ.get(_ENV_PREFIX + name, default)


def _env_flag(name: str) -> bool:
    return _env(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class UpdaterConfig:
    """Knobs for scanning and the upgrade pipeline.

    Defaults match a plain Go module layout: ``go.mod``/``go.sum`` at the
    project root, ``main.go`` marking an executable, ``master`` as the
    main branch.
    """

    main_branch: str = "master"
    manifest_name: str = "go.mod"
    lock_name: str = "go.sum"
    entry_point: str = "main.go"
    build_artifact: str = "tmp-app"
    confirm_each: bool = False
    exact_match: bool = False
    dry_run: bool = False
    timeout: float | None = None  # seconds per external command; None = wait forever

    @classmethod
    def from_env(cls) -> UpdaterConfig:
        """Build a config from ``GO_DEP_UPDATER_*`` environment variables.

        Reads:
            GO_DEP_UPDATER_MAIN_BRANCH    : branch to upgrade on (default: master)
            GO_DEP_UPDATER_MANIFEST       : manifest filename (default: go.mod)
            GO_DEP_UPDATER_ENTRY_POINT    : executable marker (default: main.go)
            GO_DEP_UPDATER_EXACT_MATCH    : 1/true to match whole tokens only
            GO_DEP_UPDATER_COMMAND_TIMEOUT: seconds, unset for no timeout
        """
        timeout_raw = _env("COMMAND_TIMEOUT", "").strip()
        try:
            timeout = float(timeout_raw) if timeout_raw else None
        except ValueError:
            raise ValueError(
                f"{_ENV_PREFIX}COMMAND_TIMEOUT must be a number of seconds, got {timeout_raw!r}"
            ) from None
        return cls(
            main_branch=_env("MAIN_BRANCH", cls.main_branch),
            manifest_name=_env("MANIFEST", cls.manifest_name),
            entry_point=_env("ENTRY_POINT", cls.entry_point),
            exact_match=_env_flag("EXACT_MATCH"),
            timeout=timeout,
        )

    def with_overrides(self, **overrides) -> UpdaterConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
