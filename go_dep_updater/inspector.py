"""Read a dependency's pinned version from a manifest."""

from __future__ import annotations

from pathlib import Path

import structlog

from go_dep_updater.models import DependencyRef

log = structlog.get_logger("go_dep_updater.inspector")

VERSION_UNKNOWN = "Unknown"
VERSION_NOT_FOUND = "NotFound"


def _token_matches(token: str, dependency: str, exact: bool) -> bool:
    return token == dependency if exact else dependency in token


def find_dependency_version(content: str, dependency: str, exact: bool = False) -> str:
    """Return the token after *dependency* on the first line mentioning it.

    Matching is substring containment unless *exact* is set, in which case
    a whitespace-delimited token must equal *dependency*. Returns
    ``NotFound`` if no line matches or the match is the last token.

    Examples::

        github.com/foo/bar v1.2.0           -> v1.2.0
        require github.com/foo/bar v1.2.0   -> v1.2.0
        github.com/foo/bar                  -> NotFound
    """
    for line in content.split("\n"):
        tokens = line.split()
        if not (dependency in tokens if exact else dependency in line):
            continue

        for i, token in enumerate(tokens):
            if _token_matches(token, dependency, exact):
                if i + 1 < len(tokens):
                    return tokens[i + 1]
                return VERSION_NOT_FOUND
        # Name spans whitespace in a substring match; nothing to pair it with.
        return VERSION_NOT_FOUND

    return VERSION_NOT_FOUND


def get_dependency_version(manifest: Path, dependency: str, exact: bool = False) -> DependencyRef:
    """Read *manifest* and return the pinned version of *dependency*.

    ``Unknown`` if the file cannot be read, ``NotFound`` if the dependency
    is not listed.
    """
    try:
        content = Path(manifest).read_text(encoding="utf-8", errors="replace")
    except OSError:
        log.debug("inspector.manifest_unreadable", manifest=str(manifest), exc_info=True)
        return DependencyRef(dependency, VERSION_UNKNOWN)
    return DependencyRef(dependency, find_dependency_version(content, dependency, exact))


def is_known_version(version: str) -> bool:
    return version not in (VERSION_UNKNOWN, VERSION_NOT_FOUND)


def should_upgrade(current_version: str, target_version: str) -> bool:
    """A known version that differs from the target needs the upgrade.

    Versions are opaque strings; downgrades qualify the same as upgrades.
    """
    return is_known_version(current_version) and current_version != target_version
